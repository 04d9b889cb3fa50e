"""NASA publication models."""

from pydantic import BaseModel, model_validator


class NasaPublication(BaseModel):
    """A publication record as normalized from the NASA API.

    ``published_date`` is kept as the raw string the API returned; it is
    parsed when the record is turned into a store insert.
    """

    id: str = ""
    title: str = ""
    abstract: str | None = None
    authors: list[str] = []
    published_date: str | None = None
    doi: str | None = None
    keywords: list[str] = []
    url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_nones(cls, values: dict) -> dict:
        for field_name, field_info in cls.model_fields.items():
            if values.get(field_name) is None and field_info.default is not None:
                values[field_name] = field_info.default
        return values
