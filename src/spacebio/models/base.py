"""Shared pydantic base for models exchanged with the dashboard UI."""

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire.

    Explicit ``None`` for a field that has a non-None default is replaced by
    that default, so list fields never end up null.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def coerce_nones(cls, values):
        if not isinstance(values, dict):
            return values
        values = dict(values)
        for field_name, field_info in cls.model_fields.items():
            if field_info.is_required() or field_info.default is None:
                continue
            for key in (field_name, field_info.alias):
                if key and key in values and values[key] is None:
                    values[key] = field_info.get_default(call_default_factory=True)
        return values
