"""Publication data models."""

from datetime import date, datetime
from typing import Any

from pydantic import Field, field_validator

from spacebio.models.base import CamelModel


class PublicationCreate(CamelModel):
    """Insert payload for a publication; the store assigns id and timestamps."""

    title: str = Field(min_length=1)
    abstract: str | None = None
    authors: list[str] = []
    published_date: date | None = None
    doi: str | None = None
    keywords: list[str] = []
    experiment_types: list[str] = []
    organisms: list[str] = []
    space_conditions: list[str] = []
    mission: str | None = None
    citation_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    ai_summary: str | None = None
    is_processed: bool = False


class Publication(PublicationCreate):
    """A stored space-biology publication."""

    id: str
    created_at: datetime
    updated_at: datetime


class PublicationUpdate(CamelModel):
    """Partial update. Only fields that were explicitly set are merged."""

    title: str | None = Field(default=None, min_length=1)
    abstract: str | None = None
    authors: list[str] | None = None
    published_date: date | None = None
    doi: str | None = None
    keywords: list[str] | None = None
    experiment_types: list[str] | None = None
    organisms: list[str] | None = None
    space_conditions: list[str] | None = None
    mission: str | None = None
    citation_count: int | None = Field(default=None, ge=0)
    view_count: int | None = Field(default=None, ge=0)
    ai_summary: str | None = None
    is_processed: bool | None = None

    @field_validator("title", "is_processed", "citation_count", "view_count")
    @classmethod
    def reject_explicit_null(cls, value: Any) -> Any:
        # Unset fields keep the default without running this validator.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
