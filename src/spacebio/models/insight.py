"""AI insight data models."""

from datetime import datetime
from typing import Any, Literal

from pydantic import field_validator

from spacebio.models.base import CamelModel

InsightType = Literal["correlation", "trend", "recommendation"]


def clamp(value: Any, low: int, high: int, default: int) -> int:
    """Coerce ``value`` to an int inside [low, high]; ``default`` if unparsable."""
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        number = default
    return max(low, min(high, number))


class AiInsightCreate(CamelModel):
    """Insert payload for a generated insight."""

    type: InsightType
    title: str
    description: str
    confidence: int = 0
    related_publications: list[str] = []
    related_experiments: list[str] = []
    metadata: dict[str, Any] = {}

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> int:
        return clamp(value, 0, 100, default=0)


class AiInsight(AiInsightCreate):
    """A stored cross-publication insight."""

    id: str
    created_at: datetime
