"""
Pydantic models for LLM output.

These are the data contracts between the research AI adapter and the rest of
the app. Callers never see raw model responses.
"""

from typing import Any

from pydantic import field_validator

from spacebio.constants import (
    DEFAULT_INSIGHT_CONFIDENCE,
    DEFAULT_INSIGHT_TYPE,
    DEFAULT_SIGNIFICANCE,
)
from spacebio.models.base import CamelModel
from spacebio.models.insight import InsightType, clamp


class PublicationSummary(CamelModel):
    """Structured summary of a single publication."""

    summary: str = "Summary not available"
    key_findings: list[str] = []
    implications: list[str] = []
    methodology: str = "Methodology not specified"
    significance: int = DEFAULT_SIGNIFICANCE  # 1-10

    @field_validator("significance", mode="before")
    @classmethod
    def clamp_significance(cls, value: Any) -> int:
        return clamp(value, 1, 10, default=DEFAULT_SIGNIFICANCE)


class ResearchInsight(CamelModel):
    """A cross-publication insight as returned by the LLM."""

    type: InsightType = DEFAULT_INSIGHT_TYPE
    title: str = "Research Insight"
    description: str = ""
    confidence: int = DEFAULT_INSIGHT_CONFIDENCE  # 0-100
    related_topics: list[str] = []
    actionable_recommendations: list[str] = []

    @field_validator("type", mode="before")
    @classmethod
    def default_unknown_type(cls, value: Any) -> str:
        if value in ("correlation", "trend", "recommendation"):
            return value
        return DEFAULT_INSIGHT_TYPE

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> int:
        return clamp(value, 0, 100, default=DEFAULT_INSIGHT_CONFIDENCE)
