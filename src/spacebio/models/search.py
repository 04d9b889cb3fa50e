"""Search, filter and aggregate models."""

from datetime import date

from spacebio.models.base import CamelModel
from spacebio.models.publication import Publication


class DateRange(CamelModel):
    """Inclusive publication date bounds. Either side may be open."""

    start: date | None = None
    end: date | None = None

    @property
    def is_active(self) -> bool:
        return self.start is not None or self.end is not None


class SearchFilters(CamelModel):
    """Query descriptor for the filter engine. Not a stored entity.

    Allow-lists are OR-combined within a field and AND-combined across fields.
    Empty or missing fields impose no constraint.
    """

    query: str | None = None
    experiment_types: list[str] = []
    organisms: list[str] = []
    space_conditions: list[str] = []
    mission: str | None = None
    date_range: DateRange | None = None


class FilterOption(CamelModel):
    value: str
    count: int


class FilterOptions(CamelModel):
    """Global facet counts used to populate the filter sidebar."""

    experiment_types: list[FilterOption] = []
    organisms: list[FilterOption] = []
    space_conditions: list[FilterOption] = []
    missions: list[FilterOption] = []


class Stats(CamelModel):
    total_publications: int
    active_experiments: int
    research_areas: int
    ai_insights: int


class SuggestedFilters(CamelModel):
    experiment_types: list[str] = []
    organisms: list[str] = []
    space_conditions: list[str] = []


class QueryAnalysis(CamelModel):
    """LLM reading of a free-text search query."""

    suggested_filters: SuggestedFilters = SuggestedFilters()
    enhanced_query: str

    @classmethod
    def fallback(cls, query: str) -> "QueryAnalysis":
        """Empty suggestions and the query echoed back verbatim."""
        return cls(suggested_filters=SuggestedFilters(), enhanced_query=query)


class SearchResult(CamelModel):
    publications: list[Publication] = []
    suggested_filters: SuggestedFilters = SuggestedFilters()
    enhanced_query: str
