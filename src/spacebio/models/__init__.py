"""Data models for SpaceBio."""

from spacebio.models.experiment import Experiment, ExperimentCreate
from spacebio.models.insight import AiInsight, AiInsightCreate
from spacebio.models.publication import (
    Publication,
    PublicationCreate,
    PublicationUpdate,
)
from spacebio.models.search import FilterOptions, SearchFilters, Stats

__all__ = [
    "AiInsight",
    "AiInsightCreate",
    "Experiment",
    "ExperimentCreate",
    "FilterOptions",
    "Publication",
    "PublicationCreate",
    "PublicationUpdate",
    "SearchFilters",
    "Stats",
]
