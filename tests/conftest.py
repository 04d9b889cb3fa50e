"""Pytest configuration and fixtures."""

from collections.abc import Sequence
from datetime import date

import pytest

from spacebio.exceptions import ExternalServiceError
from spacebio.models.publication import Publication, PublicationCreate
from spacebio.models.research_ai import PublicationSummary, ResearchInsight
from spacebio.models.search import QueryAnalysis, SuggestedFilters
from spacebio.store.memory_store import MemoryStore


class StubResearchAI:
    """Deterministic ResearchAI: no network, records what it was asked."""

    def __init__(
        self,
        fail_summaries_for: set[str] | None = None,
        fail_insights: bool = False,
        fail_analysis: bool = False,
    ):
        self.fail_summaries_for = fail_summaries_for or set()
        self.fail_insights = fail_insights
        self.fail_analysis = fail_analysis
        self.summarized: list[str] = []
        self.insight_inputs: list[list[str]] = []

    async def summarize(self, title: str, abstract: str) -> PublicationSummary:
        self.summarized.append(title)
        if title in self.fail_summaries_for:
            raise ExternalServiceError("llm", "summary unavailable")
        return PublicationSummary(summary=f"Summary of {title}")

    async def generate_insights(
        self, publications: Sequence[Publication]
    ) -> list[ResearchInsight]:
        if self.fail_insights:
            raise ExternalServiceError("llm", "insights unavailable")
        self.insight_inputs.append([p.id for p in publications])
        if not publications:
            return []
        return [
            ResearchInsight(
                type="trend",
                title="Microgravity research is growing",
                description="More studies examine microgravity each year.",
                confidence=82,
                related_topics=["Microgravity"],
                actionable_recommendations=["Fund more ISS plant studies"],
            ),
            ResearchInsight(
                type="correlation",
                title="Radiation and cellular damage",
                description="Radiation exposure correlates with DNA damage.",
                confidence=140,
            ),
        ]

    async def analyze_query(self, query: str) -> QueryAnalysis:
        if self.fail_analysis:
            raise ExternalServiceError("llm", "analysis unavailable")
        return QueryAnalysis(
            suggested_filters=SuggestedFilters(space_conditions=["Microgravity"]),
            enhanced_query=f"{query} spaceflight",
        )


@pytest.fixture
def store() -> MemoryStore:
    """An empty, isolated store."""
    return MemoryStore()


@pytest.fixture
def stub_ai() -> StubResearchAI:
    return StubResearchAI()


@pytest.fixture
def sample_publications() -> list[PublicationCreate]:
    """Five publications with overlapping and disjoint tags."""
    return [
        PublicationCreate(
            title="Arabidopsis root growth aboard the ISS",
            abstract="Roots grown in microgravity show altered gravitropism.",
            published_date=date(2023, 3, 15),
            keywords=["microgravity", "plant biology"],
            experiment_types=["Plant Growth", "Cell Biology"],
            organisms=["Arabidopsis"],
            space_conditions=["Microgravity"],
            mission="ISS",
        ),
        PublicationCreate(
            title="Protein crystal quality in orbit",
            abstract="Crystals formed in space diffract to higher resolution.",
            published_date=date(2023, 7, 22),
            keywords=["protein crystallization"],
            experiment_types=["Protein Crystallization"],
            space_conditions=["Microgravity"],
            mission="ISS",
        ),
        PublicationCreate(
            title="Cosmic radiation damage in human tissue models",
            abstract="DNA repair pathways respond to galactic cosmic rays.",
            published_date=date(2023, 11, 8),
            keywords=["radiation protection"],
            experiment_types=["Cell Biology", "Tissue Engineering"],
            organisms=["Human cells"],
            space_conditions=["Radiation Exposure"],
        ),
        PublicationCreate(
            title="Bone formation under Martian gravity",
            abstract="Osteoblast activity at 0.38g.",
            published_date=date(2024, 1, 18),
            keywords=["bone", "tissue engineering"],
            experiment_types=["Tissue Engineering"],
            organisms=["Mouse tissue"],
            mission="Mars Mission",
        ),
        PublicationCreate(
            title="Seedling growth in simulated weightlessness",
            abstract=None,
            keywords=["clinostat"],
            experiment_types=["Plant Growth"],
            organisms=["Arabidopsis"],
            space_conditions=["Microgravity"],
        ),
    ]


@pytest.fixture
def populated_store(
    store: MemoryStore, sample_publications: list[PublicationCreate]
) -> MemoryStore:
    for data in sample_publications:
        store.create_publication(data)
    return store
