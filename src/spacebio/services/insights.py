"""Generation and persistence of cross-publication AI insights."""

import logging

from spacebio.constants import INSIGHT_PUBLICATION_LIMIT
from spacebio.models.insight import AiInsight, AiInsightCreate
from spacebio.services.research_ai import ResearchAI
from spacebio.store.memory_store import MemoryStore

logger = logging.getLogger(__name__)


async def generate_insights(
    store: MemoryStore, research_ai: ResearchAI
) -> list[AiInsight]:
    """Generate insights over the newest publications and store each one.

    Collaborator failures propagate to the caller.
    """
    publications = store.list_publications()[:INSIGHT_PUBLICATION_LIMIT]
    generated = await research_ai.generate_insights(publications)
    related_ids = [pub.id for pub in publications]

    stored = [
        store.create_insight(
            AiInsightCreate(
                type=insight.type,
                title=insight.title,
                description=insight.description,
                confidence=insight.confidence,
                related_publications=related_ids,
                metadata={
                    "relatedTopics": insight.related_topics,
                    "actionableRecommendations": insight.actionable_recommendations,
                },
            )
        )
        for insight in generated
    ]
    logger.info("Stored %d AI insights", len(stored))
    return stored
