"""Free-text search with LLM filter suggestions."""

import logging

from spacebio.exceptions import ExternalServiceError
from spacebio.models.search import QueryAnalysis, SearchResult
from spacebio.services.research_ai import ResearchAI
from spacebio.store.memory_store import MemoryStore

logger = logging.getLogger(__name__)


async def search_publications(
    store: MemoryStore, research_ai: ResearchAI, query: str
) -> SearchResult:
    """Match the query against the store and ask the model for suggestions.

    A failed analysis degrades to empty suggestions and the query verbatim.
    """
    publications = store.search_publications(query)
    try:
        analysis = await research_ai.analyze_query(query)
    except ExternalServiceError as e:
        logger.warning("Query analysis failed for %r: %s", query, e)
        analysis = QueryAnalysis.fallback(query)

    return SearchResult(
        publications=publications,
        suggested_filters=analysis.suggested_filters,
        enhanced_query=analysis.enhanced_query,
    )
