"""
Summaries, cross-publication insights and search-query analysis.

``ResearchAI`` is the capability the rest of the app depends on.
``LLMResearchAI`` backs it with the Anthropic Messages API; tests swap in a
deterministic stub.

Every failure of the model call (API error, empty reply, unparsable JSON)
surfaces as ExternalServiceError. Callers decide whether to degrade.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from spacebio.constants import INSIGHT_PUBLICATION_LIMIT
from spacebio.exceptions import ExternalServiceError
from spacebio.models.publication import Publication
from spacebio.models.research_ai import PublicationSummary, ResearchInsight
from spacebio.models.search import QueryAnalysis, SuggestedFilters
from spacebio.services.llm import parse_llm_json, query_llm, query_small_llm

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM = (
    "You are an expert in space biology and NASA research. Analyze scientific "
    "publications with focus on their relevance to human space exploration and "
    "biological adaptations to space environments."
)

SUMMARY_PROMPT = (
    "Analyze this NASA space biology research publication and provide a "
    "comprehensive summary. Focus on the biological implications of space "
    "conditions and relevance to future space exploration missions.\n\n"
    "Publication content:\n"
    "Title: {title}\n\n"
    "Abstract: {abstract}\n\n"
    "Respond with ONLY a JSON object with this structure:\n"
    "{{\n"
    '  "summary": "Brief 2-3 sentence summary of the main findings",\n'
    '  "keyFindings": ["3-5 key discoveries or results"],\n'
    '  "implications": ["2-4 implications for space exploration or biology"],\n'
    '  "methodology": "Brief description of experimental approach",\n'
    '  "significance": "Significance for the space biology field, 1-10"\n'
    "}}"
)

INSIGHTS_SYSTEM = (
    "You are an expert in space biology research analysis. Generate actionable "
    "insights from NASA research publications that can guide future space "
    "exploration missions."
)

INSIGHTS_PROMPT = (
    "Analyze these NASA space biology publications and identify "
    "cross-experiment insights, trends, and correlations that could inform "
    "future space exploration missions.\n\n"
    "Publications data:\n{publications}\n\n"
    "Generate insights focusing on:\n"
    "1. Correlations between experimental conditions and biological outcomes\n"
    "2. Trends in research over time and emerging areas\n"
    "3. Recommendations for future experiments or mission planning\n\n"
    "Respond with ONLY a JSON object:\n"
    "{{\n"
    '  "insights": [\n'
    "    {{\n"
    '      "type": "correlation|trend|recommendation",\n'
    '      "title": "Insight title",\n'
    '      "description": "Detailed description of the insight",\n'
    '      "confidence": "Confidence level 0-100",\n'
    '      "relatedTopics": ["Related research topics"],\n'
    '      "actionableRecommendations": ["Specific recommendations"]\n'
    "    }}\n"
    "  ]\n"
    "}}"
)

QUERY_SYSTEM = (
    "You are an expert in space biology research. Help users find relevant "
    "NASA publications by analyzing their search queries."
)

QUERY_PROMPT = (
    "Analyze this search query for NASA space biology research and suggest "
    "relevant filters and an enhanced search query.\n\n"
    'User query: "{query}"\n\n'
    "Provide suggestions for:\n"
    '- Experiment types (e.g., "Cell Biology", "Plant Growth", '
    '"Protein Crystallization", "Microbiology")\n'
    '- Organisms (e.g., "C. elegans", "Arabidopsis", "E. coli", "Mouse tissue")\n'
    '- Space conditions (e.g., "Microgravity", "Radiation Exposure", '
    '"Temperature Variation")\n\n'
    "Respond with ONLY a JSON object:\n"
    "{{\n"
    '  "suggestedFilters": {{\n'
    '    "experimentTypes": [],\n'
    '    "organisms": [],\n'
    '    "spaceConditions": []\n'
    "  }},\n"
    '  "enhancedQuery": "expanded and refined search query"\n'
    "}}"
)


class ResearchAI(Protocol):
    """Text-generation capability used by ingestion, insights and search."""

    async def summarize(self, title: str, abstract: str) -> PublicationSummary: ...

    async def generate_insights(
        self, publications: Sequence[Publication]
    ) -> list[ResearchInsight]: ...

    async def analyze_query(self, query: str) -> QueryAnalysis: ...


def publication_digest(publication: Publication) -> dict[str, Any]:
    """The subset of a publication sent to the model for insight generation."""
    return {
        "title": publication.title,
        "experimentTypes": publication.experiment_types,
        "organisms": publication.organisms,
        "spaceConditions": publication.space_conditions,
        "mission": publication.mission,
        "aiSummary": publication.ai_summary,
    }


class LLMResearchAI:
    """ResearchAI backed by the Anthropic Messages API."""

    async def summarize(self, title: str, abstract: str) -> PublicationSummary:
        prompt = SUMMARY_PROMPT.format(title=title, abstract=abstract)
        result = parse_llm_json(await query_llm(prompt, system=SUMMARY_SYSTEM))
        return _validate(PublicationSummary, result)

    async def generate_insights(
        self, publications: Sequence[Publication]
    ) -> list[ResearchInsight]:
        """Ask for insights across at most INSIGHT_PUBLICATION_LIMIT publications."""
        if not publications:
            return []

        digest = [
            publication_digest(p) for p in publications[:INSIGHT_PUBLICATION_LIMIT]
        ]
        prompt = INSIGHTS_PROMPT.format(publications=json.dumps(digest, indent=2))
        result = parse_llm_json(await query_llm(prompt, system=INSIGHTS_SYSTEM))

        raw_insights = result.get("insights") or []
        if not isinstance(raw_insights, list):
            raise ExternalServiceError("llm", "'insights' is not a list")
        insights = [
            _validate(ResearchInsight, raw)
            for raw in raw_insights
            if isinstance(raw, dict)
        ]
        logger.info(
            "Generated %d insights from %d publications", len(insights), len(digest)
        )
        return insights

    async def analyze_query(self, query: str) -> QueryAnalysis:
        prompt = QUERY_PROMPT.format(query=query)
        result = parse_llm_json(await query_small_llm(prompt, system=QUERY_SYSTEM))
        suggested = result.get("suggestedFilters")
        enhanced = result.get("enhancedQuery")
        return QueryAnalysis(
            suggested_filters=_validate(
                SuggestedFilters, suggested if isinstance(suggested, dict) else {}
            ),
            enhanced_query=enhanced if isinstance(enhanced, str) and enhanced else query,
        )


def _validate(model, raw: dict[str, Any]):
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise ExternalServiceError("llm", f"Unexpected {model.__name__} shape: {e}")
