"""
NASA Open API client.

Two methods:
  1. search_publications     : Publications matching a free-text query
  2. get_publication_details : A single record by NASA identifier

When the API is unreachable or answers with an unexpected shape, search falls
back to a small built-in sample of space-biology publications (unless the
client was built with ``use_fallback=False``, in which case it raises).
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from spacebio.config import get_settings
from spacebio.constants import (
    NASA_DEFAULT_LIMIT,
    NASA_DEFAULT_QUERY,
    NASA_SEARCH_URL,
    NASA_UNTITLED,
)
from spacebio.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    DataSourceError,
    RequestContext,
)
from spacebio.models.model_nasa import NasaPublication

logger = logging.getLogger("spacebio.data_sources.nasa")

_HEADERS = {"Accept": "application/json"}


class NasaClient(BaseClient):
    """Client for the NASA Open APIs publication search."""

    def __init__(
        self,
        api_key: str | None = None,
        use_fallback: bool | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        super().__init__(config)
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.nasa_api_key
        self.use_fallback = (
            use_fallback if use_fallback is not None else settings.nasa_use_fallback
        )

    @property
    def _source_name(self) -> str:
        return "nasa"

    # -- Public methods -------------------------------------------------------

    async def search_publications(
        self, query: str = NASA_DEFAULT_QUERY, limit: int = NASA_DEFAULT_LIMIT
    ) -> list[NasaPublication]:
        """Search NASA publications and normalize each result."""
        params = {"api_key": self._api_key, "query": query, "limit": str(limit)}
        context = RequestContext(
            source=self._source_name,
            method="search_publications",
            params={"query": query, "limit": limit},
        )

        try:
            result = await self._rest_get(
                NASA_SEARCH_URL, params, headers=_HEADERS, context=context
            )
        except DataSourceError as e:
            return self._fallback_or_raise(str(e))

        if not result.is_complete:
            return self._fallback_or_raise("; ".join(result.errors))

        data = result.data
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            return self._fallback_or_raise("Unexpected response format")

        publications = []
        for raw in data["results"][:limit]:
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object NASA result: %r", raw)
                continue
            publications.append(self._parse_item(raw))
        return publications

    async def get_publication_details(
        self, publication_id: str
    ) -> NasaPublication | None:
        """Fetch one record by id. Returns None on any failure."""
        url = f"{NASA_SEARCH_URL}/{publication_id}"
        context = RequestContext(
            source=self._source_name,
            method="get_publication_details",
            params={"id": publication_id},
        )
        try:
            result = await self._rest_get(
                url, {"api_key": self._api_key}, headers=_HEADERS, context=context
            )
        except DataSourceError as e:
            logger.warning("NASA lookup failed for %s: %s", publication_id, e)
            return None

        if not result.is_complete or not isinstance(result.data, dict):
            return None
        return self._parse_item(result.data)

    # -- Private helpers ------------------------------------------------------

    def _fallback_or_raise(self, reason: str) -> list[NasaPublication]:
        if not self.use_fallback:
            raise DataSourceError(self._source_name, reason)
        logger.warning("NASA API unavailable (%s); using fallback sample", reason)
        return fallback_publications()

    @classmethod
    def _parse_item(cls, raw: dict[str, Any]) -> NasaPublication:
        """Map one raw API item onto NasaPublication."""
        return NasaPublication(
            id=str(raw.get("id") or f"nasa_{uuid4().hex}"),
            title=raw.get("title") or raw.get("name") or NASA_UNTITLED,
            abstract=raw.get("abstract") or raw.get("description") or raw.get("summary"),
            authors=cls._parse_authors(raw.get("inventor") or raw.get("author")),
            published_date=raw.get("published_date") or raw.get("date"),
            doi=raw.get("doi"),
            keywords=cls._parse_keywords(raw.get("categories") or raw.get("keywords")),
            url=raw.get("url") or raw.get("link"),
        )

    @staticmethod
    def _parse_authors(raw: Any) -> list[str]:
        """Accept a single name, a list of names, or a list of {name} objects."""
        if not raw:
            return []
        if isinstance(raw, str):
            return [raw]
        if isinstance(raw, list):
            authors = []
            for author in raw:
                if isinstance(author, str):
                    authors.append(author)
                elif isinstance(author, dict):
                    authors.append(author.get("name") or "Unknown")
                else:
                    authors.append("Unknown")
            return authors
        return []

    @staticmethod
    def _parse_keywords(raw: Any) -> list[str]:
        """Accept a comma-separated string or a list of strings."""
        if not raw:
            return []
        if isinstance(raw, str):
            return [k.strip() for k in raw.split(",") if k.strip()]
        if isinstance(raw, list):
            return [str(k) for k in raw]
        return []


def fallback_publications() -> list[NasaPublication]:
    """Sample space-biology publications served when the API is unavailable."""
    return [
        NasaPublication(
            id="nasa_sb_001",
            title="Microgravity Effects on Arabidopsis Root Growth and Gene Expression",
            abstract=(
                "This study examines how microgravity conditions affect root "
                "development and gravitropic responses in Arabidopsis thaliana "
                "plants aboard the International Space Station. Results show "
                "significant alterations in root architecture and differential "
                "gene expression patterns."
            ),
            authors=["Dr. Sarah Johnson", "Dr. Michael Chen", "Dr. Elena Rodriguez"],
            published_date="2023-03-15",
            doi="10.1016/j.spaceres.2023.001",
            keywords=["microgravity", "plant biology", "gene expression", "root development"],
            url="https://ntrs.nasa.gov/api/citations/20230001",
        ),
        NasaPublication(
            id="nasa_sb_002",
            title="Protein Crystallization in Microgravity: Enhanced Structure Determination",
            abstract=(
                "Space-based protein crystallization experiments demonstrate "
                "improved crystal quality and resolution compared to Earth-based "
                "controls. This research advances our understanding of protein "
                "structure for drug development applications."
            ),
            authors=["Dr. James Wilson", "Dr. Lisa Park", "Dr. Robert Thompson"],
            published_date="2023-07-22",
            doi="10.1038/s41526-023-002",
            keywords=["protein crystallization", "microgravity", "drug development", "structural biology"],
            url="https://ntrs.nasa.gov/api/citations/20230002",
        ),
        NasaPublication(
            id="nasa_sb_003",
            title="Cellular Responses to Cosmic Radiation in Human Tissue Models",
            abstract=(
                "Investigation of cellular damage and repair mechanisms in human "
                "tissue equivalents exposed to galactic cosmic radiation. "
                "Findings inform radiation protection strategies for "
                "long-duration spaceflight missions."
            ),
            authors=["Dr. Amanda Foster", "Dr. Kevin Liu", "Dr. Rachel Adams"],
            published_date="2023-11-08",
            doi="10.1089/ast.2023.003",
            keywords=["cosmic radiation", "cellular damage", "tissue models", "radiation protection"],
            url="https://ntrs.nasa.gov/api/citations/20230003",
        ),
        NasaPublication(
            id="nasa_sb_004",
            title="Bone Tissue Engineering in Simulated Martian Gravity Conditions",
            abstract=(
                "Study of osteoblast behavior and bone formation processes under "
                "Martian gravity conditions (0.38g). Results provide insights for "
                "maintaining bone health during Mars exploration missions."
            ),
            authors=["Dr. Thomas Garcia", "Dr. Maria Santos", "Dr. David Kim"],
            published_date="2024-01-18",
            doi="10.1016/j.bone.2024.001",
            keywords=["bone tissue", "Martian gravity", "osteoblasts", "tissue engineering"],
            url="https://ntrs.nasa.gov/api/citations/20240001",
        ),
        NasaPublication(
            id="nasa_sb_005",
            title="Microbial Survival and Adaptation in Space Environment Conditions",
            abstract=(
                "Comprehensive analysis of microbial communities exposed to space "
                "environment stressors including vacuum, temperature extremes, and "
                "radiation. Implications for planetary protection and "
                "astrobiology research."
            ),
            authors=["Dr. Jennifer Wang", "Dr. Carlos Martinez", "Dr. Susan Brown"],
            published_date="2024-04-12",
            doi="10.1128/aem.2024.001",
            keywords=["microbiology", "space environment", "astrobiology", "planetary protection"],
            url="https://ntrs.nasa.gov/api/citations/20240002",
        ),
    ]
