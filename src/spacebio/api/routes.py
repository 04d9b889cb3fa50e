"""Dashboard API routes.

Publications, search, AI insights, stats, filter options, experiments and
NASA ingestion. Store calls are in-memory and synchronous; only the NASA and
LLM collaborators await network I/O.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query

from spacebio.api.deps import (
    get_nasa_client,
    get_publication_or_404,
    get_research_ai,
    get_store,
)
from spacebio.api.errors import handle_route_errors
from spacebio.data_sources.nasa import NasaClient
from spacebio.exceptions import ValidationError
from spacebio.models.experiment import Experiment
from spacebio.models.ingestion import IngestRequest, IngestResult
from spacebio.models.insight import AiInsight
from spacebio.models.publication import Publication
from spacebio.models.search import (
    DateRange,
    FilterOptions,
    SearchFilters,
    SearchResult,
    Stats,
)
from spacebio.services.ingestion import ingest_publications
from spacebio.services.insights import generate_insights
from spacebio.services.research_ai import ResearchAI
from spacebio.services.search import search_publications
from spacebio.store.memory_store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# -- Publications -----------------------------------------------------------


@router.get("/publications", response_model=list[Publication])
@handle_route_errors("Failed to fetch publications")
async def list_publications(
    query: str | None = None,
    experiment_types: list[str] = Query(default=[], alias="experimentTypes"),
    organisms: list[str] = Query(default=[]),
    space_conditions: list[str] = Query(default=[], alias="spaceConditions"),
    mission: str | None = None,
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    store: MemoryStore = Depends(get_store),
):
    """List publications, newest first. Repeat list parameters to allow several values."""
    date_range = None
    if start_date is not None or end_date is not None:
        date_range = DateRange(start=start_date, end=end_date)

    filters = SearchFilters(
        query=query,
        experiment_types=experiment_types,
        organisms=organisms,
        space_conditions=space_conditions,
        mission=mission,
        date_range=date_range,
    )
    return store.list_publications(filters)


@router.get("/publications/{publication_id}", response_model=Publication)
async def get_publication(publication: Publication = Depends(get_publication_or_404)):
    return publication


# -- Search -----------------------------------------------------------------


@router.get("/search", response_model=SearchResult)
@handle_route_errors("Search failed")
async def search(
    q: str | None = None,
    store: MemoryStore = Depends(get_store),
    research_ai: ResearchAI = Depends(get_research_ai),
):
    if not q or not q.strip():
        raise ValidationError("Search query required")
    return await search_publications(store, research_ai, q)


# -- AI insights ------------------------------------------------------------


@router.get("/ai-insights", response_model=list[AiInsight])
@handle_route_errors("Failed to fetch AI insights")
async def list_ai_insights(store: MemoryStore = Depends(get_store)):
    return store.list_insights()


@router.post("/ai-insights/generate", response_model=list[AiInsight])
@handle_route_errors("Failed to generate AI insights")
async def generate_ai_insights(
    store: MemoryStore = Depends(get_store),
    research_ai: ResearchAI = Depends(get_research_ai),
):
    return await generate_insights(store, research_ai)


# -- Aggregates -------------------------------------------------------------


@router.get("/stats", response_model=Stats)
@handle_route_errors("Failed to fetch statistics")
async def get_stats(store: MemoryStore = Depends(get_store)):
    return store.get_stats()


@router.get("/filter-options", response_model=FilterOptions)
@handle_route_errors("Failed to fetch filter options")
async def get_filter_options(store: MemoryStore = Depends(get_store)):
    return store.get_filter_options()


# -- Experiments ------------------------------------------------------------


@router.get("/experiments", response_model=list[Experiment])
@handle_route_errors("Failed to fetch experiments")
async def list_experiments(store: MemoryStore = Depends(get_store)):
    return store.list_experiments()


# -- Ingestion --------------------------------------------------------------


@router.post("/ingest-nasa-data", response_model=IngestResult)
@handle_route_errors("Failed to ingest NASA data")
async def ingest_nasa_data(
    payload: IngestRequest | None = None,
    store: MemoryStore = Depends(get_store),
    nasa_client: NasaClient = Depends(get_nasa_client),
    research_ai: ResearchAI = Depends(get_research_ai),
):
    payload = payload or IngestRequest()
    return await ingest_publications(
        store, nasa_client, research_ai, payload.query, payload.limit
    )
