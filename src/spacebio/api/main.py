"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spacebio import __version__
from spacebio.api.errors import register_exception_handlers
from spacebio.api.routes import router
from spacebio.data_sources.nasa import NasaClient
from spacebio.services.research_ai import LLMResearchAI, ResearchAI
from spacebio.store.memory_store import MemoryStore

logger = logging.getLogger(__name__)


def create_app(
    store: MemoryStore | None = None,
    research_ai: ResearchAI | None = None,
    nasa_client: NasaClient | None = None,
) -> FastAPI:
    """Build the API around an explicitly provided store and collaborators.

    Anything not supplied gets a fresh default: an empty MemoryStore, the
    Anthropic-backed research AI, and a NasaClient from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.nasa_client.close()
        logger.info("NASA client closed")

    app = FastAPI(
        title="SpaceBio API",
        description="Space biology publication dashboard with AI summaries and insights",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else MemoryStore()
    app.state.research_ai = research_ai if research_ai is not None else LLMResearchAI()
    app.state.nasa_client = nasa_client if nasa_client is not None else NasaClient()

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
