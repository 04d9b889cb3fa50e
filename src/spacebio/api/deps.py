"""Dependency injection for FastAPI routes.

The store and collaborators are built once by ``create_app`` and kept on
``app.state``; routes reach them only through these getters, so tests can
hand the app an isolated store and a stub AI.
"""

from fastapi import Depends, Path, Request

from spacebio.data_sources.nasa import NasaClient
from spacebio.exceptions import NotFoundError
from spacebio.models.publication import Publication
from spacebio.services.research_ai import ResearchAI
from spacebio.store.memory_store import MemoryStore


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_research_ai(request: Request) -> ResearchAI:
    return request.app.state.research_ai


def get_nasa_client(request: Request) -> NasaClient:
    return request.app.state.nasa_client


def get_publication_or_404(
    publication_id: str = Path(..., description="Publication identifier"),
    store: MemoryStore = Depends(get_store),
) -> Publication:
    publication = store.get_publication(publication_id)
    if publication is None:
        raise NotFoundError("Publication", publication_id)
    return publication
