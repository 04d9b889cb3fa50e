"""Ingestion request/response models."""

from pydantic import Field

from spacebio.constants import NASA_DEFAULT_QUERY
from spacebio.models.base import CamelModel


class IngestRequest(CamelModel):
    query: str = NASA_DEFAULT_QUERY
    limit: int = Field(default=50, ge=1, le=500)


class IngestResult(CamelModel):
    """Outcome of one ingestion batch.

    ``total`` counts every record the source returned; ``ingested`` only the
    ones that made it into the store.
    """

    message: str
    ingested: int
    total: int = 0
