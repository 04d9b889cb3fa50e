"""Ingestion of NASA publications into the store.

Per record: validate, categorize, summarize, insert. A failed summary only
leaves ``ai_summary`` empty; any other failure skips that record. Neither
aborts the batch.
"""

import logging

from spacebio.data_sources.nasa import NasaClient
from spacebio.exceptions import ExternalServiceError
from spacebio.helpers.categorize import categorize_publication
from spacebio.models.ingestion import IngestResult
from spacebio.models.model_nasa import NasaPublication
from spacebio.models.publication import Publication, PublicationCreate
from spacebio.services.research_ai import ResearchAI
from spacebio.store.memory_store import MemoryStore

logger = logging.getLogger(__name__)


def to_publication_create(record: NasaPublication) -> PublicationCreate:
    """Build a store insert from a NASA record, tagged by the categorizer.

    Raises pydantic.ValidationError for records that cannot be stored
    (empty title, unparsable date, ...).
    """
    categories = categorize_publication(record.title, record.abstract, record.keywords)
    return PublicationCreate(
        title=record.title,
        abstract=record.abstract,
        authors=record.authors,
        # Keep the calendar date of ISO timestamps ("2023-03-15T00:00:00Z").
        published_date=record.published_date[:10] if record.published_date else None,
        doi=record.doi,
        keywords=record.keywords,
        experiment_types=categories.experiment_types,
        organisms=categories.organisms,
        space_conditions=categories.space_conditions,
        mission=categories.mission,
        is_processed=True,
    )


async def summarize_or_none(
    research_ai: ResearchAI, title: str, abstract: str | None
) -> str | None:
    try:
        summary = await research_ai.summarize(title, abstract or "")
    except ExternalServiceError as e:
        logger.warning("Failed to generate AI summary for %r: %s", title, e)
        return None
    return summary.summary


async def ingest_record(
    store: MemoryStore, research_ai: ResearchAI, record: NasaPublication
) -> Publication:
    data = to_publication_create(record)
    data.ai_summary = await summarize_or_none(research_ai, data.title, data.abstract)
    return store.create_publication(data)


async def ingest_publications(
    store: MemoryStore,
    nasa_client: NasaClient,
    research_ai: ResearchAI,
    query: str,
    limit: int,
) -> IngestResult:
    """Fetch, tag, summarize and store NASA publications for query."""
    logger.info('Ingesting NASA publications for query "%s" limit=%d', query, limit)
    records = await nasa_client.search_publications(query, limit)

    if not records:
        return IngestResult(message="No publications found from NASA API", ingested=0)

    ingested = 0
    for record in records:
        try:
            await ingest_record(store, research_ai, record)
        except Exception:
            logger.exception("Error processing publication %s", record.id)
            continue
        ingested += 1

    logger.info("Ingested %d of %d NASA publications", ingested, len(records))
    return IngestResult(
        message=f"Successfully ingested {ingested} publications from NASA",
        ingested=ingested,
        total=len(records),
    )
