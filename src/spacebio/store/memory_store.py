"""
In-memory store for publications, experiments and AI insights.

One instance owns every record. Other records refer to each other by
identifier only. All access is serialized through a single re-entrant lock,
so a write is visible to the very next read.

Callers only ever receive copies; a stored record changes only through
``update_publication``.
"""

import logging
import threading
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from spacebio.exceptions import ValidationError
from spacebio.models.experiment import Experiment, ExperimentCreate
from spacebio.models.insight import AiInsight, AiInsightCreate
from spacebio.models.publication import (
    Publication,
    PublicationCreate,
    PublicationUpdate,
)
from spacebio.models.search import FilterOptions, SearchFilters, Stats
from spacebio.services.aggregates import compute_filter_options, compute_stats
from spacebio.services.filter_engine import apply_filters

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _copy(record: RecordT | None) -> RecordT | None:
    return record.model_copy(deep=True) if record is not None else None


def _copy_all(records: Iterable[RecordT]) -> list[RecordT]:
    return [record.model_copy(deep=True) for record in records]


class MemoryStore:
    """Keyed in-memory store. Construct one per app (or per test)."""

    def __init__(self) -> None:
        self._publications: dict[str, Publication] = {}
        self._experiments: dict[str, Experiment] = {}
        self._insights: dict[str, AiInsight] = {}
        self._lock = threading.RLock()

    # -- Publications -------------------------------------------------------

    def create_publication(self, data: PublicationCreate) -> Publication:
        """Insert a publication with a fresh id and creation/update timestamps."""
        now = _now()
        publication = Publication(
            **data.model_dump(), id=_new_id(), created_at=now, updated_at=now
        )
        with self._lock:
            self._publications[publication.id] = publication
        logger.debug("Created publication %s", publication.id)
        return _copy(publication)

    def get_publication(self, publication_id: str) -> Publication | None:
        with self._lock:
            return _copy(self._publications.get(publication_id))

    def update_publication(
        self, publication_id: str, updates: PublicationUpdate | dict[str, Any]
    ) -> Publication | None:
        """Shallow-merge the explicitly set fields of updates onto a publication.

        A list in updates replaces the stored list. ``updated_at`` is always
        refreshed. Returns None, and stores nothing, for an unknown id.
        Raises ValidationError for a malformed update.
        """
        try:
            if not isinstance(updates, PublicationUpdate):
                updates = PublicationUpdate.model_validate(updates)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid publication update: {e}") from e
        changes = updates.model_dump(exclude_unset=True)

        with self._lock:
            existing = self._publications.get(publication_id)
            if existing is None:
                return None
            try:
                updated = Publication.model_validate(
                    {**existing.model_dump(), **changes, "updated_at": _now()}
                )
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid publication update: {e}") from e
            self._publications[publication_id] = updated
        logger.debug(
            "Updated publication %s fields=%s", publication_id, sorted(changes)
        )
        return _copy(updated)

    def list_publications(
        self, filters: SearchFilters | None = None
    ) -> list[Publication]:
        """Publications matching filters, newest published first."""
        with self._lock:
            snapshot = list(self._publications.values())
        return _copy_all(apply_filters(snapshot, filters))

    def search_publications(self, query: str) -> list[Publication]:
        return self.list_publications(SearchFilters(query=query))

    # -- Experiments --------------------------------------------------------

    def create_experiment(self, data: ExperimentCreate) -> Experiment:
        experiment = Experiment(**data.model_dump(), id=_new_id(), created_at=_now())
        with self._lock:
            self._experiments[experiment.id] = experiment
        return _copy(experiment)

    def get_experiment(self, experiment_id: str) -> Experiment | None:
        with self._lock:
            return _copy(self._experiments.get(experiment_id))

    def list_experiments(self) -> list[Experiment]:
        """Experiments by start date, latest first; undated ones last."""
        with self._lock:
            snapshot = list(self._experiments.values())
        return _copy_all(
            sorted(snapshot, key=lambda e: e.start_date or date.min, reverse=True)
        )

    # -- AI insights --------------------------------------------------------

    def create_insight(self, data: AiInsightCreate) -> AiInsight:
        insight = AiInsight(**data.model_dump(), id=_new_id(), created_at=_now())
        with self._lock:
            self._insights[insight.id] = insight
        return _copy(insight)

    def list_insights(self) -> list[AiInsight]:
        """Insights, most recently created first."""
        with self._lock:
            snapshot = list(self._insights.values())
        return _copy_all(sorted(snapshot, key=lambda i: i.created_at, reverse=True))

    # -- Aggregates ---------------------------------------------------------

    def get_stats(self) -> Stats:
        with self._lock:
            return compute_stats(
                list(self._publications.values()),
                list(self._experiments.values()),
                list(self._insights.values()),
            )

    def get_filter_options(self) -> FilterOptions:
        with self._lock:
            snapshot = list(self._publications.values())
        return compute_filter_options(snapshot)
