"""Experiment data models."""

from datetime import date, datetime

from spacebio.models.base import CamelModel


class ExperimentCreate(CamelModel):
    """Insert payload for an experiment.

    ``status`` is free text ("active", "completed", "planned", ...); only
    "active" carries meaning for the dashboard stats.
    """

    name: str
    description: str | None = None
    type: str
    status: str
    start_date: date | None = None
    end_date: date | None = None
    mission: str | None = None
    organisms: list[str] = []
    conditions: list[str] = []
    objectives: list[str] = []
    results: str | None = None
    publication_ids: list[str] = []


class Experiment(ExperimentCreate):
    """A stored experiment. Links to publications by identifier only."""

    id: str
    created_at: datetime
