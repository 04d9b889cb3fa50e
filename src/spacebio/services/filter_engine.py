"""Predicate filtering and ordering over a publication collection."""

from collections.abc import Iterable
from datetime import date

from spacebio.models.publication import Publication
from spacebio.models.search import DateRange, SearchFilters


def matches_query(publication: Publication, query: str) -> bool:
    """Case-insensitive substring match on title, abstract or any keyword."""
    needle = query.lower()
    if needle in publication.title.lower():
        return True
    if publication.abstract and needle in publication.abstract.lower():
        return True
    return any(needle in keyword.lower() for keyword in publication.keywords)


def intersects(values: list[str], allowed: list[str]) -> bool:
    return not set(values).isdisjoint(allowed)


def within_range(published: date | None, date_range: DateRange) -> bool:
    """Inclusive bounds check. Undated records never fall inside a range."""
    if published is None:
        return False
    if date_range.start is not None and published < date_range.start:
        return False
    if date_range.end is not None and published > date_range.end:
        return False
    return True


def matches(publication: Publication, filters: SearchFilters) -> bool:
    """True if the publication passes every active predicate in filters."""
    if filters.query and not matches_query(publication, filters.query):
        return False
    if filters.experiment_types and not intersects(
        publication.experiment_types, filters.experiment_types
    ):
        return False
    if filters.organisms and not intersects(publication.organisms, filters.organisms):
        return False
    if filters.space_conditions and not intersects(
        publication.space_conditions, filters.space_conditions
    ):
        return False
    if filters.mission and publication.mission != filters.mission:
        return False
    if filters.date_range is not None and filters.date_range.is_active:
        if not within_range(publication.published_date, filters.date_range):
            return False
    return True


def sort_by_published_date(publications: Iterable[Publication]) -> list[Publication]:
    """Newest first; undated records sink to the end in insertion order."""
    return sorted(
        publications,
        key=lambda pub: pub.published_date or date.min,
        reverse=True,
    )


def apply_filters(
    publications: Iterable[Publication], filters: SearchFilters | None = None
) -> list[Publication]:
    """Return the publications matching filters, newest first.

    The sort is stable, so publications sharing a date keep the order they
    were given in.
    """
    if filters is None:
        return sort_by_published_date(publications)
    return sort_by_published_date(pub for pub in publications if matches(pub, filters))
