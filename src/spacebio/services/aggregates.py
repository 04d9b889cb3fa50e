"""Facet and summary counters over the live store contents."""

from collections import Counter
from collections.abc import Iterable, Sequence

from spacebio.constants import ACTIVE_EXPERIMENT_STATUS
from spacebio.models.experiment import Experiment
from spacebio.models.insight import AiInsight
from spacebio.models.publication import Publication
from spacebio.models.search import FilterOption, FilterOptions, Stats


def count_values(tag_lists: Iterable[Iterable[str]]) -> list[FilterOption]:
    """Count, per distinct value, how many tag lists contain it.

    Each list counts at most once per value. Output follows first-seen order.
    """
    counts: Counter[str] = Counter()
    for tags in tag_lists:
        counts.update(dict.fromkeys(tags, 1))
    return [FilterOption(value=value, count=count) for value, count in counts.items()]


def compute_filter_options(publications: Sequence[Publication]) -> FilterOptions:
    """Facet counts over the whole collection, ignoring any applied filters."""
    return FilterOptions(
        experiment_types=count_values(pub.experiment_types for pub in publications),
        organisms=count_values(pub.organisms for pub in publications),
        space_conditions=count_values(pub.space_conditions for pub in publications),
        missions=count_values(
            [pub.mission] for pub in publications if pub.mission
        ),
    )


def compute_stats(
    publications: Sequence[Publication],
    experiments: Sequence[Experiment],
    insights: Sequence[AiInsight],
) -> Stats:
    research_areas = {area for pub in publications for area in pub.experiment_types}
    active = sum(1 for exp in experiments if exp.status == ACTIVE_EXPERIMENT_STATUS)
    return Stats(
        total_publications=len(publications),
        active_experiments=active,
        research_areas=len(research_areas),
        ai_insights=len(insights),
    )
