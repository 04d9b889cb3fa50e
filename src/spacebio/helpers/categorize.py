"""Keyword-based tagging of external publications.

A best-effort heuristic: plain substring containment over the lower-cased
title, abstract and keywords. False positives ("micro" in "microscope") are
expected.
"""

from pydantic import BaseModel

from spacebio.constants import (
    EXPERIMENT_TYPE_RULES,
    MISSION_RULES,
    ORGANISM_RULES,
    SPACE_CONDITION_RULES,
)


class Categories(BaseModel):
    experiment_types: list[str] = []
    organisms: list[str] = []
    space_conditions: list[str] = []
    mission: str | None = None


def build_content(
    title: str | None, abstract: str | None, keywords: list[str] | None
) -> str:
    """Join title, abstract and keywords into one lower-cased string."""
    parts = [title or "", abstract or "", " ".join(keywords or [])]
    return " ".join(parts).lower()


def match_all(content: str, rules: list[tuple[tuple[str, ...], str]]) -> list[str]:
    """Return the label of every rule with at least one term in content."""
    return [label for terms, label in rules if any(t in content for t in terms)]


def match_first(
    content: str, rules: list[tuple[tuple[str, ...], str]]
) -> str | None:
    """Return the label of the first matching rule, or None."""
    for terms, label in rules:
        if any(t in content for t in terms):
            return label
    return None


def categorize_publication(
    title: str | None, abstract: str | None = None, keywords: list[str] | None = None
) -> Categories:
    content = build_content(title, abstract, keywords)
    return Categories(
        experiment_types=match_all(content, EXPERIMENT_TYPE_RULES),
        organisms=match_all(content, ORGANISM_RULES),
        space_conditions=match_all(content, SPACE_CONDITION_RULES),
        mission=match_first(content, MISSION_RULES),
    )
