"""
Entity name resolution against cached lists.
"""

from __future__ import annotations

from typing import Iterable, Protocol


class Titled(Protocol):
    """Anything with an id and a display title."""

    id: str
    title: str


def resolve(query: str, candidates: Iterable[Titled]) -> str | None:
    """Resolve a user-typed name or id to an entity id.

    An exact (case-sensitive) id match wins. Otherwise the first candidate
    whose title contains the query, case-insensitively, is returned. No
    ranking is applied beyond candidate order.

    Args:
        query: Id or part of a title.
        candidates: Entities to search, in display order.

    Returns:
        The matching id, or None when nothing matches.
    """
    candidates = list(candidates)

    for candidate in candidates:
        if candidate.id == query:
            return candidate.id

    needle = query.lower()
    for candidate in candidates:
        if needle in candidate.title.lower():
            return candidate.id

    return None


def find(entity_id: str | None, candidates: Iterable[Titled]) -> Titled | None:
    """Look up an entity by id."""
    if entity_id is None:
        return None
    for candidate in candidates:
        if candidate.id == entity_id:
            return candidate
    return None
