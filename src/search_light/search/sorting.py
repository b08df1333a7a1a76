"""Result ordering.

The default order is relevance descending with ties broken by ascending key.
A caller-supplied comparator runs afterwards; Python's sort is stable, so the
previous order decides whatever the comparator leaves tied.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import cmp_to_key
import logging
from typing import Any

from search_light.domain.model import Match


logger = logging.getLogger(__name__)

ItemLookup = Callable[[Match], Any]
Comparator = Callable[[ItemLookup, Any, Any], int]


def sort_by_relevance(matches: list[Match]) -> None:
    """Sort ``matches`` in place, highest relevance first, lower key first on ties.

    Keys must be mutually comparable. When they are not, ties keep their
    current (collection) order.
    """
    try:
        ordered = sorted(matches, key=lambda match: (-match.relevance, match.key))
    except TypeError:
        logger.warning("Collection keys are not mutually comparable; ties keep collection order")
        ordered = sorted(matches, key=lambda match: -match.relevance)
    matches[:] = ordered


def sort_with_comparator(matches: list[Match], comparator: Comparator, lookup: ItemLookup) -> None:
    """Sort ``matches`` in place with ``comparator(lookup, item_a, item_b)``."""

    def _compare(match_a: Match, match_b: Match) -> int:
        return comparator(lookup, lookup(match_a), lookup(match_b))

    matches.sort(key=cmp_to_key(_compare))


def apply_sort(
    matches: list[Match],
    *,
    by_relevance: bool,
    constrained: bool,
    comparator: Comparator | None,
    lookup: ItemLookup,
) -> list[Match]:
    if by_relevance and constrained and matches:
        sort_by_relevance(matches)
    if comparator is not None:
        sort_with_comparator(matches, comparator, lookup)
    return matches
