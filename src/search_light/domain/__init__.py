"""Domain value objects for search-light."""

from search_light.domain.model import (
    CollectionShape,
    Filter,
    FilterSpec,
    InjectedStats,
    Match,
    Operator,
    SearchResults,
)


__all__ = [
    "CollectionShape",
    "Filter",
    "FilterSpec",
    "InjectedStats",
    "Match",
    "Operator",
    "SearchResults",
]
