"""Conversion of match lists back into the caller's collection shape."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping, MutableSequence
from typing import Any

from search_light.domain.model import CollectionShape, InjectedStats, Match
from search_light.search.collection import Collection


DEFAULT_STATS_PROPERTY = "searchResults"


def inject_stats(item: Any, match: Match, property_name: str = DEFAULT_STATS_PROPERTY) -> Any:
    """Attach ``{"relevance", "missing"}`` to ``item`` and return it.

    Mutable mappings get the stats under ``property_name``, mutable sequences
    get them as a trailing element (replacing stats injected by an earlier
    read), and plain objects get an attribute. Text, numbers and immutable
    containers come back unchanged.
    """
    stats = match.stats()

    if isinstance(item, MutableMapping):
        item[property_name] = stats
    elif isinstance(item, MutableSequence):
        if item and isinstance(item[-1], InjectedStats):
            item[-1] = stats
        else:
            item.append(stats)
    elif hasattr(item, "__dict__") and not isinstance(item, type):
        setattr(item, property_name, stats)

    return item


def format_item(collection: Collection, match: Match, *, inject: bool, property_name: str) -> Any:
    item = collection.get(match.key)
    if inject:
        return inject_stats(item, match, property_name)
    return item


def to_original_shape(
    collection: Collection,
    matches: Iterable[Match],
    *,
    inject: bool = False,
    property_name: str = DEFAULT_STATS_PROPERTY,
) -> list[Any] | dict[Any, Any]:
    """Return the matched items as a list (sequence origin) or dict (mapping origin).

    Order follows ``matches``; for mappings that is the dict's insertion order.
    """
    if collection.shape is CollectionShape.MAPPING:
        return {
            match.key: format_item(collection, match, inject=inject, property_name=property_name)
            for match in matches
        }
    return [format_item(collection, match, inject=inject, property_name=property_name) for match in matches]
