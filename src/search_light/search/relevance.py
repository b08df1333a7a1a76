"""Per-item relevance scoring.

An item's relevance is the number of filters it passes plus the number of
non-overlapping occurrences of each search term in its subject string. The
subject is the item itself for text, or its property values joined with
``|``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from search_light.domain.model import Filter, InjectedStats, Match
from search_light.search.operators import MISSING, evaluate, get_property


SUBJECT_SEPARATOR = "|"


class Bucket(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    EXCLUDED = "excluded"


def stringify(value: Any) -> str:
    """Render a property value for inclusion in a subject string."""
    if value is None or value is MISSING or isinstance(value, InjectedStats):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return ",".join(stringify(v) for v in value.values())
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ",".join(stringify(v) for v in value)
    return str(value)


def _own_values(item: Any) -> list[Any]:
    # Injected stats are output metadata and never part of the searched text
    if isinstance(item, Mapping):
        values = list(item.values())
    elif isinstance(item, Sequence) and not isinstance(item, (bytes, bytearray)):
        values = list(item)
    elif hasattr(item, "__dict__"):
        values = [value for name, value in vars(item).items() if not name.startswith("_")]
    else:
        return [item]
    return [value for value in values if not isinstance(value, InjectedStats)]


def build_subject(item: Any, keys: Sequence[Any] = ()) -> str:
    """Return the text search terms are counted in.

    Text items are their own subject. With ``keys`` only those properties are
    used, missing ones contributing an empty string; otherwise every value the
    item holds is included.
    """
    if isinstance(item, str):
        return item
    if keys:
        values = [get_property(item, key) for key in keys]
    else:
        values = _own_values(item)
    return SUBJECT_SEPARATOR.join(stringify(value) for value in values)


def count_occurrences(subject: str, term: str) -> int:
    """Non-overlapping occurrences of ``term``; "aaa" holds "aa" once."""
    return subject.count(term)


def score_item(
    item: Any,
    key: Any,
    filters: Sequence[Filter],
    terms: Sequence[str],
    keys: Sequence[Any] = (),
    *,
    case_sensitive: bool = False,
) -> Match:
    """Score one item against every filter and search term."""
    match = Match(key)

    if not isinstance(item, str):
        for flt in filters:
            if flt.is_valid and evaluate(get_property(item, flt.key), flt.operator, flt.value):
                match.relevance += 1

    if not terms:
        return match

    subject = build_subject(item, keys)
    if not case_sensitive:
        subject = subject.lower()

    for term in terms:
        count = count_occurrences(subject, term)
        if count:
            match.relevance += count
        else:
            match.missing_terms.append(term)

    return match


def bucket_for(relevance: int, threshold: int) -> Bucket:
    if relevance == 0:
        return Bucket.EXCLUDED
    if relevance < threshold:
        return Bucket.PARTIAL
    return Bucket.FULL
