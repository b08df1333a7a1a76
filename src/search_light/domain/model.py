"""Domain models for in-memory search.

Value objects are immutable (frozen=True); ``Match`` is the one mutable record,
since the relevance engine accumulates its score while walking filters and
search terms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Operator(str, Enum):
    """Comparison operators a filter can apply."""

    LOOSE_EQ = "=="
    STRICT_EQ = "==="
    LOOSE_NE = "!="
    STRICT_NE = "!=="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="

    @classmethod
    def parse(cls, raw: Any) -> Operator | None:
        """Return the operator spelled by ``raw`` or None when unknown."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except (ValueError, TypeError):
            return None


class CollectionShape(str, Enum):
    """Original container type of the searched collection."""

    SEQUENCE = "sequence"
    MAPPING = "mapping"


@dataclass(frozen=True)
class Filter:
    """Canonical ``(key, operator, value)`` filter.

    ``operator`` holds the raw spelling when it is not a known ``Operator``;
    such filters still count toward the match threshold but never pass.
    """

    key: Any
    operator: Operator | str
    value: Any

    @property
    def is_valid(self) -> bool:
        return isinstance(self.operator, Operator)


class FilterSpec(BaseModel):
    """Named-field filter form, e.g. ``{"key": "age", "operator": ">=", "value": 18}``.

    Only the shape is checked; values are never validated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    key: Any
    operator: Any = None
    value: Any = Field(default=None)
    has_value: bool = Field(default=False, exclude=True)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> FilterSpec:
        return cls(**data, has_value="value" in data)

    def to_filter(self) -> Filter:
        if not self.has_value:
            # Two-field form: the second field is the value, compared with ==
            return Filter(self.key, Operator.LOOSE_EQ, self.operator)
        if self.operator is None:
            return Filter(self.key, Operator.LOOSE_EQ, self.value)
        return Filter(self.key, Operator.parse(self.operator) or self.operator, self.value)


@dataclass(slots=True)
class Match:
    """Scoring record for one collection item."""

    key: Any
    relevance: int = 0
    missing_terms: list[str] = field(default_factory=list)

    @property
    def missing(self) -> str:
        """Missing search terms joined with single spaces."""
        return " ".join(self.missing_terms)

    def stats(self) -> InjectedStats:
        return InjectedStats(relevance=self.relevance, missing=self.missing)


class InjectedStats(dict):
    """Relevance metadata attached to returned items when stats are enabled.

    A dedicated type so a sequence item that already carries stats gets them
    replaced instead of appended a second time.
    """


@dataclass(frozen=True)
class SearchResults:
    """The three derived views delivered through the deferred channel."""

    matches: Any
    partial_matches: Any
    all_matches: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "matches": self.matches,
            "partial_matches": self.partial_matches,
            "all_matches": self.all_matches,
        }
