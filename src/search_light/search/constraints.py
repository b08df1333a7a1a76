"""Constraint accumulator: search text, filters and searched keys.

Every accepted constraint resolves here into either search text or a
canonical ``Filter``. Shapes that match neither are reported as warnings and
ignored, so a builder chain never breaks on bad input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import Any

from pydantic import ValidationError

from search_light.domain.model import Filter, FilterSpec, Operator
from search_light.errors import (
    InvalidConstraintTypeError,
    InvalidFilterOperatorError,
    report_usage_warning,
)


logger = logging.getLogger(__name__)

Constraint = str | Sequence[Any] | Mapping[str, Any] | Filter


def _is_hashable(key: Any) -> bool:
    try:
        hash(key)
    except TypeError:
        return False
    return True


def parse_constraint(constraint: Any) -> str | Filter | None:
    """Resolve a constraint into search text or a ``Filter``.

    Returns None (after logging a warning) for unrecognized shapes and for
    filters whose key cannot be looked up (unhashable keys).
    """
    if isinstance(constraint, str):
        return constraint

    flt = _parse_filter(constraint)
    if flt is not None and not _is_hashable(flt.key):
        report_usage_warning(logger, InvalidConstraintTypeError(f"Invalid filter key type: {type(flt.key).__name__}"))
        return None
    return flt


def _parse_filter(constraint: Any) -> Filter | None:
    if isinstance(constraint, Filter):
        return constraint

    if isinstance(constraint, Mapping):
        try:
            return FilterSpec.from_mapping(dict(constraint)).to_filter()
        except (ValidationError, TypeError) as exc:
            report_usage_warning(logger, InvalidConstraintTypeError(f"Invalid filter mapping: {exc}"))
            return None

    if isinstance(constraint, Sequence) and not isinstance(constraint, (bytes, bytearray)):
        if len(constraint) == 2:
            key, value = constraint
            return Filter(key, Operator.LOOSE_EQ, value)
        if len(constraint) == 3:
            key, raw_operator, value = constraint
            return Filter(key, Operator.parse(raw_operator) or raw_operator, value)
        report_usage_warning(
            logger,
            InvalidConstraintTypeError(f"Invalid filter length: expected 2 or 3 elements, got {len(constraint)}"),
        )
        return None

    report_usage_warning(logger, InvalidConstraintTypeError(f"Invalid constraint type: {type(constraint).__name__}"))
    return None


def parse_keys(keys: Any) -> list[Any] | None:
    """Resolve a single key or an iterable of keys into a list."""
    if isinstance(keys, (str, int)) and not isinstance(keys, bool):
        return [keys]
    if isinstance(keys, Iterable) and not isinstance(keys, (bytes, bytearray, Mapping)):
        resolved = list(keys)
        for key in resolved:
            if not _is_hashable(key):
                report_usage_warning(logger, InvalidConstraintTypeError(f"Invalid key type: {type(key).__name__}"))
                return None
        return resolved
    report_usage_warning(logger, InvalidConstraintTypeError(f"Invalid keys type: {type(keys).__name__}"))
    return None


class ConstraintSet:
    """Accumulated search text, filters and keys, with a lazily split term list."""

    def __init__(self) -> None:
        self.search_text = ""
        self.filters: list[Filter] = []
        self.keys: list[Any] = []
        self._terms: list[str] = []
        self._terms_case: bool | None = None

    def add(self, constraint: Any) -> bool:
        """Append search text or a filter. Returns False when the constraint was rejected."""
        parsed = parse_constraint(constraint)
        if parsed is None:
            return False
        self._apply(parsed)
        return True

    def replace(self, constraint: Any) -> bool:
        """Clear search text and filters, then add ``constraint``.

        A rejected constraint leaves the previous text and filters in place.
        """
        parsed = parse_constraint(constraint)
        if parsed is None:
            return False
        self.search_text = ""
        self.filters = []
        self._apply(parsed)
        return True

    def _apply(self, parsed: str | Filter) -> None:
        if isinstance(parsed, str):
            self.search_text = f"{self.search_text} {parsed.strip()}".strip()
        else:
            if not parsed.is_valid:
                report_usage_warning(logger, InvalidFilterOperatorError(f"Invalid filter operator: {parsed.operator!r}"))
            self.filters.append(parsed)
        self._terms_case = None

    def set_keys(self, keys: Any) -> bool:
        parsed = parse_keys(keys)
        if parsed is None:
            return False
        self.keys = parsed
        return True

    def add_keys(self, keys: Any) -> bool:
        parsed = parse_keys(keys)
        if parsed is None:
            return False
        self.keys.extend(parsed)
        return True

    def terms(self, case_sensitive: bool) -> list[str]:
        """Whitespace-split search terms, lower-cased unless ``case_sensitive``."""
        if self._terms_case is not case_sensitive:
            text = self.search_text if case_sensitive else self.search_text.lower()
            self._terms = text.split()
            self._terms_case = case_sensitive
        return self._terms

    def threshold(self, base: int, case_sensitive: bool) -> int:
        """Relevance a match needs to count as full rather than partial."""
        return base + len(self.filters) + (1 if self.terms(case_sensitive) else 0)

    def is_constrained(self, case_sensitive: bool) -> bool:
        return bool(self.terms(case_sensitive) or self.filters)
