"""Filter comparison semantics.

Loose operators (``==``, ``!=``) compare across numeric strings, booleans
and numbers the way a dynamically typed query language would, and treat a
missing property as equal to ``None``. Strict operators (``===``, ``!==``)
additionally require both sides to belong to the same type family. Relational
operators use natural ordering and fall back to numeric coercion of strings
when the types differ; values that still cannot be ordered compare as False.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import operator as op
from typing import Any

from search_light.domain.model import Operator


class _Missing:
    """Placeholder for a property the item does not have."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

_RELATIONAL: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.GT: op.gt,
    Operator.GTE: op.ge,
    Operator.LT: op.lt,
    Operator.LTE: op.le,
}


def get_property(item: Any, key: Any) -> Any:
    """Return ``item[key]`` for mappings and sequences, or attribute ``key`` for objects.

    Sequence items accept integer keys and digit strings. Returns ``MISSING``
    when the property does not exist.
    """
    if isinstance(item, Mapping):
        try:
            return item.get(key, MISSING)
        except TypeError:
            return MISSING

    if isinstance(item, Sequence) and not isinstance(item, (str, bytes, bytearray)):
        index = _as_index(key)
        if index is None or not -len(item) <= index < len(item):
            return MISSING
        return item[index]

    if isinstance(key, str) and not isinstance(item, (str, bytes, bytearray)):
        return getattr(item, key, MISSING)

    return MISSING


def _as_index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def _family(value: Any) -> Any:
    if isinstance(value, bool):
        return bool
    if _is_number(value):
        return float
    return type(value)


def loose_equals(left: Any, right: Any) -> bool:
    if left is MISSING:
        left = None
    if right is MISSING:
        right = None

    if left is None or right is None:
        return left is None and right is None

    if _family(left) is not _family(right):
        mixed = (left, right)
        if any(isinstance(side, str) for side in mixed) or any(isinstance(side, bool) for side in mixed):
            left_number, right_number = _to_number(left), _to_number(right)
            if left_number is not None and right_number is not None:
                return left_number == right_number

    return bool(left == right)


def strict_equals(left: Any, right: Any) -> bool:
    if left is MISSING or right is MISSING:
        return left is right
    if _family(left) is not _family(right):
        return False
    return bool(left == right)


def compare(left: Any, right: Any, operator: Operator) -> bool:
    """Apply a relational ``operator`` to ``left`` and ``right``."""
    if left is MISSING or right is MISSING:
        return False

    fn = _RELATIONAL[operator]
    try:
        return bool(fn(left, right))
    except TypeError:
        pass

    left_number, right_number = _to_number(left), _to_number(right)
    if left_number is None or right_number is None:
        return False
    return bool(fn(left_number, right_number))


def evaluate(left: Any, operator: Operator, right: Any) -> bool:
    """Evaluate ``left <operator> right`` with the semantics described above."""
    if operator is Operator.LOOSE_EQ:
        return loose_equals(left, right)
    if operator is Operator.LOOSE_NE:
        return not loose_equals(left, right)
    if operator is Operator.STRICT_EQ:
        return strict_equals(left, right)
    if operator is Operator.STRICT_NE:
        return not strict_equals(left, right)
    return compare(left, right, operator)
