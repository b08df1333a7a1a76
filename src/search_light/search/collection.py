"""Collection store: ordered key -> item association with its original shape."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
import logging
from typing import Any

from search_light.domain.model import CollectionShape
from search_light.errors import InvalidCollectionTypeError, report_usage_warning


logger = logging.getLogger(__name__)


@dataclass
class Collection:
    """Items keyed by sequence index or mapping key, in insertion order."""

    items: dict[Any, Any] = field(default_factory=dict)
    shape: CollectionShape = CollectionShape.SEQUENCE
    error: InvalidCollectionTypeError | None = None

    @classmethod
    def from_items(cls, source: Any) -> Collection:
        """Normalize ``source`` into a collection.

        Mappings keep their keys; sequences are keyed by index; a bare string
        is treated as a one-item sequence. Anything else produces an empty
        collection carrying an ``InvalidCollectionTypeError``.
        """
        if isinstance(source, Mapping):
            return cls(items=dict(source.items()), shape=CollectionShape.MAPPING)

        if isinstance(source, str):
            return cls(items={0: source})

        if isinstance(source, Sequence) and not isinstance(source, (bytes, bytearray)):
            return cls(items=dict(enumerate(source)))

        error = InvalidCollectionTypeError(f"Invalid collection type: {type(source).__name__}")
        report_usage_warning(logger, error)
        return cls(error=error)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def get(self, key: Any) -> Any:
        return self.items[key]

    def keys(self) -> list[Any]:
        return list(self.items)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(self.items.items())

    def __len__(self) -> int:
        return len(self.items)
