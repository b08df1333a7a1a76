"""Fluent search builder.

``search(collection)`` returns a ``SearchLight`` bound to the collection.
Builder methods record constraints and options and return the instance, and
results are computed lazily on the first read after a change:

    search(recipes).for_("apple").and_(["minutes", "<=", 30]).sorted().matches

Python keywords used by the fluent vocabulary get a trailing underscore
(``for_``, ``and_``, ``in_``, ``or_``).
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Generator, Iterator
from concurrent.futures import Future
from dataclasses import dataclass
import logging
from typing import Any

from search_light.config import Settings, get_settings
from search_light.domain.model import Match, SearchResults
from search_light.errors import InvalidCollectionTypeError
from search_light.search.classifier import CacheState, MatchClassifier
from search_light.search.collection import Collection
from search_light.search.constraints import Constraint, ConstraintSet
from search_light.search.formatter import format_item, to_original_shape
from search_light.search.sorting import Comparator


logger = logging.getLogger(__name__)

SuccessCallback = Callable[[SearchResults], Any]
FailureCallback = Callable[[BaseException], Any]


@dataclass
class SearchOptions:
    """Per-instance options, seeded from ``Settings``."""

    case_sensitive: bool = False
    base_threshold: int = 0
    sort_by_relevance: bool = False
    comparator: Comparator | None = None
    inject_stats: bool = False
    stats_property: str = "searchResults"

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchOptions:
        return cls(
            case_sensitive=settings.case_sensitive,
            base_threshold=settings.base_threshold,
            sort_by_relevance=settings.sort_by_relevance,
            inject_stats=settings.inject_stats,
            stats_property=settings.stats_property,
        )


class SearchLight:
    """Search builder over one collection.

    Not safe to share between concurrent callers: constraints, options and
    cached buckets all live on the instance.
    """

    def __init__(self, items: Any, settings: Settings | None = None) -> None:
        self.options = SearchOptions.from_settings(settings or get_settings())
        self.constraints = ConstraintSet()
        self._classifier = MatchClassifier()
        self._collection = Collection()
        self.collection(items)

    def __repr__(self) -> str:
        return (
            f"SearchLight(items={len(self._collection)}, shape={self._collection.shape.value}, "
            f"text={self.constraints.search_text!r}, filters={len(self.constraints.filters)})"
        )

    # Collection

    def collection(self, items: Any) -> SearchLight:
        """Replace the searched collection."""
        self._collection = Collection.from_items(items)
        self._classifier.invalidate(CacheState.MATCHES_DIRTY)
        return self

    @property
    def error(self) -> bool:
        return not self._collection.is_valid

    @property
    def error_message(self) -> str:
        return str(self._collection.error) if self._collection.error else ""

    # Constraints

    def for_(self, constraint: Constraint) -> SearchLight:
        """Replace search text and filters with ``constraint``."""
        if self.constraints.replace(constraint):
            self._classifier.invalidate(CacheState.TERMS_DIRTY)
        return self

    def and_(self, constraint: Constraint) -> SearchLight:
        """Add search text or a filter to the existing constraints."""
        if self.constraints.add(constraint):
            self._classifier.invalidate(CacheState.TERMS_DIRTY)
        return self

    def in_(self, keys: Any) -> SearchLight:
        """Only search in the given item properties."""
        if self.constraints.set_keys(keys):
            self._classifier.invalidate(CacheState.MATCHES_DIRTY)
        return self

    def or_(self, keys: Any) -> SearchLight:
        """Search in additional item properties."""
        if self.constraints.add_keys(keys):
            self._classifier.invalidate(CacheState.MATCHES_DIRTY)
        return self

    # Sorting

    def sorted_by(self, method: str) -> SearchLight:
        return self.sorted() if method == "relevance" else self.unsorted()

    def sorted(self) -> SearchLight:
        if not self.options.sort_by_relevance:
            self.options.sort_by_relevance = True
            self._classifier.invalidate_sort()
        return self

    def unsorted(self) -> SearchLight:
        if self.options.sort_by_relevance:
            self.options.sort_by_relevance = False
            self._classifier.invalidate_sort()
        return self

    def sort_using(self, comparator: Comparator | None) -> SearchLight:
        """Order matches with ``comparator(lookup, item_a, item_b)`` after the relevance sort.

        ``lookup(match)`` returns the item a match refers to. Pass None to clear.
        """
        self.options.comparator = comparator
        self._classifier.invalidate_sort()
        return self

    # Comparison

    def compare_case(self) -> SearchLight:
        if not self.options.case_sensitive:
            self.options.case_sensitive = True
            self._classifier.invalidate(CacheState.TERMS_DIRTY)
        return self

    def ignore_case(self) -> SearchLight:
        if self.options.case_sensitive:
            self.options.case_sensitive = False
            self._classifier.invalidate(CacheState.TERMS_DIRTY)
        return self

    def with_threshold(self, base: int) -> SearchLight:
        """Raise the relevance a match needs to count as full by ``base``."""
        if isinstance(base, bool) or not isinstance(base, int) or base < 0:
            logger.warning("Ignoring invalid base threshold: %r", base)
            return self
        if base != self.options.base_threshold:
            self.options.base_threshold = base
            self._classifier.invalidate(CacheState.TERMS_DIRTY)
        return self

    # Stats injection

    def with_stats(self, property_name: str | None = None) -> SearchLight:
        self.options.inject_stats = True
        if property_name is not None:
            self.options.stats_property = property_name
        return self

    def without_stats(self) -> SearchLight:
        self.options.inject_stats = False
        return self

    # Results

    def _lookup(self, match: Match) -> Any:
        return self._collection.get(match.key)

    def _update(self) -> MatchClassifier:
        self._classifier.update(
            self._collection,
            self.constraints,
            case_sensitive=self.options.case_sensitive,
            base_threshold=self.options.base_threshold,
            sort_by_relevance=self.options.sort_by_relevance,
            comparator=self.options.comparator,
            lookup=self._lookup,
        )
        return self._classifier

    def _sorted(self, matches: list[Match]) -> list[Match]:
        return self._classifier.sort(
            matches,
            sort_by_relevance=self.options.sort_by_relevance,
            comparator=self.options.comparator,
            lookup=self._lookup,
        )

    def _format(self, matches: list[Match]) -> list[Any] | dict[Any, Any]:
        return to_original_shape(
            self._collection,
            matches,
            inject=self.options.inject_stats,
            property_name=self.options.stats_property,
        )

    @property
    def length(self) -> int:
        """Number of full matches."""
        return self._update().total

    def __len__(self) -> int:
        return self.length

    @property
    def matches(self) -> list[Any] | dict[Any, Any]:
        """Items that meet the full-match threshold."""
        return self._format(list(self._update().matches))

    @property
    def partial_matches(self) -> list[Any] | dict[Any, Any]:
        """Items with some relevance, but below the threshold."""
        return self._format(self._sorted(list(self._update().partial)))

    @property
    def all_matches(self) -> list[Any] | dict[Any, Any]:
        """Full and partial matches together."""
        classifier = self._update()
        return self._format(self._sorted(classifier.matches + classifier.partial))

    @property
    def all_items(self) -> list[Any] | dict[Any, Any]:
        """Every item in the collection, excluded ones included."""
        return self._format(self._sorted(list(self._update().all_items)))

    def match_records(self) -> list[Match]:
        """Scoring records of the full matches, in result order."""
        return list(self._update().matches)

    def __iter__(self) -> Iterator[Any]:
        classifier = self._update()
        for match in list(classifier.matches):
            yield format_item(
                self._collection,
                match,
                inject=self.options.inject_stats,
                property_name=self.options.stats_property,
            )

    # Deferred access

    def results(self) -> SearchResults:
        """Compute the three result views, raising when the collection was invalid."""
        self._update()
        if self.error:
            raise InvalidCollectionTypeError(self.error_message)
        return SearchResults(
            matches=self.matches,
            partial_matches=self.partial_matches,
            all_matches=self.all_matches,
        )

    def future(self) -> Future:
        """Return a resolved single-shot future holding ``results()`` or its error."""
        future: Future = Future()
        try:
            future.set_result(self.results())
        except InvalidCollectionTypeError as exc:
            future.set_exception(exc)
        return future

    def then(
        self,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> SearchLight:
        """Compute results now and hand them to the callbacks.

        Inside a running event loop the callbacks run on the loop's next
        iteration; otherwise they run before ``then`` returns. An exception
        raised by a callback is logged and never propagates out of ``then``,
        in either case.
        """
        future = self.future()

        def settle() -> None:
            exc = future.exception()
            try:
                if exc is None:
                    if on_success is not None:
                        on_success(future.result())
                elif on_failure is not None:
                    on_failure(exc)
            except Exception:
                logger.exception("Search result callback failed")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            settle()
        else:
            loop.call_soon(settle)
        return self

    def catch(self, on_failure: FailureCallback) -> SearchLight:
        return self.then(None, on_failure)

    def __await__(self) -> Generator[Any, None, SearchResults]:
        return self._resolve().__await__()

    async def _resolve(self) -> SearchResults:
        return self.results()


def search(items: Any, settings: Settings | None = None) -> SearchLight:
    """Create a ``SearchLight`` builder for ``items``.

    ``items`` may be a sequence, a mapping or a single string. Anything else
    yields a builder in an error state whose results are empty and whose
    deferred access fails with ``InvalidCollectionTypeError``.
    """
    return SearchLight(items, settings=settings)
