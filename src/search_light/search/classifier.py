"""Dirty-tracked match classification.

``MatchClassifier`` owns the full/partial/all-item buckets for one builder.
State moves forward through:

    TERMS_DIRTY -> MATCHES_DIRTY -> CLEAN

Constraint, case-mode and base-threshold changes reset to TERMS_DIRTY (terms
and threshold are re-derived). Searched-key changes and a replaced collection
only affect scoring and reset to MATCHES_DIRTY. Sort changes only mark the
buckets unsorted.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging
from typing import Any

from search_light.domain.model import Match
from search_light.observability.metrics import CLASSIFY_LATENCY, CLASSIFY_PASSES, track_latency
from search_light.observability.tracing import create_span
from search_light.search.collection import Collection
from search_light.search.constraints import ConstraintSet
from search_light.search.relevance import Bucket, bucket_for, score_item
from search_light.search.sorting import Comparator, apply_sort


logger = logging.getLogger(__name__)


class CacheState(str, Enum):
    CLEAN = "clean"
    TERMS_DIRTY = "terms_dirty"
    MATCHES_DIRTY = "matches_dirty"


_STATE_RANK = {CacheState.CLEAN: 0, CacheState.MATCHES_DIRTY: 1, CacheState.TERMS_DIRTY: 2}


class MatchClassifier:
    """Scores a collection against a constraint set and caches the buckets."""

    def __init__(self) -> None:
        self.state = CacheState.TERMS_DIRTY
        self.sorted_clean = False
        self.threshold = 0
        self.constrained = False
        self.matches: list[Match] = []
        self.partial: list[Match] = []
        self.all_items: list[Match] = []
        self.passes = 0

    @property
    def total(self) -> int:
        return len(self.matches)

    def invalidate(self, state: CacheState = CacheState.TERMS_DIRTY) -> None:
        """Mark cached buckets stale; never lowers an already dirtier state."""
        if _STATE_RANK[state] > _STATE_RANK[self.state]:
            self.state = state
        self.sorted_clean = False

    def invalidate_sort(self) -> None:
        self.sorted_clean = False

    def update(
        self,
        collection: Collection,
        constraints: ConstraintSet,
        *,
        case_sensitive: bool,
        base_threshold: int,
        sort_by_relevance: bool,
        comparator: Comparator | None,
        lookup: Callable[[Match], Any],
    ) -> None:
        """Bring buckets up to date, doing only the work the current state requires."""
        if self.state is CacheState.TERMS_DIRTY:
            self.constrained = constraints.is_constrained(case_sensitive)
            self.threshold = constraints.threshold(base_threshold, case_sensitive)
            self.state = CacheState.MATCHES_DIRTY

        if self.state is CacheState.MATCHES_DIRTY:
            self._classify(collection, constraints, case_sensitive)
            self.state = CacheState.CLEAN
            self.sorted_clean = False

        if not self.sorted_clean:
            self._restore_collection_order()
            self.sort(self.matches, sort_by_relevance=sort_by_relevance, comparator=comparator, lookup=lookup)
            self.sorted_clean = True

    def _restore_collection_order(self) -> None:
        position = {match.key: index for index, match in enumerate(self.all_items)}
        self.matches.sort(key=lambda match: position[match.key])

    def sort(
        self,
        matches: list[Match],
        *,
        sort_by_relevance: bool,
        comparator: Comparator | None,
        lookup: Callable[[Match], Any],
    ) -> list[Match]:
        return apply_sort(
            matches,
            by_relevance=sort_by_relevance,
            constrained=self.constrained,
            comparator=comparator,
            lookup=lookup,
        )

    def _classify(self, collection: Collection, constraints: ConstraintSet, case_sensitive: bool) -> None:
        shape = collection.shape.value
        CLASSIFY_PASSES.labels(shape=shape, constrained=str(self.constrained).lower()).inc()
        self.passes += 1

        if not self.constrained:
            # Everything matches; no per-item scoring needed
            self.all_items = [Match(key) for key in collection.keys()]
            self.matches = list(self.all_items)
            self.partial = []
            return

        terms = constraints.terms(case_sensitive)
        attributes = {
            "search_light.items": len(collection),
            "search_light.terms": len(terms),
            "search_light.filters": len(constraints.filters),
            "search_light.threshold": self.threshold,
        }
        with create_span("search_light.classify", attributes=attributes) as span, track_latency(
            CLASSIFY_LATENCY, shape=shape
        ):
            all_items: list[Match] = []
            matches: list[Match] = []
            partial: list[Match] = []
            for key, item in collection:
                match = score_item(
                    item,
                    key,
                    constraints.filters,
                    terms,
                    constraints.keys,
                    case_sensitive=case_sensitive,
                )
                all_items.append(match)
                bucket = bucket_for(match.relevance, self.threshold)
                if bucket is Bucket.FULL:
                    matches.append(match)
                elif bucket is Bucket.PARTIAL:
                    partial.append(match)

            span.set_attribute("search_light.matches", len(matches))
            span.set_attribute("search_light.partial", len(partial))

        self.all_items, self.matches, self.partial = all_items, matches, partial
        logger.debug(
            "Classified %d items: %d full, %d partial (threshold %d)",
            len(all_items),
            len(matches),
            len(partial),
            self.threshold,
        )
