"""Prometheus metrics for classification passes and usage warnings."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


CLASSIFY_LATENCY = Histogram(
    "search_light_classify_seconds",
    "Time spent scoring and bucketing a collection",
    ["shape"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0),
)

CLASSIFY_PASSES = Counter(
    "search_light_passes_total",
    "Classification passes run",
    ["shape", "constrained"],
)

USAGE_WARNINGS = Counter(
    "search_light_warnings_total",
    "Recoverable usage problems reported as warnings",
    ["error_type"],
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
