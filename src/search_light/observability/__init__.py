"""Observability module: structured logging, tracing and metrics."""

from search_light.observability.context import get_trace_context, set_trace_context, trace_context
from search_light.observability.logging import JsonFormatter, configure_from_settings, configure_logging
from search_light.observability.metrics import (
    CLASSIFY_LATENCY,
    CLASSIFY_PASSES,
    USAGE_WARNINGS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from search_light.observability.tracing import create_span, get_tracer, init_tracing, reset_tracer


__all__ = [
    "CLASSIFY_LATENCY",
    "CLASSIFY_PASSES",
    "USAGE_WARNINGS",
    "JsonFormatter",
    "configure_from_settings",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "reset_tracer",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
