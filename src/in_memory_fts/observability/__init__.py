"""Observability module for OpenTelemetry-aligned tracing and structured logging."""

from in_memory_fts.observability.logging import JsonFormatter, configure_logging, current_span_ids
from in_memory_fts.observability.setup import setup_observability
from in_memory_fts.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "current_span_ids",
    "get_tracer",
    "init_tracing",
    "setup_observability",
]
