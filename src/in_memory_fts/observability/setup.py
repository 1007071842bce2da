"""One-call observability bootstrap driven by Settings."""

from __future__ import annotations

from opentelemetry.sdk.trace import SpanProcessor, TracerProvider

from in_memory_fts.config import Settings
from in_memory_fts.observability.logging import configure_logging
from in_memory_fts.observability.tracing import init_tracing


def setup_observability(
    settings: Settings | None = None,
    *,
    enable_tracing: bool = False,
    span_processor: SpanProcessor | None = None,
) -> TracerProvider | None:
    """Configure logging from ``settings`` and optionally install tracing.

    Returns the installed tracer provider, or None when tracing stays off.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level, settings.log_json)
    if not enable_tracing:
        return None
    return init_tracing(settings.service_name, span_processor=span_processor)
