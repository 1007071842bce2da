"""OpenTelemetry tracing for index operations."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode

from in_memory_fts.observability.logging import bind_span_ids, unbind_span_ids


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "in_memory_fts"


def init_tracing(
    service_name: str = "in-memory-fts",
    resource_attributes: dict[str, str] | None = None,
    *,
    span_processor: SpanProcessor | None = None,
) -> TracerProvider:
    """Install an SDK tracer provider so index spans get recorded."""
    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    provider = TracerProvider(resource=Resource.create(attributes))
    if span_processor is not None:
        provider.add_span_processor(span_processor)
    trace.set_tracer_provider(provider)
    logger.info("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer(provider: trace.TracerProvider | None = None) -> Tracer:
    """Return the index tracer; a no-op tracer until a provider is installed."""
    return trace.get_tracer(TRACER_NAME, tracer_provider=provider)


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
    *,
    tracer: Tracer | None = None,
) -> Generator[Span, None, None]:
    """Create a traced span; log records emitted inside it carry its ids."""
    active_tracer = tracer or get_tracer()
    with active_tracer.start_as_current_span(
        name, kind=kind, record_exception=False, set_status_on_exception=False
    ) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)

        ctx = span.get_span_context()
        token = None
        if ctx.is_valid:
            token = bind_span_ids(format(ctx.trace_id, "032x"), format(ctx.span_id, "016x"))

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
        finally:
            if token is not None:
                unbind_span_ids(token)
