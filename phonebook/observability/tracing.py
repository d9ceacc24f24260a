"""OpenTelemetry distributed tracing setup.

Provides span creation and OTLP export for mutations and store calls.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

_tracer: Tracer | None = None


def setup_tracing(
    service_name: str = "phonebook",
    otlp_endpoint: str | None = None,
) -> Tracer:
    """Initialize OpenTelemetry tracing.

    Args:
        service_name: Name to identify this service in traces
        otlp_endpoint: OTLP gRPC endpoint (e.g., "localhost:4317").
            Falls back to OTEL_EXPORTER_OTLP_ENDPOINT env var

    Returns:
        Configured Tracer instance
    """
    global _tracer

    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    endpoint = otlp_endpoint or os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)

    return _tracer


def get_tracer() -> Tracer:
    """Get the configured tracer, or a no-op tracer if not initialized."""
    if _tracer is None:
        return trace.get_tracer("phonebook")
    return _tracer


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Generator[Span, None, None]:
    """Create a new span as a context manager.

    Args:
        name: Span name
        kind: Span kind (INTERNAL, SERVER, CLIENT, etc.)
        attributes: Initial span attributes

    Yields:
        The created span
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name,
        kind=kind,
        attributes=attributes or {},
    ) as span:
        yield span


def record_exception(span: Span, exception: Exception) -> None:
    """Record an exception on a span and mark it failed."""
    span.record_exception(exception)
    span.set_status(Status(StatusCode.ERROR, str(exception)))


def set_span_attributes(span: Span, **attributes: Any) -> None:
    """Set multiple attributes on a span, skipping None values."""
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(key, value)
