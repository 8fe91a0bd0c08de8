"""OpenTelemetry tracing for manager operations.

Each public manager call becomes one ``sqlite.<operation>`` span carrying the
database semantic attributes (``db.system``, ``db.name``, ``db.operation``).
Spans end with an ERROR status when the operation raises.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

SERVICE_NAME = "sqlite_manager"
DB_SYSTEM = "sqlite"
SPAN_PREFIX = "sqlite."

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = SERVICE_NAME,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider for the manager.

    Without an endpoint and without console export the provider records
    spans but exports nothing.

    Args:
        service_name: ``service.name`` resource attribute
        otlp_endpoint: OTLP gRPC collector, e.g. "http://localhost:4317"
        console_export: Also print finished spans to stdout

    Returns:
        The manager tracer
    """
    global _tracer

    from sqlite_manager import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": service_name,
                "service.version": __version__,
                "db.system": DB_SYSTEM,
            }
        )
    )

    exporters = []
    if otlp_endpoint:
        exporters.append(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    if console_export:
        exporters.append(ConsoleSpanExporter())
    for exporter in exporters:
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Tracer set up by ``setup_tracing``, or the global default."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SERVICE_NAME)
    return _tracer


def span_attributes(attributes: dict[str, Any] | None) -> dict[str, Any]:
    """Drop None values; OpenTelemetry rejects them."""
    return {key: value for key, value in (attributes or {}).items() if value is not None}


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Iterator[trace.Span]:
    """Open a span named ``name`` with ``attributes``."""
    with get_tracer().start_as_current_span(name, attributes=span_attributes(attributes)) as span:
        yield span


@contextmanager
def operation_span(operation: str, db_name: str, **attributes: Any) -> Iterator[trace.Span]:
    """
    Span for one manager operation.

    Args:
        operation: Manager method name, e.g. "ensure_table"
        db_name: Absolute database path
        **attributes: Extra attributes such as ``table`` or ``rows``

    Yields:
        The active span
    """
    base = {"db.system": DB_SYSTEM, "db.name": db_name, "db.operation": operation}
    with trace_span(SPAN_PREFIX + operation, {**base, **attributes}) as span:
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
