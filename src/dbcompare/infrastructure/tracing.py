"""OpenTelemetry tracing.

Spans nest as illustration -> engine call. Engine calls carry the OpenTelemetry
database attributes (db.system, db.operation, db.statement) plus the client
name, so strict and non-strict SQLite runs stay apart in a trace.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ContextManager, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter


_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "dbcompare",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """Install a tracer provider exporting to OTLP and/or the console.

    Without either exporter spans are still created but go nowhere.
    """
    global _tracer

    from dbcompare import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if console_export:
        console_exporter = ConsoleSpanExporter()
        provider.add_span_processor(BatchSpanProcessor(console_exporter))

    trace.set_tracer_provider(provider)

    _tracer = trace.get_tracer(service_name)

    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("dbcompare")
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Span around one illustration, query or engine call.

    Attribute values of None are skipped.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        yield span


def db_span(
    client: str,
    system: str,
    operation: str,
    statement: str | None = None,
    **attributes: Any,
) -> ContextManager[trace.Span]:
    """Span named ``<client>.<operation>`` for one call into an engine.

    Args:
        client: Client name as shown in results, e.g. "sqlite (strict)".
        system: Engine the client drives ("sqlite", "duckdb").
        operation: Client method, e.g. "execute" or "append_frame".
        statement: SQL text, when the call sends one.
        **attributes: Extra ``db.*`` attributes, keyed without the prefix.
    """
    return trace_span(
        f"{client}.{operation}",
        {
            "db.system": system,
            "db.operation": operation,
            "db.statement": statement,
            "dbcompare.client": client,
            **{f"db.{key}": value for key, value in attributes.items()},
        },
    )
