"""Infrastructure layer - cross-cutting concerns."""

from dbcompare.infrastructure.config import Config, get_config
from dbcompare.infrastructure.logging import setup_logging, get_logger
from dbcompare.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from dbcompare.infrastructure.tracing import setup_tracing, get_tracer, trace_span, db_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "db_span",
]
