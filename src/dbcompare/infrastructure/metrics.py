"""Prometheus metrics for the engine comparison."""

from __future__ import annotations

from typing import Mapping

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all comparison metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Statement metrics
        self.statements_total = Counter(
            "dbcompare_statements_total",
            "Total statements sent to an engine",
            ["engine", "status"],  # status: ok, error
            registry=self._registry,
        )

        self.rows_written_total = Counter(
            "dbcompare_rows_written_total",
            "Total rows appended to engine tables",
            ["engine"],
            registry=self._registry,
        )

        # Timed read/write calls
        self.operation_seconds = Histogram(
            "dbcompare_operation_seconds",
            "Latency of timed engine operations in seconds",
            ["engine", "operation"],  # write, read, aggregate, lookup
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
            registry=self._registry,
        )

        # Illustration metrics
        self.illustrations_total = Counter(
            "dbcompare_illustrations_total",
            "Total illustrations run",
            ["illustration"],
            registry=self._registry,
        )

        self.info = Info(
            "dbcompare",
            "Engine comparison information",
            registry=self._registry,
        )
        self.set_info()

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def set_info(self, engine_versions: Mapping[str, str] | None = None) -> None:
        """Publish the package version and one `<engine>_version` label per engine."""
        from dbcompare import __version__

        labels = {"version": __version__}
        for engine, version in (engine_versions or {}).items():
            labels[f"{engine}_version"] = version
        self.info.info(labels)


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
