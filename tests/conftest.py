"""Pytest configuration and fixtures for dbcompare tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from dbcompare.adapters.outbound import DuckDBClient, SQLiteClient
from dbcompare.infrastructure.config import BenchmarkConfig, BookConfig, Config, EngineConfig
from dbcompare.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a small, in-memory configuration."""
    return Config(
        engine=EngineConfig(engines=["sqlite", "duckdb"], sqlite_strict=True),
        benchmark=BenchmarkConfig(rows=200, columns=3, repeats=1, seed=7),
        book=BookConfig(output_dir=temp_dir / "book", title="Test book", author="tests"),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def sqlite_client(metrics_registry: MetricsRegistry) -> Generator[SQLiteClient, None, None]:
    """Provide a connected in-memory SQLite client."""
    with SQLiteClient(metrics=metrics_registry) as client:
        yield client


@pytest.fixture
def strict_sqlite_client(metrics_registry: MetricsRegistry) -> Generator[SQLiteClient, None, None]:
    """Provide a connected in-memory SQLite client that creates STRICT tables."""
    with SQLiteClient(strict=True, metrics=metrics_registry) as client:
        yield client


@pytest.fixture
def duckdb_client(metrics_registry: MetricsRegistry) -> Generator[DuckDBClient, None, None]:
    """Provide a connected in-memory DuckDB client."""
    with DuckDBClient(metrics=metrics_registry) as client:
        yield client


@pytest.fixture(params=["sqlite", "duckdb"])
def any_client(
    request: pytest.FixtureRequest, metrics_registry: MetricsRegistry
) -> Generator[SQLiteClient | DuckDBClient, None, None]:
    """Provide each connected in-memory client in turn."""
    client_cls = SQLiteClient if request.param == "sqlite" else DuckDBClient
    with client_cls(metrics=metrics_registry) as client:
        yield client


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests against real engines")
    config.addinivalue_line("markers", "slow: Slow tests")
