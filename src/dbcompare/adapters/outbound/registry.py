"""Engine registry.

To compare another embedded engine:
1. Subclass BaseClient in adapters/outbound/ (see sqlite_client.py)
2. Implement the connection, result and catalog hooks
3. Add the class to ENGINES below and its name to KNOWN_ENGINES in config
"""

from __future__ import annotations

from pathlib import Path

from dbcompare.adapters.outbound.base_client import MEMORY, BaseClient
from dbcompare.adapters.outbound.duckdb_client import DuckDBClient
from dbcompare.adapters.outbound.sqlite_client import SQLiteClient
from dbcompare.infrastructure.config import Config
from dbcompare.infrastructure.metrics import MetricsRegistry

ENGINES: dict[str, type[BaseClient]] = {
    "sqlite": SQLiteClient,
    "duckdb": DuckDBClient,
}

_EXTENSIONS = {
    "sqlite": "sqlite",
    "duckdb": "duckdb",
}

# Files kept next to a database: SQLite's rollback journal, WAL and WAL index,
# and DuckDB's WAL.
_SIDE_FILES = ("-journal", "-wal", "-shm", ".wal")


class UnknownEngineError(KeyError):
    """Raised when an engine name is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown engine"


def available_engines() -> list[str]:
    return list(ENGINES)


def get_engine(name: str, **kwargs: object) -> BaseClient:
    """Instantiate an (unconnected) client by engine name.

    Raises:
        UnknownEngineError: If no engine is registered under the name.
    """
    key = name.strip().lower()
    try:
        engine_cls = ENGINES[key]
    except KeyError:
        raise UnknownEngineError(
            f"Unknown engine {name!r} (available: {', '.join(ENGINES)})"
        ) from None
    return engine_cls(**kwargs)  # type: ignore[arg-type]


def database_path(name: str, config: Config, label: str) -> str:
    """Location of the database an illustration uses for one engine.

    In-memory unless a database directory is configured, in which case any
    file left by a previous run is removed so each illustration starts empty.
    """
    database_dir = config.engine.database_dir
    if database_dir is None:
        return MEMORY
    database_dir.mkdir(parents=True, exist_ok=True)
    path = Path(database_dir) / f"{label}.{_EXTENSIONS.get(name, 'db')}"
    path.unlink(missing_ok=True)
    for suffix in _SIDE_FILES:
        path.with_name(path.name + suffix).unlink(missing_ok=True)
    return str(path)


def open_client(
    name: str,
    config: Config,
    label: str,
    metrics: MetricsRegistry | None = None,
    strict: bool = False,
) -> BaseClient:
    """Build an unconnected client for one engine and one illustration.

    Args:
        name: Registered engine name.
        config: Configuration providing the database directory.
        label: File stem for on-disk databases (usually the illustration name).
        metrics: Metrics registry passed to the client.
        strict: Use STRICT tables (SQLite only).
    """
    key = name.strip().lower()
    if strict and key != "sqlite":
        raise ValueError(f"strict tables are only available for sqlite, not {name!r}")
    stem = f"{label}-strict" if strict else label
    path = database_path(key, config, stem)
    if strict:
        return get_engine(key, path=path, strict=True, metrics=metrics)
    return get_engine(key, path=path, metrics=metrics)
