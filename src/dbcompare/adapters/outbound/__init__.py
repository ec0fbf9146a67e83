"""Outbound adapters - one DatabaseClient implementation per engine."""

from dbcompare.adapters.outbound.base_client import MEMORY, BaseClient
from dbcompare.adapters.outbound.duckdb_client import DuckDBClient
from dbcompare.adapters.outbound.registry import (
    ENGINES,
    UnknownEngineError,
    available_engines,
    database_path,
    get_engine,
    open_client,
)
from dbcompare.adapters.outbound.sqlite_client import SQLiteClient

__all__ = [
    "MEMORY",
    "BaseClient",
    "DuckDBClient",
    "SQLiteClient",
    "ENGINES",
    "UnknownEngineError",
    "available_engines",
    "database_path",
    "get_engine",
    "open_client",
]
