"""Ports layer - interface definitions following Hexagonal Architecture.

Outbound ports define what the illustrations need from a database engine.
Adapters implement them for SQLite and DuckDB.
"""

from dbcompare.ports.outbound import DatabaseClient, EngineError, NotConnectedError

__all__ = [
    "DatabaseClient",
    "EngineError",
    "NotConnectedError",
]
