"""Outbound ports - interfaces for the embedded engines."""

from dbcompare.ports.outbound.database_client import (
    DatabaseClient,
    EngineError,
    NotConnectedError,
)

__all__ = [
    "DatabaseClient",
    "EngineError",
    "NotConnectedError",
]
