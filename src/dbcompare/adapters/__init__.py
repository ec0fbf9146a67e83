"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (CLI)
- Outbound adapters: One DatabaseClient per embedded engine
"""

from dbcompare.adapters.outbound import (
    DuckDBClient,
    SQLiteClient,
    get_engine,
)

__all__ = [
    "DuckDBClient",
    "SQLiteClient",
    "get_engine",
]
