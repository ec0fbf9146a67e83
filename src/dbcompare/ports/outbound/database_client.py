"""Database client port - the generic database interface.

Every engine is reached through the same small set of calls, mirroring a
DBI-style layer: connect, execute, create/drop tables, bulk-append and
bulk-read. Illustrations are written once against this port and run
unchanged against each engine adapter.

Engine exceptions never leak through the port. Each adapter re-raises
them as EngineError carrying the engine name and the parsed message, so
callers can document an error without knowing which driver produced it.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Iterable, Protocol, Sequence

import pandas as pd

from dbcompare.domain.entities import QueryResult, TableSpec
from dbcompare.domain.services import EngineMessage, parse_error_message


class DatabaseClient(Protocol):
    """Protocol for a connection to one embedded SQL engine.

    A client owns at most one open connection. Calls are synchronous and
    must not be shared between threads.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the engine (e.g. "sqlite", "sqlite (strict)")."""
        ...

    @property
    @abstractmethod
    def dialect(self) -> str:
        """sqlglot dialect used to spell statements for this engine."""
        ...

    @property
    @abstractmethod
    def version(self) -> str:
        """Version string of the engine library."""
        ...

    @property
    @abstractmethod
    def path(self) -> str:
        """Database location (":memory:" for in-memory databases)."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        ...

    @abstractmethod
    def connect(self) -> None:
        """Open the connection.

        Raises:
            EngineError: If the engine refuses to open the database.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Closing a closed client is a no-op."""
        ...

    @abstractmethod
    def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        """Execute one statement and fetch its rows, if any.

        Raises:
            EngineError: If the engine rejects the statement.
            NotConnectedError: If connect() has not been called.
        """
        ...

    @abstractmethod
    def executemany(self, sql: str, rows: Iterable[Sequence[Any]]) -> int:
        """Execute one statement once per parameter row; returns rows affected."""
        ...

    @abstractmethod
    def create_table(self, spec: TableSpec) -> None:
        ...

    @abstractmethod
    def drop_table(self, name: str) -> None:
        """Drop a table if it exists."""
        ...

    @abstractmethod
    def list_tables(self) -> list[str]:
        """Names of user tables, sorted."""
        ...

    @abstractmethod
    def append_rows(self, spec: TableSpec, rows: Iterable[Sequence[Any]]) -> int:
        """Insert rows into an existing table; returns rows appended."""
        ...

    @abstractmethod
    def append_frame(self, name: str, frame: pd.DataFrame) -> int:
        """Bulk-append a DataFrame into an existing table with matching columns."""
        ...

    @abstractmethod
    def read_table(self, name: str) -> QueryResult:
        """Read every row of a table."""
        ...

    @abstractmethod
    def read_frame(self, name: str) -> pd.DataFrame:
        """Read every row of a table into a DataFrame."""
        ...

    @abstractmethod
    def declared_types(self, name: str) -> dict[str, str]:
        """Column name -> declared type as the engine's catalog reports it."""
        ...

    @abstractmethod
    def stored_types(self, name: str, column: str) -> list[str]:
        """typeof() of every value stored in a column, in row order."""
        ...


class EngineError(Exception):
    """Raised when an engine rejects a call.

    Attributes:
        engine: Name of the engine that raised
        message: Parsed form of the engine's message
        original: The driver exception
    """

    def __init__(self, engine: str, raw_message: str, original: BaseException | None = None) -> None:
        self.engine = engine
        self.message: EngineMessage = parse_error_message(raw_message)
        self.original = original
        super().__init__(f"{engine}: {raw_message}")


class NotConnectedError(Exception):
    """Raised when a client is used before connect() or after close()."""

    pass
