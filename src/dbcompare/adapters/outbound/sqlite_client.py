"""SQLite adapter for the DatabaseClient port.

Uses the standard library driver. SQLite stores every value in one of
five storage classes and treats declared column types as affinities, so
this adapter does no conversion of its own beyond turning temporal,
UUID and Decimal parameters into text. It does so per call rather than
through sqlite3.register_adapter, which would be process-wide.
"""

from __future__ import annotations

import sqlite3
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

import pandas as pd

from dbcompare.adapters.outbound.base_client import MEMORY, BaseClient
from dbcompare.domain.entities import QueryResult, TableSpec
from dbcompare.infrastructure.metrics import MetricsRegistry


class SQLiteClient(BaseClient):
    """Row-oriented embedded engine.

    Args:
        path: Database file, or ":memory:".
        strict: Create tables with the STRICT option (SQLite 3.37+), which
            makes SQLite reject values that do not match the declared type.
        metrics: Metrics registry.
    """

    engine = "sqlite"
    dialect = "sqlite"

    def __init__(
        self,
        path: str = MEMORY,
        strict: bool = False,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._strict = strict
        super().__init__(path, metrics)

    @property
    def name(self) -> str:
        return "sqlite (strict)" if self._strict else "sqlite"

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def version(self) -> str:
        return sqlite3.sqlite_version

    @property
    def error_types(self) -> tuple[type[BaseException], ...]:
        # read_sql_query wraps driver errors in pandas' own DatabaseError
        return (sqlite3.Error, pd.errors.DatabaseError)

    def _open(self) -> sqlite3.Connection:
        return sqlite3.connect(self._path)

    def _adapt(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat(sep=" ")
        if isinstance(value, (date, time)):
            return value.isoformat()
        if isinstance(value, (uuid.UUID, Decimal)):
            return str(value)
        return value

    def _after_write(self) -> None:
        if self._conn is not None and self._conn.in_transaction:
            self._conn.commit()

    def _after_error(self) -> None:
        if self._conn is not None and self._conn.in_transaction:
            self._conn.rollback()

    def _result(self, cursor: sqlite3.Cursor, sql: str) -> QueryResult:
        if cursor.description is None:
            return QueryResult(affected_rows=max(cursor.rowcount, 0))
        columns = [column[0] for column in cursor.description]
        return QueryResult(columns=columns, rows=cursor.fetchall())

    def _create_sql(self, spec: TableSpec) -> str:
        return spec.create_sql(self.dialect, strict=self._strict)

    def _append_frame(self, conn: sqlite3.Connection, name: str, frame: pd.DataFrame) -> None:
        frame.to_sql(name, conn, if_exists="append", index=False)

    def _read_frame(self, conn: sqlite3.Connection, sql: str) -> pd.DataFrame:
        return pd.read_sql_query(sql, conn)

    def list_tables(self) -> list[str]:
        result = self.execute(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row[0] for row in result.rows]

    def declared_types(self, name: str) -> dict[str, str]:
        result = self.execute("SELECT name, type FROM pragma_table_info(?)", [name])
        return {row[0]: row[1] for row in result.rows}
