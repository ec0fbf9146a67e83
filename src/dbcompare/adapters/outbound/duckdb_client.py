"""DuckDB adapter for the DatabaseClient port.

DuckDB binds Python dates, times, UUIDs and bytes natively and casts
parameters to the declared column type on insert, raising when the cast
is impossible. DataFrames are appended by registering them as a view and
inserting from it, which keeps the whole append inside the engine.
"""

from __future__ import annotations

import duckdb
import pandas as pd
from sqlglot import exp

from dbcompare.adapters.outbound.base_client import BaseClient
from dbcompare.domain.entities import QueryResult

_FRAME_VIEW = "__dbcompare_frame"
_DML = ("INSERT", "UPDATE", "DELETE")


class DuckDBClient(BaseClient):
    """Column-oriented embedded engine."""

    engine = "duckdb"
    dialect = "duckdb"

    @property
    def version(self) -> str:
        return duckdb.__version__

    @property
    def error_types(self) -> tuple[type[BaseException], ...]:
        return (duckdb.Error,)

    def _open(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(database=self._path)

    def _result(self, cursor: duckdb.DuckDBPyConnection | None, sql: str) -> QueryResult:
        # execute() of a statement-free string returns None
        if cursor is None or cursor.description is None:
            return QueryResult()
        columns = [column[0] for column in cursor.description]
        rows = cursor.fetchall()
        # DML reports its row count as a one-row "Count" result
        if columns == ["Count"] and sql.lstrip().upper().startswith(_DML):
            return QueryResult(affected_rows=int(rows[0][0]) if rows else 0)
        return QueryResult(columns=columns, rows=rows)

    def _append_frame(self, conn: duckdb.DuckDBPyConnection, name: str, frame: pd.DataFrame) -> None:
        statement = exp.insert(
            exp.select("*").from_(exp.table_(_FRAME_VIEW, quoted=True)),
            exp.table_(name, quoted=True),
        ).sql(dialect=self.dialect)
        conn.register(_FRAME_VIEW, frame)
        try:
            conn.execute(statement)
        finally:
            conn.unregister(_FRAME_VIEW)

    def _read_frame(self, conn: duckdb.DuckDBPyConnection, sql: str) -> pd.DataFrame:
        return conn.execute(sql).df()

    def list_tables(self) -> list[str]:
        result = self.execute(
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = 'main' AND table_type = 'BASE TABLE' "
            "ORDER BY table_name"
        )
        return [row[0] for row in result.rows]

    def declared_types(self, name: str) -> dict[str, str]:
        result = self.execute(
            "SELECT column_name, data_type FROM information_schema.columns "
            "WHERE table_schema = 'main' AND table_name = ? ORDER BY ordinal_position",
            [name],
        )
        return {row[0]: row[1] for row in result.rows}
