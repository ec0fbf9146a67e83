"""Shared behaviour of the engine adapters.

Both engines speak DB-API 2.0, so most of the DatabaseClient port is
implemented once here. Subclasses supply the connection, the driver's
exception types, parameter adaptation and the few catalog queries that
differ between engines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Generator, Iterable, Sequence

import pandas as pd
from sqlglot import exp

from dbcompare.domain.entities import QueryResult, TableSpec, drop_table_sql, select_all_sql
from dbcompare.infrastructure.logging import get_logger
from dbcompare.infrastructure.metrics import MetricsRegistry, get_metrics
from dbcompare.infrastructure.tracing import db_span
from dbcompare.ports.outbound import EngineError, NotConnectedError

MEMORY = ":memory:"


class BaseClient(ABC):
    """DB-API backed implementation of the DatabaseClient port."""

    engine: str = ""
    dialect: str = ""

    def __init__(self, path: str = MEMORY, metrics: MetricsRegistry | None = None) -> None:
        """Initialize the client.

        Args:
            path: Database file, or ":memory:" for a private in-memory database.
            metrics: Registry for statement counters (global registry if None).
        """
        self._path = str(path)
        self._conn: Any = None
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, engine=self.name)

    # -- hooks ---------------------------------------------------------------

    @property
    @abstractmethod
    def error_types(self) -> tuple[type[BaseException], ...]:
        """Driver exceptions translated into EngineError."""
        ...

    @abstractmethod
    def _open(self) -> Any:
        """Open and return a DB-API connection."""
        ...

    @abstractmethod
    def _result(self, cursor: Any, sql: str) -> QueryResult:
        """Build a QueryResult from an executed cursor."""
        ...

    def _adapt(self, value: Any) -> Any:
        return value

    def _after_write(self) -> None:
        pass

    def _after_error(self) -> None:
        pass

    # -- properties ----------------------------------------------------------

    @property
    def name(self) -> str:
        return self.engine

    @property
    def path(self) -> str:
        return self._path

    @property
    @abstractmethod
    def version(self) -> str:
        ...

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    # -- lifecycle -----------------------------------------------------------

    def connect(self) -> None:
        if self._conn is not None:
            raise RuntimeError(f"{self.name} client already connected")
        with self._guard("connect"):
            self._conn = self._open()
        self._logger.debug("connected", path=self._path, version=self.version)

    def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        conn.close()
        self._logger.debug("closed", path=self._path)

    def __enter__(self) -> BaseClient:
        self.connect()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_connected else "closed"
        return f"{type(self).__name__}(path={self._path!r}, {state})"

    # -- statements ----------------------------------------------------------

    def _connection(self) -> Any:
        if self._conn is None:
            raise NotConnectedError(f"{self.name} client is not connected")
        return self._conn

    @contextmanager
    def _guard(self, sql: str) -> Generator[None, None, None]:
        try:
            yield
        except self.error_types as e:
            self._after_error()
            self._metrics.statements_total.labels(engine=self.name, status="error").inc()
            self._logger.info("engine_error", sql=sql, error=str(e))
            raise EngineError(self.name, str(e), e) from e
        self._metrics.statements_total.labels(engine=self.name, status="ok").inc()

    def _adapt_row(self, row: Sequence[Any]) -> tuple[Any, ...]:
        return tuple(self._adapt(value) for value in row)

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        conn = self._connection()
        self._logger.debug("execute", sql=sql)
        with db_span(self.name, self.engine, "execute", sql):
            with self._guard(sql):
                if params is None:
                    cursor = conn.execute(sql)
                else:
                    cursor = conn.execute(sql, self._adapt_row(params))
                result = self._result(cursor, sql)
                self._after_write()
        return result

    def executemany(self, sql: str, rows: Iterable[Sequence[Any]]) -> int:
        conn = self._connection()
        batch = [self._adapt_row(row) for row in rows]
        if not batch:
            return 0
        self._logger.debug("executemany", sql=sql, rows=len(batch))
        with db_span(self.name, self.engine, "executemany", sql, rows=len(batch)):
            with self._guard(sql):
                conn.executemany(sql, batch)
                self._after_write()
        return len(batch)

    # -- tables --------------------------------------------------------------

    def _create_sql(self, spec: TableSpec) -> str:
        return spec.create_sql(self.dialect)

    def create_table(self, spec: TableSpec) -> None:
        self.execute(self._create_sql(spec))

    def drop_table(self, name: str) -> None:
        self.execute(drop_table_sql(name, self.dialect))

    def append_rows(self, spec: TableSpec, rows: Iterable[Sequence[Any]]) -> int:
        count = self.executemany(spec.insert_sql(self.dialect), rows)
        self._metrics.rows_written_total.labels(engine=self.name).inc(count)
        return count

    def append_frame(self, name: str, frame: pd.DataFrame) -> int:
        conn = self._connection()
        if frame.empty:
            return 0
        label = f"append_frame {name}"
        self._logger.debug("append_frame", table=name, rows=len(frame))
        with db_span(self.name, self.engine, "append_frame", table=name, rows=len(frame)):
            with self._guard(label):
                self._append_frame(conn, name, frame)
                self._after_write()
        self._metrics.rows_written_total.labels(engine=self.name).inc(len(frame))
        return len(frame)

    @abstractmethod
    def _append_frame(self, conn: Any, name: str, frame: pd.DataFrame) -> None:
        ...

    def read_table(self, name: str) -> QueryResult:
        return self.execute(select_all_sql(name, self.dialect))

    def read_frame(self, name: str) -> pd.DataFrame:
        conn = self._connection()
        sql = select_all_sql(name, self.dialect)
        self._logger.debug("read_frame", sql=sql)
        with db_span(self.name, self.engine, "read_frame", sql):
            with self._guard(sql):
                return self._read_frame(conn, sql)

    @abstractmethod
    def _read_frame(self, conn: Any, sql: str) -> pd.DataFrame:
        ...

    @abstractmethod
    def list_tables(self) -> list[str]:
        ...

    @abstractmethod
    def declared_types(self, name: str) -> dict[str, str]:
        ...

    def stored_types(self, name: str, column: str) -> list[str]:
        ident = exp.to_identifier(column, quoted=True).sql(dialect=self.dialect)
        table = exp.table_(name, quoted=True).sql(dialect=self.dialect)
        result = self.execute(f"SELECT typeof({ident}) FROM {table}")
        return [str(row[0]) for row in result.rows]
