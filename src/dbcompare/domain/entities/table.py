"""Table descriptions and query results.

A TableSpec knows how to spell its own statements for a given sqlglot
dialect. Identifiers are always quoted; declared types are emitted
verbatim, because what each engine makes of a declared type name is the
thing being compared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import pandas as pd
from sqlglot import exp


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """A column definition for CREATE TABLE."""

    name: str
    type_name: str
    nullable: bool = True

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("column name must not be empty")
        if not self.type_name.strip():
            raise ValueError(f"column {self.name!r} has an empty type")

    def definition_sql(self, dialect: str) -> str:
        ident = exp.to_identifier(self.name, quoted=True).sql(dialect=dialect)
        null_clause = "" if self.nullable else " NOT NULL"
        return f"{ident} {self.type_name}{null_clause}"


@dataclass(frozen=True)
class TableSpec:
    """A table with an ordered list of columns."""

    name: str
    columns: tuple[ColumnSpec, ...]

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("table name must not be empty")
        if not self.columns:
            raise ValueError(f"table {self.name!r} needs at least one column")
        seen: set[str] = set()
        for column in self.columns:
            key = column.name.lower()
            if key in seen:
                raise ValueError(f"duplicate column {column.name!r} in table {self.name!r}")
            seen.add(key)

    @classmethod
    def of(cls, name: str, columns: Sequence[tuple[str, str]]) -> TableSpec:
        """Build a spec from (name, type) pairs."""
        return cls(name, tuple(ColumnSpec(col, type_name) for col, type_name in columns))

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def _table(self) -> exp.Table:
        return exp.table_(self.name, quoted=True)

    def create_sql(self, dialect: str, strict: bool = False) -> str:
        """CREATE TABLE statement; ``strict`` adds SQLite's STRICT table option."""
        table = self._table().sql(dialect=dialect)
        body = ", ".join(column.definition_sql(dialect) for column in self.columns)
        suffix = " STRICT" if strict else ""
        return f"CREATE TABLE {table} ({body}){suffix}"

    def insert_sql(self, dialect: str) -> str:
        """Parameterised INSERT with one positional placeholder per column."""
        placeholders = tuple(exp.Placeholder() for _ in self.columns)
        statement = exp.insert(
            exp.values([placeholders]),
            self._table(),
            columns=[exp.to_identifier(name, quoted=True) for name in self.column_names],
        )
        return statement.sql(dialect=dialect)

    def select_sql(self, dialect: str) -> str:
        return exp.select("*").from_(self._table()).sql(dialect=dialect)

    def drop_sql(self, dialect: str) -> str:
        return drop_table_sql(self.name, dialect)


def drop_table_sql(name: str, dialect: str) -> str:
    """DROP TABLE IF EXISTS for a quoted table name."""
    statement = exp.Drop(this=exp.table_(name, quoted=True), kind="TABLE", exists=True)
    return statement.sql(dialect=dialect)


def select_all_sql(name: str, dialect: str) -> str:
    """SELECT * for a quoted table name."""
    return exp.select("*").from_(exp.table_(name, quoted=True)).sql(dialect=dialect)


@dataclass
class QueryResult:
    """Columns and rows returned by a statement."""

    columns: list[str] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)
    affected_rows: int = 0

    def __len__(self) -> int:
        return len(self.rows)

    def records(self) -> list[dict[str, Any]]:
        return [dict(zip(self.columns, row)) for row in self.rows]

    def scalar(self) -> Any:
        """First column of the first row, or None for an empty result."""
        if not self.rows:
            return None
        return self.rows[0][0]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame.from_records(self.rows, columns=self.columns)
