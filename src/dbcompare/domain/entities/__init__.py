"""Domain entities."""

from dbcompare.domain.entities.table import (
    ColumnSpec,
    QueryResult,
    TableSpec,
    drop_table_sql,
    select_all_sql,
)

__all__ = [
    "ColumnSpec",
    "QueryResult",
    "TableSpec",
    "drop_table_sql",
    "select_all_sql",
]
