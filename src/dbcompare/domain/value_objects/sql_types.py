"""Catalog of SQL type probes.

A probe pairs a declared column type with one Python value that conforms
to it and one that does not. The same probes drive the supported-types
and the type-enforcement illustrations, so both engines always see the
exact same inputs.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any


class TypeCategory(Enum):
    """Broad family a declared type belongs to."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    TEXT = "text"
    TEMPORAL = "temporal"
    BINARY = "binary"
    IDENTIFIER = "identifier"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class TypeProbe:
    """A declared SQL type with a conforming and a non-conforming sample.

    Attributes:
        name: Declared type text, emitted verbatim in CREATE TABLE
        category: Family of the type
        valid: A Python value that conforms to the type
        invalid: A Python value that does not
    """

    name: str
    category: TypeCategory
    valid: Any
    invalid: Any

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("type name must not be empty")

    @property
    def column_name(self) -> str:
        """Column name used for this probe ("decimal_10_2" for DECIMAL(10,2))."""
        cleaned = "".join(ch if ch.isalnum() else "_" for ch in self.name.lower())
        return "_".join(part for part in cleaned.split("_") if part)


DEFAULT_PROBES: tuple[TypeProbe, ...] = (
    TypeProbe("INTEGER", TypeCategory.NUMERIC, 42, "forty-two"),
    TypeProbe("BIGINT", TypeCategory.NUMERIC, 2**40, "a lot"),
    TypeProbe("DOUBLE", TypeCategory.NUMERIC, 3.14159, "pi"),
    TypeProbe("DECIMAL(10,2)", TypeCategory.NUMERIC, 12.5, "twelve fifty"),
    TypeProbe("BOOLEAN", TypeCategory.BOOLEAN, True, "maybe"),
    TypeProbe("VARCHAR", TypeCategory.TEXT, "hello", 42),
    TypeProbe("DATE", TypeCategory.TEMPORAL, date(2024, 1, 31), "2024-02-30"),
    TypeProbe("TIME", TypeCategory.TEMPORAL, time(12, 30, 15), "25:61:00"),
    TypeProbe("TIMESTAMP", TypeCategory.TEMPORAL, datetime(2024, 1, 31, 12, 30, 15), "yesterday"),
    TypeProbe("BLOB", TypeCategory.BINARY, b"\x00\x01\xfe\xff", 3.5),
    TypeProbe(
        "UUID",
        TypeCategory.IDENTIFIER,
        uuid.UUID("12345678-1234-5678-1234-567812345678"),
        "not-a-uuid",
    ),
    # SQLite takes any declared type name; DuckDB refuses unknown ones.
    TypeProbe("FLUFFY", TypeCategory.UNKNOWN, "cloud", "cloud"),
)

_BY_NAME = {probe.name.upper(): probe for probe in DEFAULT_PROBES}


def get_probe(name: str) -> TypeProbe:
    """Look up a probe by declared type name, case-insensitively.

    Raises:
        KeyError: If no probe is declared for the name.
    """
    try:
        return _BY_NAME[name.strip().upper()]
    except KeyError:
        raise KeyError(f"No type probe for {name!r}") from None


def enforcement_probes() -> tuple[TypeProbe, ...]:
    """Probes for which an invalid value is meaningful."""
    return tuple(p for p in DEFAULT_PROBES if p.category is not TypeCategory.UNKNOWN)
