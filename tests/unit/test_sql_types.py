"""Unit tests for the type probe catalog."""

from __future__ import annotations

import pytest

from dbcompare.domain.value_objects import (
    DEFAULT_PROBES,
    TypeCategory,
    TypeProbe,
    enforcement_probes,
    get_probe,
)


@pytest.mark.unit
class TestTypeProbe:
    """Tests for TypeProbe."""

    def test_column_name_from_parameterised_type(self) -> None:
        """Test that type parameters become a clean column name."""
        assert get_probe("DECIMAL(10,2)").column_name == "decimal_10_2"
        assert get_probe("integer").column_name == "integer"

    def test_empty_name_rejected(self) -> None:
        """Test that a probe needs a type name."""
        with pytest.raises(ValueError):
            TypeProbe("  ", TypeCategory.TEXT, "a", 1)

    def test_lookup_is_case_insensitive(self) -> None:
        """Test probe lookup by name."""
        assert get_probe(" timestamp ") is get_probe("TIMESTAMP")

    def test_unknown_lookup(self) -> None:
        """Test that an unknown type name raises KeyError."""
        with pytest.raises(KeyError):
            get_probe("GEOGRAPHY")


@pytest.mark.unit
class TestCatalog:
    """Tests for the default catalog."""

    def test_names_unique(self) -> None:
        """Test that every probe has a distinct type and column name."""
        names = [p.name for p in DEFAULT_PROBES]
        columns = [p.column_name for p in DEFAULT_PROBES]
        assert len(set(names)) == len(names)
        assert len(set(columns)) == len(columns)

    def test_invalid_differs_from_valid(self) -> None:
        """Test that enforcement probes carry a non-conforming value."""
        for probe in enforcement_probes():
            assert probe.invalid != probe.valid

    def test_enforcement_excludes_unknown_type(self) -> None:
        """Test that the made-up type is only used for the support survey."""
        names = {p.name for p in enforcement_probes()}
        assert "FLUFFY" not in names
        assert "INTEGER" in names
        assert len(names) == len(DEFAULT_PROBES) - 1
