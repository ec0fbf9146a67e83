"""Integration tests for the engine adapters."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from dbcompare.adapters.outbound import (
    DuckDBClient,
    SQLiteClient,
    UnknownEngineError,
    available_engines,
    database_path,
    get_engine,
    open_client,
)
from dbcompare.domain.entities import TableSpec
from dbcompare.infrastructure.config import Config, EngineConfig
from dbcompare.infrastructure.metrics import MetricsRegistry
from dbcompare.ports.outbound import EngineError, NotConnectedError

PEOPLE = TableSpec.of("people", [("id", "INTEGER"), ("name", "VARCHAR")])


@pytest.mark.integration
class TestClientLifecycle:
    """Tests for connecting and closing clients."""

    def test_not_connected(self, metrics_registry: MetricsRegistry) -> None:
        """Test that using a client before connect() fails."""
        client = SQLiteClient(metrics=metrics_registry)

        with pytest.raises(NotConnectedError):
            client.execute("SELECT 1")

    def test_close_is_idempotent(self, metrics_registry: MetricsRegistry) -> None:
        """Test that closing twice is harmless."""
        client = DuckDBClient(metrics=metrics_registry)
        client.connect()
        client.close()
        client.close()

        assert not client.is_connected

    def test_context_manager(self, metrics_registry: MetricsRegistry) -> None:
        """Test that the context manager opens and closes."""
        with SQLiteClient(metrics=metrics_registry) as client:
            assert client.is_connected
        assert not client.is_connected

    def test_double_connect(self, sqlite_client: SQLiteClient) -> None:
        """Test that connecting an open client fails."""
        with pytest.raises(RuntimeError):
            sqlite_client.connect()

    def test_versions(self, sqlite_client: SQLiteClient, duckdb_client: DuckDBClient) -> None:
        """Test that both engines report a version."""
        assert sqlite_client.version[0].isdigit()
        assert duckdb_client.version[0].isdigit()


@pytest.mark.integration
class TestGenericInterface:
    """The same calls against each engine."""

    def test_create_append_read(self, any_client) -> None:
        """Test the create / append / read cycle."""
        any_client.create_table(PEOPLE)
        appended = any_client.append_rows(PEOPLE, [(1, "Alice"), (2, "Bob")])

        result = any_client.read_table("people")

        assert appended == 2
        assert result.columns == ["id", "name"]
        assert sorted(result.rows) == [(1, "Alice"), (2, "Bob")]

    def test_list_and_drop_tables(self, any_client) -> None:
        """Test listing and dropping tables."""
        any_client.create_table(PEOPLE)
        any_client.create_table(TableSpec.of("animals", [("name", "VARCHAR")]))

        assert any_client.list_tables() == ["animals", "people"]

        any_client.drop_table("animals")
        any_client.drop_table("animals")

        assert any_client.list_tables() == ["people"]

    def test_declared_types(self, any_client) -> None:
        """Test reading declared types from the catalog."""
        any_client.create_table(PEOPLE)

        declared = any_client.declared_types("people")

        assert list(declared) == ["id", "name"]
        assert declared["id"] == "INTEGER"

    def test_append_and_read_frame(self, any_client) -> None:
        """Test bulk append and read of a DataFrame."""
        spec = TableSpec.of("numbers", [("id", "BIGINT"), ("x", "DOUBLE")])
        frame = pd.DataFrame({"id": np.arange(50, dtype=np.int64), "x": np.linspace(0, 1, 50)})
        any_client.create_table(spec)

        appended = any_client.append_frame("numbers", frame)
        read_back = any_client.read_frame("numbers").sort_values("id").reset_index(drop=True)

        assert appended == 50
        assert len(read_back) == 50
        assert read_back["x"].tolist() == pytest.approx(frame["x"].tolist())

    def test_empty_frame_appends_nothing(self, any_client) -> None:
        """Test that an empty DataFrame is a no-op."""
        any_client.create_table(PEOPLE)

        assert any_client.append_frame("people", pd.DataFrame(columns=["id", "name"])) == 0
        assert len(any_client.read_table("people")) == 0

    def test_syntax_error_becomes_engine_error(self, any_client) -> None:
        """Test that driver exceptions surface as EngineError."""
        with pytest.raises(EngineError) as excinfo:
            any_client.execute("SELEC 1")

        assert excinfo.value.engine == any_client.name
        assert excinfo.value.message.text
        assert excinfo.value.original is not None

    def test_statement_metrics(self, any_client, metrics_registry: MetricsRegistry) -> None:
        """Test that ok and error statements are counted."""
        any_client.execute("SELECT 1")
        with pytest.raises(EngineError):
            any_client.execute("SELEC 1")

        registry = metrics_registry.registry
        labels = {"engine": any_client.name}
        assert registry.get_sample_value("dbcompare_statements_total", {**labels, "status": "ok"}) >= 1
        assert registry.get_sample_value("dbcompare_statements_total", {**labels, "status": "error"}) == 1


@pytest.mark.integration
class TestEngineDifferences:
    """Behaviour that differs between the engines."""

    def test_sqlite_keeps_text_in_integer_column(self, sqlite_client: SQLiteClient) -> None:
        """Test SQLite's type affinity."""
        spec = TableSpec.of("t", [("x", "INTEGER")])
        sqlite_client.create_table(spec)
        sqlite_client.append_rows(spec, [("forty-two",), (42,)])

        assert sqlite_client.stored_types("t", "x") == ["text", "integer"]

    def test_duckdb_rejects_text_in_integer_column(self, duckdb_client: DuckDBClient) -> None:
        """Test DuckDB's cast on insert."""
        spec = TableSpec.of("t", [("x", "INTEGER")])
        duckdb_client.create_table(spec)

        with pytest.raises(EngineError) as excinfo:
            duckdb_client.append_rows(spec, [("forty-two",)])

        assert "forty-two" in excinfo.value.message.text

    def test_duckdb_statement_free_result(self, duckdb_client: DuckDBClient) -> None:
        """Test that a statement-free execute (no cursor) gives an empty result."""
        result = duckdb_client._result(None, "")

        assert result.columns == []
        assert result.rows == []
        assert result.affected_rows == 0

    def test_strict_sqlite_rejects_text(self, strict_sqlite_client: SQLiteClient) -> None:
        """Test SQLite STRICT tables."""
        spec = TableSpec.of("t", [("x", "INTEGER")])
        strict_sqlite_client.create_table(spec)

        with pytest.raises(EngineError) as excinfo:
            strict_sqlite_client.append_rows(spec, [("forty-two",)])

        assert strict_sqlite_client.name == "sqlite (strict)"
        assert "cannot store" in excinfo.value.message.text

    def test_failed_insert_leaves_no_rows(self, strict_sqlite_client: SQLiteClient) -> None:
        """Test that a rejected batch is rolled back."""
        spec = TableSpec.of("t", [("x", "INTEGER")])
        strict_sqlite_client.create_table(spec)

        with pytest.raises(EngineError):
            strict_sqlite_client.append_rows(spec, [(1,), ("two",)])

        assert len(strict_sqlite_client.read_table("t")) == 0

    def test_sqlite_accepts_any_type_name(self, sqlite_client: SQLiteClient) -> None:
        """Test that SQLite keeps made-up type names."""
        sqlite_client.create_table(TableSpec.of("t", [("x", "FLUFFY")]))

        assert sqlite_client.declared_types("t") == {"x": "FLUFFY"}

    def test_duckdb_refuses_unknown_type_name(self, duckdb_client: DuckDBClient) -> None:
        """Test that DuckDB refuses made-up type names."""
        with pytest.raises(EngineError) as excinfo:
            duckdb_client.create_table(TableSpec.of("t", [("x", "FLUFFY")]))

        assert "FLUFFY" in excinfo.value.message.text

    def test_dates(self, sqlite_client: SQLiteClient, duckdb_client: DuckDBClient) -> None:
        """Test that SQLite returns dates as text and DuckDB as dates."""
        spec = TableSpec.of("t", [("d", "DATE")])
        for client in (sqlite_client, duckdb_client):
            client.create_table(spec)
            client.append_rows(spec, [(date(2024, 1, 31),)])

        assert sqlite_client.read_table("t").scalar() == "2024-01-31"
        assert duckdb_client.read_table("t").scalar() == date(2024, 1, 31)


@pytest.mark.integration
class TestRegistry:
    """Tests for the engine registry."""

    def test_available_engines(self) -> None:
        assert available_engines() == ["sqlite", "duckdb"]

    def test_get_engine(self, metrics_registry: MetricsRegistry) -> None:
        """Test instantiating by name."""
        client = get_engine("DuckDB", metrics=metrics_registry)

        assert isinstance(client, DuckDBClient)
        assert not client.is_connected

    def test_unknown_engine(self) -> None:
        """Test that an unknown name raises UnknownEngineError."""
        with pytest.raises(UnknownEngineError):
            get_engine("oracle")

    def test_open_client_in_memory(self, test_config: Config, metrics_registry: MetricsRegistry) -> None:
        """Test that databases are in memory by default."""
        client = open_client("sqlite", test_config, "types", metrics=metrics_registry)

        assert client.path == ":memory:"

    def test_open_client_on_disk(self, temp_dir: Path, metrics_registry: MetricsRegistry) -> None:
        """Test file databases under database_dir, recreated on each open."""
        config = Config(engine=EngineConfig(database_dir=temp_dir))

        with open_client("duckdb", config, "types", metrics=metrics_registry) as client:
            client.create_table(PEOPLE)
        assert (temp_dir / "types.duckdb").exists()

        with open_client("duckdb", config, "types", metrics=metrics_registry) as client:
            assert client.list_tables() == []

    @pytest.mark.parametrize(
        ("engine", "suffixes"),
        [("sqlite", ["-journal", "-wal", "-shm"]), ("duckdb", [".wal"])],
    )
    def test_stale_side_files_removed(self, temp_dir: Path, engine: str, suffixes: list[str]) -> None:
        """Test that a previous run's journal and WAL files are cleared too."""
        config = Config(engine=EngineConfig(database_dir=temp_dir))
        stale = [temp_dir / f"blobs.{engine}"] + [temp_dir / f"blobs.{engine}{s}" for s in suffixes]
        for path in stale:
            path.write_bytes(b"left over")

        assert database_path(engine, config, "blobs") == str(stale[0])
        assert not any(path.exists() for path in stale)

    def test_strict_is_sqlite_only(self, test_config: Config) -> None:
        """Test that STRICT tables cannot be asked of DuckDB."""
        with pytest.raises(ValueError):
            open_client("duckdb", test_config, "types", strict=True)

    def test_open_strict_client(self, test_config: Config, metrics_registry: MetricsRegistry) -> None:
        client = open_client("sqlite", test_config, "enforcement", metrics=metrics_registry, strict=True)

        assert isinstance(client, SQLiteClient)
        assert client.strict
