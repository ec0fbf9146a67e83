"""Configuration management for the engine comparison."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KNOWN_ENGINES = ("sqlite", "duckdb")


class EngineConfig(BaseModel):
    """Which engines to compare and where their databases live."""

    engines: list[str] = Field(
        default_factory=lambda: list(KNOWN_ENGINES),
        min_length=1,
        description="Engines to compare, in display order",
    )
    database_dir: Path | None = Field(
        default=None, description="Directory for database files (None = in-memory)"
    )
    sqlite_strict: bool = Field(
        default=True, description="Also probe type enforcement with SQLite STRICT tables"
    )

    @field_validator("engines")
    @classmethod
    def _check_engines(cls, value: list[str]) -> list[str]:
        names = [name.strip().lower() for name in value]
        unknown = sorted(set(names) - set(KNOWN_ENGINES))
        if unknown:
            raise ValueError(f"unknown engines: {', '.join(unknown)}")
        if len(set(names)) != len(names):
            raise ValueError("engines must not repeat")
        return names


class BenchmarkConfig(BaseModel):
    """Sizing of the storage orientation timings."""

    rows: int = Field(default=100_000, ge=1, description="Rows in the timed table")
    columns: int = Field(default=10, ge=1, le=256, description="Numeric columns in the timed table")
    repeats: int = Field(default=3, ge=1, description="Timed repetitions per operation")
    seed: int = Field(default=42, description="Random seed for generated data")


class BookConfig(BaseModel):
    """Book output configuration."""

    output_dir: Path = Field(default=Path("_book"), description="Rendered book directory")
    title: str = Field(default="SQLite and DuckDB, side by side", description="Book title")
    author: str = Field(default="dbcompare", description="Book author")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="dbcompare", description="Service name for tracing")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Prometheus metrics port (None = disabled)"
    )


class Config(BaseSettings):
    """Main configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DBCOMPARE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
    book: BookConfig = Field(default_factory=BookConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the database and book directories exist."""
        if self.engine.database_dir is not None:
            self.engine.database_dir.mkdir(parents=True, exist_ok=True)
        self.book.output_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
