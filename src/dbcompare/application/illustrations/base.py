"""Common scaffolding for illustrations.

An illustration runs the same short script against every configured
engine, one engine at a time, and tabulates what each engine did. It
opens a fresh connection per engine and closes it before moving on, so
no state survives from one engine or one illustration to the next.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator

import pandas as pd

from dbcompare.adapters.outbound import open_client
from dbcompare.infrastructure.config import Config
from dbcompare.infrastructure.logging import get_logger
from dbcompare.infrastructure.metrics import MetricsRegistry, get_metrics
from dbcompare.ports.outbound import DatabaseClient


@dataclass
class IllustrationResult:
    """Tabulated outcome of one illustration."""

    name: str
    title: str
    table: pd.DataFrame
    notes: list[str] = field(default_factory=list)

    def to_markdown(self, **kwargs: Any) -> str:
        return self.table.to_markdown(index=False, **kwargs)


class Illustration(ABC):
    """Base class for a side-by-side engine illustration."""

    name: str = ""
    title: str = ""

    def __init__(self, config: Config, metrics: MetricsRegistry | None = None) -> None:
        self._config = config
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, illustration=self.name)

    @property
    def engines(self) -> list[str]:
        return list(self._config.engine.engines)

    @contextmanager
    def client(self, engine: str, strict: bool = False) -> Generator[DatabaseClient, None, None]:
        """Connected client for one engine, closed on exit."""
        client = open_client(engine, self._config, self.name, metrics=self._metrics, strict=strict)
        client.connect()
        try:
            yield client
        finally:
            client.close()

    @abstractmethod
    def run(self) -> IllustrationResult:
        """Run against every configured engine and tabulate the outcome."""
        ...
