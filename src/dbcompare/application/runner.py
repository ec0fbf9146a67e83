"""Comparison runner - unified entry point for running illustrations.

Usage:
    from dbcompare.application import ComparisonRunner
    from dbcompare.infrastructure import Config

    runner = ComparisonRunner(Config())
    for result in runner.run(["types", "enforcement"]):
        print(result.to_markdown())

    # One query, written once, on every engine
    for outcome in runner.compare_query("SELECT 1 + 1 AS two"):
        print(outcome.engine, outcome.result or outcome.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import sqlglot

from dbcompare.adapters.outbound import get_engine, open_client
from dbcompare.application.illustrations import (
    ILLUSTRATIONS,
    IllustrationResult,
    get_illustration,
)
from dbcompare.domain.entities import QueryResult
from dbcompare.domain.services import EngineMessage
from dbcompare.infrastructure.config import Config
from dbcompare.infrastructure.logging import get_logger
from dbcompare.infrastructure.metrics import MetricsRegistry, get_metrics
from dbcompare.infrastructure.tracing import trace_span
from dbcompare.ports.outbound import EngineError

logger = get_logger(__name__)


class EmptyQueryError(ValueError):
    """Raised when a query contains no statement to run."""


@dataclass
class QueryOutcome:
    """One engine's answer to a transpiled query.

    ``sql`` holds every statement sent to the engine; ``result`` is the
    result of the last one.
    """

    engine: str
    sql: str
    result: QueryResult | None = None
    error: EngineMessage | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class ComparisonRunner:
    """Runs illustrations and ad-hoc queries against every configured engine.

    Everything runs sequentially: one illustration at a time, one engine at
    a time within an illustration.
    """

    def __init__(self, config: Config, metrics: MetricsRegistry | None = None) -> None:
        self._config = config
        self._metrics = metrics or get_metrics()
        self._metrics.set_info(self.engine_versions())

    @property
    def config(self) -> Config:
        return self._config

    def engine_versions(self) -> dict[str, str]:
        """Engine name -> library version, for every configured engine."""
        return {
            engine: get_engine(engine, metrics=self._metrics).version
            for engine in self._config.engine.engines
        }

    def run_one(self, name: str) -> IllustrationResult:
        illustration = get_illustration(name, self._config, self._metrics)
        log = logger.bind(illustration=illustration.name)
        log.info("illustration_started", engines=self._config.engine.engines)
        with trace_span(f"illustration.{illustration.name}", {"illustration.title": illustration.title}):
            result = illustration.run()
        self._metrics.illustrations_total.labels(illustration=illustration.name).inc()
        log.info("illustration_finished", rows=len(result.table))
        return result

    def run(self, names: Iterable[str] | None = None) -> list[IllustrationResult]:
        """Run the named illustrations (all of them by default), in order."""
        selected = list(names) if names is not None else list(ILLUSTRATIONS)
        # resolve every name before running anything
        for name in selected:
            get_illustration(name, self._config, self._metrics)
        return [self.run_one(name) for name in selected]

    def compare_query(self, sql: str, read: str = "duckdb") -> list[QueryOutcome]:
        """Transpile a script from ``read`` to each engine's dialect and run it.

        Statements run in order on one fresh connection per engine. The first
        engine error stops that engine's script and becomes its outcome.

        Raises:
            EmptyQueryError: If ``sql`` holds no statement.
            sqlglot.errors.SqlglotError: If the script does not parse in ``read``.
        """
        if not sql.strip():
            raise EmptyQueryError("query contains no SQL statement")
        outcomes = []
        for engine in self._config.engine.engines:
            client = open_client(engine, self._config, "query", metrics=self._metrics)
            statements = [
                statement
                for statement in sqlglot.transpile(sql, read=read, write=client.dialect)
                if statement.strip()
            ]
            if not statements:
                raise EmptyQueryError("query contains no SQL statement")
            script = ";\n".join(statements)
            with trace_span("query.compare", {"db.system": client.engine, "db.statement": script}):
                with client:
                    outcome = QueryOutcome(engine, script)
                    try:
                        for statement in statements:
                            outcome.result = client.execute(statement)
                    except EngineError as e:
                        outcome.result = None
                        outcome.error = e.message
                    outcomes.append(outcome)
        return outcomes
