"""Row versus column storage, timed.

SQLite lays a table out row by row, DuckDB column by column. The same
numeric table is written, read back whole, aggregated over one column and
probed for a single record on each engine. Writes and point lookups touch
whole records and tend to favour the row store; scans and aggregates over
one column tend to favour the column store.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import numpy as np
import pandas as pd
from sqlglot import exp

from dbcompare.application.illustrations.base import Illustration, IllustrationResult
from dbcompare.domain.entities import TableSpec
from dbcompare.ports.outbound import DatabaseClient

TABLE_NAME = "measurements"
OPERATIONS = ("write", "read", "aggregate", "lookup")


def speed_ratio(seconds: float, fastest: float) -> float:
    """How many times slower than the fastest engine.

    A fastest time of zero (below timer resolution) makes every slower
    engine infinitely slower and an equally fast one 1.0.
    """
    if fastest > 0:
        return seconds / fastest
    return 1.0 if seconds <= fastest else float("inf")


class StorageOrientationIllustration(Illustration):
    """Median timings of bulk read/write calls per engine."""

    name = "storage"
    title = "Row and column storage"

    def build_frame(self) -> pd.DataFrame:
        """Seeded numeric table: an integer key followed by random doubles."""
        bench = self._config.benchmark
        rng = np.random.default_rng(bench.seed)
        data = rng.standard_normal((bench.rows, bench.columns))
        frame = pd.DataFrame(data, columns=[f"c{i}" for i in range(bench.columns)])
        frame.insert(0, "id", np.arange(bench.rows, dtype=np.int64))
        return frame

    def table_spec(self, frame: pd.DataFrame) -> TableSpec:
        columns = [("id", "BIGINT")] + [(name, "DOUBLE") for name in frame.columns[1:]]
        return TableSpec.of(TABLE_NAME, columns)

    def _timed(self, engine: str, operation: str, fn: Callable[[], Any]) -> tuple[float, Any]:
        start = time.perf_counter()
        value = fn()
        elapsed = time.perf_counter() - start
        self._metrics.operation_seconds.labels(engine=engine, operation=operation).observe(elapsed)
        return elapsed, value

    def time_engine(self, client: DatabaseClient, frame: pd.DataFrame) -> dict[str, list[float]]:
        """Time each operation ``repeats`` times on one connected client."""
        spec = self.table_spec(frame)
        table = exp.table_(spec.name, quoted=True)
        aggregate_sql = (
            exp.select(exp.Avg(this=exp.column("c0", quoted=True)))
            .from_(table)
            .sql(dialect=client.dialect)
        )
        lookup_sql = (
            exp.select("*")
            .from_(table)
            .where(exp.column("id", quoted=True).eq(exp.Placeholder()))
            .sql(dialect=client.dialect)
        )
        key = len(frame) // 2

        timings: dict[str, list[float]] = {operation: [] for operation in OPERATIONS}
        for _ in range(self._config.benchmark.repeats):
            client.drop_table(spec.name)
            client.create_table(spec)

            elapsed, _ = self._timed(client.name, "write", lambda: client.append_frame(spec.name, frame))
            timings["write"].append(elapsed)

            elapsed, read_back = self._timed(client.name, "read", lambda: client.read_frame(spec.name))
            timings["read"].append(elapsed)
            if len(read_back) != len(frame):
                raise RuntimeError(
                    f"{client.name} returned {len(read_back)} rows, expected {len(frame)}"
                )

            elapsed, _ = self._timed(client.name, "aggregate", lambda: client.execute(aggregate_sql))
            timings["aggregate"].append(elapsed)

            elapsed, _ = self._timed(client.name, "lookup", lambda: client.execute(lookup_sql, [key]))
            timings["lookup"].append(elapsed)

        return timings

    def run(self) -> IllustrationResult:
        frame = self.build_frame()
        medians: dict[str, dict[str, float]] = {}
        for engine in self.engines:
            self._logger.info("timing_engine", engine=engine, rows=len(frame))
            with self.client(engine) as client:
                timings = self.time_engine(client, frame)
                medians[client.name] = {op: float(np.median(values)) for op, values in timings.items()}

        engine_names = list(medians)
        records = []
        for operation in OPERATIONS:
            row: dict[str, Any] = {"operation": operation}
            for engine in engine_names:
                row[f"{engine} (s)"] = round(medians[engine][operation], 6)
            fastest = min(engine_names, key=lambda e: medians[e][operation])
            row["fastest"] = fastest
            best = medians[fastest][operation]
            for engine in engine_names:
                row[f"{engine} / fastest"] = round(speed_ratio(medians[engine][operation], best), 2)
            records.append(row)

        bench = self._config.benchmark
        notes = [
            f"{bench.rows} rows of one BIGINT key and {bench.columns} DOUBLE columns, "
            f"median of {bench.repeats} runs.",
            "write: bulk append of the whole frame; read: SELECT * into a frame; "
            "aggregate: AVG over one column; lookup: one row by key (no index).",
        ]
        return IllustrationResult(self.name, self.title, pd.DataFrame.from_records(records), notes)
