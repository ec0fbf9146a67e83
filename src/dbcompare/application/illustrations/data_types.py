"""Which declared types each engine supports, and what comes back."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import pandas as pd

from dbcompare.application.illustrations.base import Illustration, IllustrationResult
from dbcompare.domain.entities import TableSpec
from dbcompare.domain.services import shorten
from dbcompare.domain.value_objects import DEFAULT_PROBES, TypeProbe
from dbcompare.infrastructure.config import Config
from dbcompare.infrastructure.metrics import MetricsRegistry
from dbcompare.ports.outbound import DatabaseClient, EngineError


@dataclass
class TypeSupport:
    """What one engine made of one declared type."""

    type: str
    engine: str
    created: bool
    declared: str | None = None
    stored: str | None = None
    returned: str | None = None
    round_trip: bool = False
    error: str | None = None


class DataTypesIllustration(Illustration):
    """Create a one-column table per type, store a sample value, read it back."""

    name = "types"
    title = "Supported data types"

    def __init__(
        self,
        config: Config,
        metrics: MetricsRegistry | None = None,
        probes: Sequence[TypeProbe] = DEFAULT_PROBES,
    ) -> None:
        super().__init__(config, metrics)
        self._probes = tuple(probes)

    def probe(self, client: DatabaseClient, probe: TypeProbe) -> TypeSupport:
        column = probe.column_name
        spec = TableSpec.of(f"t_{column}", [(column, probe.name)])
        try:
            client.create_table(spec)
        except EngineError as e:
            return TypeSupport(probe.name, client.name, created=False, error=shorten(e.message.text))

        support = TypeSupport(probe.name, client.name, created=True)
        support.declared = client.declared_types(spec.name).get(column)
        try:
            client.append_rows(spec, [(probe.valid,)])
        except EngineError as e:
            support.error = shorten(e.message.text)
            return support

        value: Any = client.read_table(spec.name).scalar()
        stored = client.stored_types(spec.name, column)
        support.stored = stored[0] if stored else None
        support.returned = type(value).__name__
        support.round_trip = bool(value == probe.valid)
        return support

    def run(self) -> IllustrationResult:
        results: list[TypeSupport] = []
        for engine in self.engines:
            self._logger.info("probing_types", engine=engine, probes=len(self._probes))
            with self.client(engine) as client:
                results.extend(self.probe(client, probe) for probe in self._probes)

        table = pd.DataFrame.from_records([asdict(r) for r in results])
        notes = [
            "declared: the column type as the engine's catalog reports it; "
            "stored: typeof() of the stored sample; returned: Python type read back.",
            "round_trip: the value read back equals the value written.",
        ]
        return IllustrationResult(self.name, self.title, table, notes)
