"""Type enforcement: does the engine refuse a value that does not fit?

Each probe's deliberately invalid value is inserted into a one-column table
of the probe's type. The engine either accepts it, possibly storing it
under another type, or rejects it with an error. The error is the content
here, so it is caught and shown with the engine's category prefix removed.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Sequence

import pandas as pd

from dbcompare.application.illustrations.base import Illustration, IllustrationResult
from dbcompare.domain.entities import TableSpec
from dbcompare.domain.services import shorten
from dbcompare.domain.value_objects import TypeProbe, enforcement_probes
from dbcompare.infrastructure.config import Config
from dbcompare.infrastructure.metrics import MetricsRegistry
from dbcompare.ports.outbound import DatabaseClient, EngineError

ACCEPTED = "accepted"
REJECTED = "rejected"


@dataclass
class EnforcementOutcome:
    """Result of inserting one invalid value into one engine."""

    type: str
    invalid: str
    engine: str
    outcome: str
    stage: str
    detail: str

    @property
    def accepted(self) -> bool:
        return self.outcome == ACCEPTED


class TypeEnforcementIllustration(Illustration):
    """Insert a non-conforming value per type and record what happens."""

    name = "enforcement"
    title = "Type enforcement"

    def __init__(
        self,
        config: Config,
        metrics: MetricsRegistry | None = None,
        probes: Sequence[TypeProbe] | None = None,
    ) -> None:
        super().__init__(config, metrics)
        self._probes = tuple(probes) if probes is not None else enforcement_probes()

    def variants(self) -> list[tuple[str, bool]]:
        """(engine, strict) pairs to run, in display order."""
        variants = [(engine, False) for engine in self.engines]
        if self._config.engine.sqlite_strict and "sqlite" in self.engines:
            variants.append(("sqlite", True))
        return variants

    def probe(self, client: DatabaseClient, probe: TypeProbe) -> EnforcementOutcome:
        column = probe.column_name
        spec = TableSpec.of(f"t_{column}", [(column, probe.name)])

        def outcome(result: str, stage: str, detail: str) -> EnforcementOutcome:
            return EnforcementOutcome(probe.name, repr(probe.invalid), client.name, result, stage, detail)

        try:
            client.create_table(spec)
        except EngineError as e:
            return outcome(REJECTED, "create", shorten(e.message.text))
        try:
            client.append_rows(spec, [(probe.invalid,)])
        except EngineError as e:
            return outcome(REJECTED, "insert", shorten(e.message.text))

        stored = client.stored_types(spec.name, column)
        return outcome(ACCEPTED, "insert", f"stored as {stored[0] if stored else 'nothing'}")

    def run(self) -> IllustrationResult:
        results: list[EnforcementOutcome] = []
        for engine, strict in self.variants():
            self._logger.info("probing_enforcement", engine=engine, strict=strict)
            with self.client(engine, strict=strict) as client:
                results.extend(self.probe(client, probe) for probe in self._probes)

        table = pd.DataFrame.from_records([asdict(r) for r in results])
        rejected = sum(1 for r in results if not r.accepted)
        notes = [
            f"{rejected} of {len(results)} invalid inserts were rejected.",
            "stage: create means the engine refused the column type itself.",
        ]
        return IllustrationResult(self.name, self.title, table, notes)
