"""Geometry and blob round-tripping.

Geometries are written twice, as well-known binary into a BLOB column and
as well-known text into a VARCHAR column, next to raw random bytes. Reading
them back shows whether each engine returns the exact bytes and whether
the decoded geometry is still the same shape.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
import pandas as pd
from shapely import wkb, wkt
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from dbcompare.application.illustrations.base import Illustration, IllustrationResult
from dbcompare.domain.entities import TableSpec
from dbcompare.ports.outbound import DatabaseClient

TABLE = TableSpec.of("shapes", [("label", "VARCHAR"), ("wkb", "BLOB"), ("wkt", "VARCHAR")])


@dataclass
class RoundTrip:
    """One value read back from one engine."""

    engine: str
    label: str
    size: int
    returned: str
    bytes_equal: bool
    geometry_equal: bool | None
    wkt_equal: bool | None


def sample_geometries() -> dict[str, BaseGeometry]:
    return {
        "point": Point(1.5, -2.25),
        "linestring": LineString([(0, 0), (1, 1), (2, 0)]),
        "polygon": Polygon([(0, 0), (4, 0), (4, 3), (0, 3)]),
    }


class BlobRoundTripIllustration(Illustration):
    """Write WKB/WKT geometries and raw bytes, read them back, compare."""

    name = "blobs"
    title = "Geometry and blob round-tripping"

    def samples(self) -> list[tuple[str, bytes, BaseGeometry | None]]:
        """(label, payload, geometry) triples; raw byte payloads have no geometry."""
        rng = np.random.default_rng(self._config.benchmark.seed)
        samples: list[tuple[str, bytes, BaseGeometry | None]] = [
            (label, geometry.wkb, geometry) for label, geometry in sample_geometries().items()
        ]
        samples.append(("random bytes", rng.bytes(64), None))
        samples.append(("empty bytes", b"", None))
        return samples

    def round_trip(self, client: DatabaseClient) -> list[RoundTrip]:
        samples = self.samples()
        client.create_table(TABLE)
        client.append_rows(
            TABLE,
            [(label, payload, geometry.wkt if geometry is not None else None)
             for label, payload, geometry in samples],
        )
        stored = {row["label"]: row for row in client.read_table(TABLE.name).records()}

        results = []
        for label, payload, geometry in samples:
            row = stored[label]
            value: Any = row["wkb"]
            raw = bytes(value) if value is not None else None
            geometry_equal = wkt_equal = None
            if geometry is not None:
                geometry_equal = raw is not None and wkb.loads(raw).equals(geometry)
                wkt_equal = row["wkt"] is not None and wkt.loads(row["wkt"]).equals(geometry)
            results.append(
                RoundTrip(
                    engine=client.name,
                    label=label,
                    size=len(payload),
                    returned=type(value).__name__,
                    bytes_equal=raw == payload,
                    geometry_equal=geometry_equal,
                    wkt_equal=wkt_equal,
                )
            )
        return results

    def run(self) -> IllustrationResult:
        results: list[RoundTrip] = []
        for engine in self.engines:
            self._logger.info("round_tripping", engine=engine)
            with self.client(engine) as client:
                results.extend(self.round_trip(client))

        table = pd.DataFrame.from_records([asdict(r) for r in results])
        notes = [
            "Geometries are stored as WKB in a BLOB column and as WKT in a VARCHAR column.",
            "geometry_equal / wkt_equal compare the decoded shape with the original.",
        ]
        return IllustrationResult(self.name, self.title, table, notes)
