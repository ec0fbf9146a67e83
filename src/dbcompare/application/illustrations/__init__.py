"""Illustrations - the side-by-side scripts the book is made of.

Each illustration is registered in ILLUSTRATIONS under a short name,
in the order the book presents them.
"""

from __future__ import annotations

from dbcompare.application.illustrations.base import Illustration, IllustrationResult
from dbcompare.application.illustrations.blob_roundtrip import (
    BlobRoundTripIllustration,
    RoundTrip,
    sample_geometries,
)
from dbcompare.application.illustrations.data_types import DataTypesIllustration, TypeSupport
from dbcompare.application.illustrations.storage_orientation import StorageOrientationIllustration
from dbcompare.application.illustrations.type_enforcement import (
    EnforcementOutcome,
    TypeEnforcementIllustration,
)
from dbcompare.infrastructure.config import Config
from dbcompare.infrastructure.metrics import MetricsRegistry

ILLUSTRATIONS: dict[str, type[Illustration]] = {
    cls.name: cls
    for cls in (
        StorageOrientationIllustration,
        DataTypesIllustration,
        TypeEnforcementIllustration,
        BlobRoundTripIllustration,
    )
}


class UnknownIllustrationError(KeyError):
    """Raised when an illustration name is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown illustration"


def get_illustration(
    name: str,
    config: Config,
    metrics: MetricsRegistry | None = None,
) -> Illustration:
    """Instantiate a registered illustration.

    Raises:
        UnknownIllustrationError: If no illustration is registered under the name.
    """
    try:
        illustration_cls = ILLUSTRATIONS[name.strip().lower()]
    except KeyError:
        raise UnknownIllustrationError(
            f"Unknown illustration {name!r} (available: {', '.join(ILLUSTRATIONS)})"
        ) from None
    return illustration_cls(config, metrics)


__all__ = [
    "ILLUSTRATIONS",
    "BlobRoundTripIllustration",
    "DataTypesIllustration",
    "EnforcementOutcome",
    "Illustration",
    "IllustrationResult",
    "RoundTrip",
    "StorageOrientationIllustration",
    "TypeEnforcementIllustration",
    "TypeSupport",
    "UnknownIllustrationError",
    "get_illustration",
    "sample_geometries",
]
