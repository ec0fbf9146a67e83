"""Value objects - immutable descriptions shared by every engine."""

from dbcompare.domain.value_objects.sql_types import (
    DEFAULT_PROBES,
    TypeCategory,
    TypeProbe,
    enforcement_probes,
    get_probe,
)

__all__ = [
    "DEFAULT_PROBES",
    "TypeCategory",
    "TypeProbe",
    "enforcement_probes",
    "get_probe",
]
