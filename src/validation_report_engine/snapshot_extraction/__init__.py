"""Snapshot extraction domain exports."""

from .host_record_adapter import HostRecordError, extract_snapshot, load_host_records
from .snapshot_models import (
    FieldStatus,
    SeverityClassification,
    Snapshot,
    TrendPoint,
    ValidationEntity,
)

__all__ = [
    "FieldStatus",
    "SeverityClassification",
    "Snapshot",
    "TrendPoint",
    "ValidationEntity",
    "HostRecordError",
    "extract_snapshot",
    "load_host_records",
]
