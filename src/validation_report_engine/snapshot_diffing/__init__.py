"""Snapshot diffing domain exports."""

from .change_summaries import build_progress_summary, entity_change_indicators, notable_changes
from .diff_models import (
    DiffResult,
    EntityChangeCounts,
    EntityChangeIndicator,
    FieldBadge,
    FieldChange,
    FieldChangeIndicator,
    NotableChanges,
    ProgressSummary,
    TrendDirection,
)
from .snapshot_differ import diff_snapshots

__all__ = [
    "DiffResult",
    "EntityChangeCounts",
    "EntityChangeIndicator",
    "FieldBadge",
    "FieldChange",
    "FieldChangeIndicator",
    "NotableChanges",
    "ProgressSummary",
    "TrendDirection",
    "build_progress_summary",
    "diff_snapshots",
    "entity_change_indicators",
    "notable_changes",
]
