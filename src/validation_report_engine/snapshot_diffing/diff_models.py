"""Snapshot diff domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from validation_report_engine.snapshot_extraction.snapshot_models import SeverityClassification


@dataclass(frozen=True)
class EntityChangeCounts:
    """Classification of entities present in both snapshots."""

    improved: int
    regressed: int
    unchanged: int


@dataclass(frozen=True)
class FieldChange:  # pylint: disable=too-many-instance-attributes
    """One field whose status signals differ between two snapshots."""

    entity_id: str
    entity_name: str
    field: str
    previous_status: SeverityClassification
    current_status: SeverityClassification
    status_changed: bool
    accepted_changed: bool
    validation_flag_changed: bool
    completeness_delta: int
    accepted: bool
    in_game_validated: bool


@dataclass(frozen=True)
class DiffResult:
    """Structured delta between a previous and a current snapshot."""

    previous_timestamp: datetime
    overall_completeness_delta: float
    total_issues_delta: int
    per_entity_counts: EntityChangeCounts
    field_changes: tuple[FieldChange, ...]


@dataclass(frozen=True)
class NotableChanges:
    """Most significant field improvements and regressions of a diff."""

    improvements: tuple[FieldChange, ...]
    regressions: tuple[FieldChange, ...]


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class FieldBadge(str, Enum):
    """Change badge shown next to a field."""

    IMPROVED = "improved"
    REGRESSED = "regressed"
    ACCEPTED = "accepted"
    UNACCEPTED = "unaccepted"
    IN_GAME = "in_game"
    CHANGED = "changed"


@dataclass(frozen=True)
class FieldChangeIndicator:
    field: str
    badge: FieldBadge
    title: str


@dataclass(frozen=True)
class EntityChangeIndicator:
    """Trend and field badges for one entity card."""

    entity_id: str
    completeness_delta: int
    trend: TrendDirection | None
    trend_label: str | None
    field_indicators: tuple[FieldChangeIndicator, ...]


@dataclass(frozen=True)
class ProgressSummary:
    """Human-readable progress lines since the previous run."""

    first_run: bool
    lines: tuple[str, ...]
