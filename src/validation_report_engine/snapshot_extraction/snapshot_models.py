"""Snapshot domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

_SEVERITY_PREFIX = "severity-"
_LEGACY_ACCURATE_TOKEN = "validated"


class SeverityClassification(str, Enum):
    """Closed set of outcomes for one field's validation."""

    ACCURATE = "accurate"
    MISSING_ATTRIBUTE = "missing_attribute"
    INACCURATE = "inaccurate"
    PARTIAL_MATCH = "partial_match"
    SOURCE_CONFLICT = "source_conflict"
    NO_REFERENCE = "no_reference"
    UNKNOWN = "unknown"

    @classmethod
    def from_token(cls, token: object) -> SeverityClassification:
        """Map a host severity token (optionally ``severity-`` prefixed) to a classification."""
        if not isinstance(token, str):
            return cls.UNKNOWN
        normalized = token.strip().lower()
        if normalized.startswith(_SEVERITY_PREFIX):
            normalized = normalized[len(_SEVERITY_PREFIX) :]
        if normalized == _LEGACY_ACCURATE_TOKEN:
            return cls.ACCURATE
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class FieldStatus:
    """Validation signals for one field of an entity."""

    status: SeverityClassification
    accepted: bool
    in_game_validated: bool

    @property
    def is_validated(self) -> bool:
        """Return True when the field counts as validated for attribute filtering."""
        return self.accepted or self.status == SeverityClassification.ACCURATE


@dataclass(frozen=True)
class ValidationEntity:
    """One validated game entity."""

    id: str
    name: str
    completeness_percent: int
    issue_count: int
    validated_field_count: int
    field_statuses: Mapping[str, FieldStatus]


@dataclass(frozen=True)
class Snapshot:
    """One validation run with its aggregates."""

    timestamp: datetime
    total_entities: int
    average_completeness: float
    total_issues: int
    entities: tuple[ValidationEntity, ...]

    def entity_by_id(self) -> dict[str, ValidationEntity]:
        """Index entities by id."""
        return {entity.id: entity for entity in self.entities}


@dataclass(frozen=True)
class TrendPoint:
    """Aggregates of one historical snapshot, used by the trend chart."""

    timestamp: datetime
    average_completeness: float
    total_issues: int
    total_entities: int

    @staticmethod
    def from_snapshot(snapshot: Snapshot) -> TrendPoint:
        return TrendPoint(
            timestamp=snapshot.timestamp,
            average_completeness=snapshot.average_completeness,
            total_issues=snapshot.total_issues,
            total_entities=snapshot.total_entities,
        )
