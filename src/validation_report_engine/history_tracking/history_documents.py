"""JSON document mapping for snapshots, trend points and diffs."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from validation_report_engine.snapshot_diffing.diff_models import DiffResult, FieldChange
from validation_report_engine.snapshot_extraction.snapshot_models import (
    FieldStatus,
    SeverityClassification,
    Snapshot,
    TrendPoint,
    ValidationEntity,
)


class HistoryShapeError(Exception):
    """Raised when a persisted document does not have the snapshot shape."""


def snapshot_to_document(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "timestamp": snapshot.timestamp.isoformat(),
        "totalEntities": snapshot.total_entities,
        "averageCompleteness": snapshot.average_completeness,
        "totalIssues": snapshot.total_issues,
        "entities": [_entity_to_document(entity) for entity in snapshot.entities],
    }


def snapshot_from_document(document: Any) -> Snapshot:
    """Rebuild a snapshot from its persisted form.

    Raises:
      HistoryShapeError: If any required key is missing, has the wrong type or is out of range.
    """
    mapping = _require_mapping(document, "snapshot")
    entities = mapping.get("entities")
    if not isinstance(entities, list):
        raise HistoryShapeError("snapshot.entities must be a list.")
    average = mapping.get("averageCompleteness")
    if isinstance(average, bool) or not isinstance(average, int | float):
        raise HistoryShapeError("snapshot.averageCompleteness must be a number.")
    if not math.isfinite(average) or not 0 <= average <= 100:
        raise HistoryShapeError("snapshot.averageCompleteness must be between 0 and 100.")
    return Snapshot(
        timestamp=_parse_timestamp(mapping.get("timestamp")),
        total_entities=_require_count(mapping.get("totalEntities"), "snapshot.totalEntities"),
        average_completeness=float(average),
        total_issues=_require_count(mapping.get("totalIssues"), "snapshot.totalIssues"),
        entities=tuple(_entity_from_document(entity) for entity in entities),
    )


def trend_point_to_document(point: TrendPoint) -> dict[str, Any]:
    return {
        "timestamp": point.timestamp.isoformat(),
        "averageCompleteness": point.average_completeness,
        "totalIssues": point.total_issues,
        "totalEntities": point.total_entities,
    }


def diff_to_document(diff: DiffResult | None) -> dict[str, Any] | None:
    if diff is None:
        return None
    return {
        "previousTimestamp": diff.previous_timestamp.isoformat(),
        "overallCompletenessDelta": diff.overall_completeness_delta,
        "totalIssuesDelta": diff.total_issues_delta,
        "perEntityCounts": {
            "improved": diff.per_entity_counts.improved,
            "regressed": diff.per_entity_counts.regressed,
            "unchanged": diff.per_entity_counts.unchanged,
        },
        "fieldChanges": [_field_change_to_document(change) for change in diff.field_changes],
    }


def _field_change_to_document(change: FieldChange) -> dict[str, Any]:
    return {
        "entityId": change.entity_id,
        "entityName": change.entity_name,
        "field": change.field,
        "previousStatus": change.previous_status.value,
        "currentStatus": change.current_status.value,
        "statusChanged": change.status_changed,
        "acceptedChanged": change.accepted_changed,
        "validationFlagChanged": change.validation_flag_changed,
        "completenessDelta": change.completeness_delta,
    }


def _entity_to_document(entity: ValidationEntity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "name": entity.name,
        "completenessPercent": entity.completeness_percent,
        "issueCount": entity.issue_count,
        "validatedFieldCount": entity.validated_field_count,
        "fieldStatuses": {
            field_name: {
                "status": status.status.value,
                "accepted": status.accepted,
                "inGameValidated": status.in_game_validated,
            }
            for field_name, status in entity.field_statuses.items()
        },
    }


def _entity_from_document(document: Any) -> ValidationEntity:
    mapping = _require_mapping(document, "entity")
    entity_id = mapping.get("id")
    if isinstance(entity_id, bool) or not isinstance(entity_id, str | int):
        raise HistoryShapeError("entity.id must be a string or integer.")
    name = mapping.get("name")
    if not isinstance(name, str):
        raise HistoryShapeError("entity.name must be a string.")
    completeness = _require_count(mapping.get("completenessPercent"), "entity.completenessPercent")
    if completeness > 100:
        raise HistoryShapeError("entity.completenessPercent must not exceed 100.")
    statuses = _require_mapping(mapping.get("fieldStatuses", {}), "entity.fieldStatuses")
    return ValidationEntity(
        id=str(entity_id),
        name=name,
        completeness_percent=completeness,
        issue_count=_require_count(mapping.get("issueCount"), "entity.issueCount"),
        validated_field_count=_require_count(
            mapping.get("validatedFieldCount"), "entity.validatedFieldCount"
        ),
        field_statuses={
            str(field_name): _field_status_from_document(value)
            for field_name, value in statuses.items()
        },
    )


def _field_status_from_document(document: Any) -> FieldStatus:
    mapping = _require_mapping(document, "fieldStatus")
    status = mapping.get("status")
    if not isinstance(status, str):
        raise HistoryShapeError("fieldStatus.status must be a string.")
    return FieldStatus(
        status=SeverityClassification.from_token(status),
        accepted=bool(mapping.get("accepted", False)),
        in_game_validated=bool(mapping.get("inGameValidated", False)),
    )


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise HistoryShapeError("snapshot.timestamp must be an ISO-8601 string.")
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise HistoryShapeError(f"Invalid snapshot timestamp: {value}") from exc


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise HistoryShapeError(f"{label} must be an object.")
    return value


def _require_count(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise HistoryShapeError(f"{label} must be an integer.")
    if value < 0:
        raise HistoryShapeError(f"{label} must not be negative.")
    return value
