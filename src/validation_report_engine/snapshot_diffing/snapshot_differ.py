"""Snapshot comparison service."""

from __future__ import annotations

from validation_report_engine.snapshot_extraction.snapshot_models import (
    SeverityClassification,
    Snapshot,
)

from .diff_models import DiffResult, EntityChangeCounts, FieldChange


def diff_snapshots(previous: Snapshot | None, current: Snapshot) -> DiffResult | None:
    """Compare two snapshots.

    Returns None when there is no previous snapshot. Entities and fields that
    only exist in ``current`` are left out of the comparison.
    """
    if previous is None:
        return None

    previous_by_id = previous.entity_by_id()
    improved = regressed = unchanged = 0
    field_changes: list[FieldChange] = []

    for entity in current.entities:
        previous_entity = previous_by_id.get(entity.id)
        if previous_entity is None:
            continue

        delta = entity.completeness_percent - previous_entity.completeness_percent
        if delta > 0:
            improved += 1
        elif delta < 0:
            regressed += 1
        else:
            unchanged += 1

        for field_name, current_status in entity.field_statuses.items():
            previous_status = previous_entity.field_statuses.get(field_name)
            if previous_status is None:
                continue
            status_changed = current_status.status != previous_status.status
            accepted_changed = current_status.accepted != previous_status.accepted
            flag_changed = current_status.in_game_validated != previous_status.in_game_validated
            if not (status_changed or accepted_changed or flag_changed):
                continue
            field_changes.append(
                FieldChange(
                    entity_id=entity.id,
                    entity_name=entity.name,
                    field=field_name,
                    previous_status=previous_status.status,
                    current_status=current_status.status,
                    status_changed=status_changed,
                    accepted_changed=accepted_changed,
                    validation_flag_changed=flag_changed,
                    completeness_delta=delta,
                    accepted=current_status.accepted,
                    in_game_validated=current_status.in_game_validated,
                )
            )

    return DiffResult(
        previous_timestamp=previous.timestamp,
        overall_completeness_delta=round(
            current.average_completeness - previous.average_completeness, 2
        ),
        total_issues_delta=current.total_issues - previous.total_issues,
        per_entity_counts=EntityChangeCounts(
            improved=improved, regressed=regressed, unchanged=unchanged
        ),
        field_changes=tuple(field_changes),
    )


def is_resolved_transition(change: FieldChange) -> bool:
    """Return True when the field moved into the accurate state."""
    return (
        change.current_status == SeverityClassification.ACCURATE
        and change.previous_status != SeverityClassification.ACCURATE
    )


def is_regressed_transition(change: FieldChange) -> bool:
    """Return True when the field moved out of the accurate state."""
    return (
        change.previous_status == SeverityClassification.ACCURATE
        and change.current_status != SeverityClassification.ACCURATE
    )
