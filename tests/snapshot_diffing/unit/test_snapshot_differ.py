"""Snapshot diff engine tests."""

from __future__ import annotations

from datetime import UTC, datetime

from validation_report_engine.snapshot_diffing import (
    EntityChangeCounts,
    TrendDirection,
    diff_snapshots,
    entity_change_indicators,
)
from validation_report_engine.snapshot_extraction import (
    FieldStatus,
    SeverityClassification,
    Snapshot,
    ValidationEntity,
)

PREVIOUS_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
CURRENT_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def _status(
    status: SeverityClassification,
    *,
    accepted: bool = False,
    in_game: bool = False,
) -> FieldStatus:
    return FieldStatus(status=status, accepted=accepted, in_game_validated=in_game)


def _entity(
    entity_id: str,
    name: str,
    completeness: int,
    fields: dict[str, FieldStatus] | None = None,
    issues: int = 0,
) -> ValidationEntity:
    return ValidationEntity(
        id=entity_id,
        name=name,
        completeness_percent=completeness,
        issue_count=issues,
        validated_field_count=0,
        field_statuses=fields or {},
    )


def _snapshot(timestamp: datetime, *entities: ValidationEntity) -> Snapshot:
    average = (
        round(sum(entity.completeness_percent for entity in entities) / len(entities), 2)
        if entities
        else 0
    )
    return Snapshot(
        timestamp=timestamp,
        total_entities=len(entities),
        average_completeness=average,
        total_issues=sum(entity.issue_count for entity in entities),
        entities=entities,
    )


def test_diff_without_previous_snapshot_is_none() -> None:
    current = _snapshot(CURRENT_TIME, _entity("1", "Bulbasaur", 80))

    assert diff_snapshots(None, current) is None


def test_diff_of_snapshot_with_itself_has_no_changes() -> None:
    snapshot = _snapshot(
        CURRENT_TIME,
        _entity("1", "Bulbasaur", 80, {"type": _status(SeverityClassification.ACCURATE)}, 2),
        _entity("4", "Charmander", 40, {"moves": _status(SeverityClassification.INACCURATE)}, 5),
    )

    diff = diff_snapshots(snapshot, snapshot)

    assert diff is not None
    assert diff.overall_completeness_delta == 0
    assert diff.total_issues_delta == 0
    assert diff.per_entity_counts == EntityChangeCounts(improved=0, regressed=0, unchanged=2)
    assert diff.field_changes == ()


def test_diff_classifies_improved_entity_with_completeness_delta() -> None:
    previous = _snapshot(PREVIOUS_TIME, _entity("1", "Bulbasaur", 60))
    current = _snapshot(CURRENT_TIME, _entity("1", "Bulbasaur", 80))

    diff = diff_snapshots(previous, current)

    assert diff is not None
    assert diff.previous_timestamp == PREVIOUS_TIME
    assert diff.per_entity_counts.improved == 1
    assert diff.overall_completeness_delta == 20
    indicator = entity_change_indicators(previous, current, diff)["1"]
    assert indicator.completeness_delta == 20
    assert indicator.trend == TrendDirection.UP


def test_diff_records_field_transitions_with_entity_delta() -> None:
    previous = _snapshot(
        PREVIOUS_TIME,
        _entity(
            "1",
            "Bulbasaur",
            60,
            {
                "type": _status(SeverityClassification.INACCURATE),
                "height": _status(SeverityClassification.ACCURATE),
                "weight": _status(SeverityClassification.PARTIAL_MATCH),
            },
            issues=3,
        ),
    )
    current = _snapshot(
        CURRENT_TIME,
        _entity(
            "1",
            "Bulbasaur",
            80,
            {
                "type": _status(SeverityClassification.ACCURATE),
                "height": _status(SeverityClassification.ACCURATE, in_game=True),
                "weight": _status(SeverityClassification.PARTIAL_MATCH),
            },
            issues=1,
        ),
    )

    diff = diff_snapshots(previous, current)

    assert diff is not None
    assert diff.total_issues_delta == -2
    changes = {change.field: change for change in diff.field_changes}
    assert set(changes) == {"type", "height"}
    assert changes["type"].status_changed is True
    assert changes["type"].previous_status == SeverityClassification.INACCURATE
    assert changes["type"].current_status == SeverityClassification.ACCURATE
    assert changes["type"].completeness_delta == 20
    assert changes["height"].status_changed is False
    assert changes["height"].validation_flag_changed is True
    assert changes["height"].in_game_validated is True


def test_diff_counts_regressed_and_unchanged_entities() -> None:
    previous = _snapshot(
        PREVIOUS_TIME,
        _entity("1", "Bulbasaur", 90),
        _entity("4", "Charmander", 50),
    )
    current = _snapshot(
        CURRENT_TIME,
        _entity("1", "Bulbasaur", 70),
        _entity("4", "Charmander", 50),
    )

    diff = diff_snapshots(previous, current)

    assert diff is not None
    assert diff.per_entity_counts == EntityChangeCounts(improved=0, regressed=1, unchanged=1)
    assert diff.overall_completeness_delta == -10


def test_diff_leaves_out_entities_and_fields_only_in_current_snapshot() -> None:
    previous = _snapshot(
        PREVIOUS_TIME,
        _entity("1", "Bulbasaur", 60, {"type": _status(SeverityClassification.ACCURATE)}),
    )
    current = _snapshot(
        CURRENT_TIME,
        _entity(
            "1",
            "Bulbasaur",
            60,
            {
                "type": _status(SeverityClassification.ACCURATE),
                "ability": _status(SeverityClassification.MISSING_ATTRIBUTE),
            },
        ),
        _entity("7", "Squirtle", 10, {"type": _status(SeverityClassification.INACCURATE)}),
    )

    diff = diff_snapshots(previous, current)

    assert diff is not None
    assert diff.per_entity_counts == EntityChangeCounts(improved=0, regressed=0, unchanged=1)
    assert diff.field_changes == ()
