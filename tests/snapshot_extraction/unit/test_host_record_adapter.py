"""Host record adapter tests."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest
from validation_report_engine.snapshot_extraction import (
    HostRecordError,
    SeverityClassification,
    extract_snapshot,
    load_host_records,
)

TIMESTAMP = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _record(entity_id: object, name: str, completeness: object, **extra: object) -> dict:
    record = {
        "id": entity_id,
        "name": name,
        "completeness": completeness,
        "issueCount": 1,
        "validatedCount": 3,
        "fields": [],
    }
    record.update(extra)
    return record


def test_extract_snapshot_builds_entities_and_aggregates() -> None:
    records = [
        _record(
            "1",
            "Bulbasaur",
            80,
            issueCount=2,
            fields=[
                {"field": "type", "severity": "severity-accurate"},
                {"field": "height", "severity": "inaccurate", "accepted": True},
                {"field": "moves", "severity": "missing_attribute", "inGameValidated": True},
            ],
        ),
        _record("4", "Charmander", 60, issueCount=3),
    ]

    snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    assert snapshot.timestamp == TIMESTAMP
    assert snapshot.total_entities == 2
    assert snapshot.average_completeness == 70
    assert snapshot.total_issues == 5
    bulbasaur = snapshot.entity_by_id()["1"]
    assert list(bulbasaur.field_statuses) == ["type", "height", "moves"]
    assert bulbasaur.field_statuses["type"].status == SeverityClassification.ACCURATE
    assert bulbasaur.field_statuses["height"].accepted is True
    assert bulbasaur.field_statuses["height"].is_validated is True
    assert bulbasaur.field_statuses["moves"].in_game_validated is True
    assert bulbasaur.field_statuses["moves"].is_validated is False


def test_extract_snapshot_skips_records_without_id_and_logs(caplog) -> None:
    records = [
        _record("1", "Bulbasaur", 100),
        _record(None, "Ghost", 0, issueCount=50),
        _record("   ", "Blank", 0),
        {"name": "Missing"},
    ]

    with caplog.at_level(logging.WARNING):
        snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    assert [entity.id for entity in snapshot.entities] == ["1"]
    assert snapshot.total_entities == 1
    assert snapshot.average_completeness == 100
    assert snapshot.total_issues == 1
    assert caplog.text.count("without an id") == 3


def test_extract_snapshot_clamps_completeness_into_percentage_range(caplog) -> None:
    records = [_record("1", "Mew", 140), _record("2", "Ditto", -10), _record("3", "Eevee", "55")]

    with caplog.at_level(logging.WARNING):
        snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    completeness = [entity.completeness_percent for entity in snapshot.entities]
    assert completeness == [100, 0, 55]
    assert 0 <= snapshot.average_completeness <= 100
    assert "out of range" in caplog.text


def test_extract_snapshot_treats_non_finite_counts_as_zero() -> None:
    records = json.loads(
        '[{"id": "1", "name": "Mew", "completeness": NaN, "issueCount": Infinity},'
        ' {"id": "2", "name": "Ditto", "completeness": -Infinity, "validatedCount": NaN}]'
    )

    snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    assert [entity.completeness_percent for entity in snapshot.entities] == [0, 0]
    assert snapshot.total_issues == 0
    assert snapshot.entities[1].validated_field_count == 0
    assert snapshot.average_completeness == 0


def test_extract_snapshot_skips_duplicate_ids_and_logs(caplog) -> None:
    records = [
        _record("1", "Bulbasaur", 80),
        _record("4", "Charmander", 40),
        _record(1, "Bulbasaur again", 0, issueCount=9),
    ]

    with caplog.at_level(logging.WARNING):
        snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    assert [entity.name for entity in snapshot.entities] == ["Bulbasaur", "Charmander"]
    assert snapshot.total_entities == 2
    assert snapshot.average_completeness == 60
    assert snapshot.total_issues == 2
    assert "duplicate id 1" in caplog.text


def test_extract_snapshot_of_empty_input_has_zero_aggregates() -> None:
    snapshot = extract_snapshot([], timestamp=TIMESTAMP)

    assert snapshot.total_entities == 0
    assert snapshot.average_completeness == 0
    assert snapshot.total_issues == 0
    assert snapshot.entities == ()


def test_extract_snapshot_rounds_average_to_two_decimals() -> None:
    records = [_record("1", "A", 100), _record("2", "B", 50), _record("3", "C", 50)]

    snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    assert snapshot.average_completeness == 66.67


def test_extract_snapshot_ignores_malformed_field_markers() -> None:
    records = [
        _record(
            1,
            "Pikachu",
            90,
            fields=[
                "not-a-marker",
                {"severity": "accurate"},
                {"field": "  ", "severity": "accurate"},
                {"field": "speed", "severity": "made-up"},
            ],
        )
    ]

    snapshot = extract_snapshot(records, timestamp=TIMESTAMP)

    entity = snapshot.entities[0]
    assert entity.id == "1"
    assert dict(entity.field_statuses).keys() == {"speed"}
    assert entity.field_statuses["speed"].status == SeverityClassification.UNKNOWN


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("severity-missing_attribute", SeverityClassification.MISSING_ATTRIBUTE),
        ("PARTIAL_MATCH", SeverityClassification.PARTIAL_MATCH),
        ("validated", SeverityClassification.ACCURATE),
        ("source_conflict", SeverityClassification.SOURCE_CONFLICT),
        ("severity-no_reference", SeverityClassification.NO_REFERENCE),
        (None, SeverityClassification.UNKNOWN),
    ],
)
def test_severity_tokens_map_to_closed_classification(
    token: object, expected: SeverityClassification
) -> None:
    assert SeverityClassification.from_token(token) == expected


def test_load_host_records_accepts_list_and_entities_object(tmp_path: Path) -> None:
    list_path = tmp_path / "list.json"
    list_path.write_text(json.dumps([_record("1", "Bulbasaur", 60)]), encoding="utf-8")
    object_path = tmp_path / "object.json"
    object_path.write_text(
        json.dumps({"entities": [_record("1", "Bulbasaur", 60)]}), encoding="utf-8"
    )

    assert load_host_records(list_path)[0]["name"] == "Bulbasaur"
    assert load_host_records(object_path)[0]["name"] == "Bulbasaur"


def test_load_host_records_rejects_missing_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(HostRecordError, match="not found"):
        load_host_records(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(HostRecordError, match="Failed to parse"):
        load_host_records(broken)

    wrong_shape = tmp_path / "wrong.json"
    wrong_shape.write_text(json.dumps({"pokemon": []}), encoding="utf-8")
    with pytest.raises(HostRecordError, match="must be a list"):
        load_host_records(wrong_shape)

    scalar_entries = tmp_path / "scalars.json"
    scalar_entries.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(HostRecordError, match="position 0"):
        load_host_records(scalar_entries)
