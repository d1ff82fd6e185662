"""History store tests."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from validation_report_engine.history_tracking import (
    EmptyExportError,
    HistoryStore,
    JsonFileKeyValueStore,
    StorageUnavailableError,
    snapshot_to_document,
)
from validation_report_engine.snapshot_extraction import (
    FieldStatus,
    SeverityClassification,
    Snapshot,
    ValidationEntity,
)

KEY = "pokemonValidationHistory"
START = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


class _MemoryStore:
    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = dict(values or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.values[key] = value


class _UnavailableStore:
    def get(self, key: str) -> str | None:
        raise StorageUnavailableError("permission denied")

    def set(self, key: str, value: str) -> None:
        raise StorageUnavailableError("permission denied")


class _ReadOnlyStore(_MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise StorageUnavailableError("quota exceeded")


def _snapshot(index: int) -> Snapshot:
    entity = ValidationEntity(
        id=str(index),
        name=f"Entity {index}",
        completeness_percent=min(100, index * 10),
        issue_count=index,
        validated_field_count=1,
        field_statuses={
            "type": FieldStatus(
                status=SeverityClassification.ACCURATE, accepted=False, in_game_validated=True
            )
        },
    )
    return Snapshot(
        timestamp=START + timedelta(days=index),
        total_entities=1,
        average_completeness=float(entity.completeness_percent),
        total_issues=index,
        entities=(entity,),
    )


@pytest.mark.parametrize("appends", [0, 1, 9, 10, 11, 25])
def test_history_keeps_most_recent_snapshots_oldest_first(appends: int) -> None:
    store = HistoryStore(_MemoryStore())
    store.load()
    snapshots = [_snapshot(index) for index in range(appends)]

    for snapshot in snapshots:
        store.append(snapshot)

    expected = snapshots[-10:] if snapshots else []
    assert len(store.history) == min(appends, 10)
    assert list(store.history) == expected


def test_eleventh_append_evicts_the_oldest_snapshot() -> None:
    backing = _MemoryStore()
    store = HistoryStore(backing)
    store.load()
    snapshots = [_snapshot(index) for index in range(11)]
    for snapshot in snapshots[:10]:
        store.append(snapshot)

    store.append(snapshots[10])

    assert len(store.history) == 10
    assert snapshots[0] not in store.history
    persisted = json.loads(backing.values[KEY])
    assert len(persisted) == 10
    assert persisted[0]["timestamp"] == snapshots[1].timestamp.isoformat()


def test_history_survives_a_reload_from_the_backing_store() -> None:
    backing = _MemoryStore()
    first = HistoryStore(backing)
    first.load()
    first.append(_snapshot(1))
    first.append(_snapshot(2))

    second = HistoryStore(backing)

    assert list(second.load()) == [_snapshot(1), _snapshot(2)]
    assert second.latest() == _snapshot(2)


def test_absent_key_loads_empty_history() -> None:
    store = HistoryStore(_MemoryStore())

    assert store.load() == ()
    assert store.latest() is None
    assert store.degraded is False


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"timestamp": "x"}),
        json.dumps([{"timestamp": "2026-03-01T09:00:00+00:00"}]),
        json.dumps([{"timestamp": "yesterday", "entities": [], "averageCompleteness": 1}]),
        json.dumps([{**snapshot_to_document(_snapshot(1)), "averageCompleteness": float("nan")}]),
        json.dumps([{**snapshot_to_document(_snapshot(1)), "averageCompleteness": float("inf")}]),
        json.dumps([{**snapshot_to_document(_snapshot(1)), "averageCompleteness": 150.0}]),
        json.dumps([{**snapshot_to_document(_snapshot(1)), "averageCompleteness": -0.5}]),
    ],
)
def test_corrupt_history_is_discarded_and_logged(raw: str, caplog) -> None:
    store = HistoryStore(_MemoryStore({KEY: raw}))

    with caplog.at_level(logging.WARNING):
        history = store.load()

    assert history == ()
    assert store.degraded is False
    assert "Discarding unreadable validation history" in caplog.text


def test_oversized_persisted_history_is_trimmed_to_limit() -> None:
    documents = [snapshot_to_document(_snapshot(index)) for index in range(12)]
    backing = _MemoryStore({KEY: json.dumps(documents)})
    store = HistoryStore(backing)

    history = store.load()

    assert len(history) == 10
    assert history[0] == _snapshot(2)
    assert len(json.loads(backing.values[KEY])) == 10


def test_unavailable_storage_degrades_to_in_memory_history(caplog) -> None:
    store = HistoryStore(_UnavailableStore())

    with caplog.at_level(logging.WARNING):
        store.load()
        store.append(_snapshot(1))

    assert store.degraded is True
    assert store.history == (_snapshot(1),)
    assert "History storage unavailable" in caplog.text


def test_missing_store_runs_in_memory_only() -> None:
    store = HistoryStore(None)

    store.load()
    store.append(_snapshot(1))

    assert store.degraded is True
    assert store.latest() == _snapshot(1)


def test_reloading_keeps_history_held_only_in_memory() -> None:
    store = HistoryStore(None)
    store.load()
    store.append(_snapshot(1))

    history = store.load()

    assert history == (_snapshot(1),)
    assert store.latest() == _snapshot(1)


def test_reloading_a_non_persisting_store_keeps_unwritten_appends() -> None:
    backing = _MemoryStore({KEY: json.dumps([snapshot_to_document(_snapshot(1))])})
    store = HistoryStore(backing, persist=False)
    store.load()
    store.append(_snapshot(2))

    assert store.load() == (_snapshot(1), _snapshot(2))
    assert backing.writes == 0


def test_history_file_that_is_not_utf8_is_discarded(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_bytes(b'{"pokemonValidationHistory": "\xff\xfe"}')
    store = HistoryStore(JsonFileKeyValueStore(path))

    assert store.load() == ()
    assert store.degraded is False

    store.append(_snapshot(1))

    assert HistoryStore(JsonFileKeyValueStore(path)).load() == (_snapshot(1),)


def test_failed_save_is_logged_and_keeps_the_session_running(caplog) -> None:
    store = HistoryStore(_ReadOnlyStore())
    store.load()

    with caplog.at_level(logging.WARNING):
        store.append(_snapshot(1))

    assert store.history == (_snapshot(1),)
    assert "Failed to save validation history" in caplog.text


def test_non_persisting_store_reads_but_never_writes() -> None:
    backing = _MemoryStore({KEY: json.dumps([snapshot_to_document(_snapshot(1))])})
    store = HistoryStore(backing, persist=False)

    store.load()
    store.append(_snapshot(2))

    assert store.history == (_snapshot(1), _snapshot(2))
    assert backing.writes == 0
    assert len(json.loads(backing.values[KEY])) == 1


def test_custom_storage_key_and_limit() -> None:
    backing = _MemoryStore()
    store = HistoryStore(backing, storage_key="customKey", limit=2)
    store.load()

    for index in range(3):
        store.append(_snapshot(index))

    assert list(store.history) == [_snapshot(1), _snapshot(2)]
    assert "customKey" in backing.values


def test_history_limit_must_be_positive() -> None:
    with pytest.raises(ValueError, match="greater than zero"):
        HistoryStore(_MemoryStore(), limit=0)


def test_export_of_empty_history_raises() -> None:
    store = HistoryStore(_MemoryStore())
    store.load()

    with pytest.raises(EmptyExportError, match="No historical data"):
        store.export(None)


def test_export_document_has_trend_and_full_history() -> None:
    store = HistoryStore(_MemoryStore())
    store.load()
    store.append(_snapshot(1))
    store.append(_snapshot(2))
    exported_at = datetime(2026, 3, 5, 8, 30, tzinfo=UTC)

    document = store.export(None, exported_at=exported_at)

    assert document["exportDate"] == exported_at.isoformat()
    assert document["totalReports"] == 2
    assert document["dateRange"] == {
        "earliest": _snapshot(1).timestamp.isoformat(),
        "latest": _snapshot(2).timestamp.isoformat(),
    }
    assert [point["averageCompleteness"] for point in document["trendData"]] == [10.0, 20.0]
    assert document["fullHistory"][1]["entities"][0]["fieldStatuses"]["type"] == {
        "status": "accurate",
        "accepted": False,
        "inGameValidated": True,
    }
    assert document["currentComparison"] is None
    json.dumps(document)


def test_trend_points_follow_history_order() -> None:
    store = HistoryStore(None)
    store.append(_snapshot(3))
    store.append(_snapshot(4))

    points = store.trend_points()

    assert [point.average_completeness for point in points] == [30.0, 40.0]
    assert points[0].timestamp == _snapshot(3).timestamp
