"""Bounded snapshot history persisted across runs."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from validation_report_engine.snapshot_diffing.diff_models import DiffResult
from validation_report_engine.snapshot_extraction.snapshot_models import Snapshot, TrendPoint

from .history_documents import (
    HistoryShapeError,
    diff_to_document,
    snapshot_from_document,
    snapshot_to_document,
    trend_point_to_document,
)
from .key_value_store import KeyValueStore, StorageUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "pokemonValidationHistory"
HISTORY_LIMIT = 10


class EmptyExportError(Exception):
    """Raised when an export is requested while the history is empty."""


class HistoryStore:
    """Ordered, bounded log of snapshots, oldest first.

    Without a usable backing store the log lives in memory only and
    ``degraded`` is set; the session keeps working either way. With
    ``persist=False`` the stored log is read but never written.
    """

    def __init__(
        self,
        store: KeyValueStore | None,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        limit: int = HISTORY_LIMIT,
        persist: bool = True,
    ) -> None:
        if limit <= 0:
            raise ValueError("History limit must be greater than zero.")
        self._store = store
        self._storage_key = storage_key
        self._limit = limit
        self._persist_changes = persist
        self._history: list[Snapshot] = []
        self._degraded = store is None
        self._loaded = False

    @property
    def degraded(self) -> bool:
        return self._degraded

    @property
    def history(self) -> tuple[Snapshot, ...]:
        return tuple(self._history)

    def latest(self) -> Snapshot | None:
        return self._history[-1] if self._history else None

    def load(self) -> tuple[Snapshot, ...]:
        """Read the persisted log once; never raises on storage or parse failures.

        Later calls return the log held in memory, including snapshots that
        were appended without being written.
        """
        if self._loaded:
            return self.history
        self._loaded = True
        if self._store is None:
            return self.history
        try:
            raw = self._store.get(self._storage_key)
        except StorageUnavailableError as exc:
            logger.warning("History storage unavailable, continuing in memory: %s", exc)
            self._degraded = True
            return self.history
        if raw is None:
            return self.history

        try:
            self._history = _parse_history(raw)
        except (json.JSONDecodeError, HistoryShapeError) as exc:
            logger.warning("Discarding unreadable validation history: %s", exc)
            self._history = []
            return self.history

        if len(self._history) > self._limit:
            self._history = self._history[-self._limit :]
            self._persist()
        return self.history

    def append(self, snapshot: Snapshot) -> tuple[Snapshot, ...]:
        """Append a snapshot, evicting the oldest entries beyond the limit."""
        self._history.append(snapshot)
        while len(self._history) > self._limit:
            self._history.pop(0)
        self._persist()
        return self.history

    def trend_points(self) -> tuple[TrendPoint, ...]:
        return tuple(TrendPoint.from_snapshot(snapshot) for snapshot in self._history)

    def export(
        self,
        current_comparison: DiffResult | None,
        *,
        exported_at: datetime | None = None,
    ) -> dict[str, Any]:
        """Build the export document for the whole history.

        Raises:
          EmptyExportError: If no snapshot has been recorded.
        """
        if not self._history:
            raise EmptyExportError("No historical data available to export.")
        return {
            "exportDate": (exported_at or datetime.now(UTC)).isoformat(),
            "totalReports": len(self._history),
            "dateRange": {
                "earliest": self._history[0].timestamp.isoformat(),
                "latest": self._history[-1].timestamp.isoformat(),
            },
            "trendData": [trend_point_to_document(point) for point in self.trend_points()],
            "fullHistory": [snapshot_to_document(snapshot) for snapshot in self._history],
            "currentComparison": diff_to_document(current_comparison),
        }

    def _persist(self) -> None:
        if self._store is None or self._degraded or not self._persist_changes:
            return
        payload = json.dumps([snapshot_to_document(snapshot) for snapshot in self._history])
        try:
            self._store.set(self._storage_key, payload)
        except StorageUnavailableError as exc:
            logger.warning("Failed to save validation history: %s", exc)


def _parse_history(raw: str) -> list[Snapshot]:
    parsed = json.loads(raw)
    if not isinstance(parsed, list):
        raise HistoryShapeError("History document must be a list of snapshots.")
    return [snapshot_from_document(item) for item in parsed]
