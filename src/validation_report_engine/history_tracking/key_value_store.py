"""Durable key-value collaborators used by the history store."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol


class StorageUnavailableError(Exception):
    """Raised when the durable store cannot be read or written."""


class KeyValueStore(Protocol):
    """Protocol for string key-value stores."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class JsonFileKeyValueStore:
    """Key-value store persisted as one JSON object in a file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        values = self._read_all()
        value = values.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        values = dict(self._read_all())
        values[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {self._path}: {exc}") from exc

    def _read_all(self) -> Mapping[str, object]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {self._path}: {exc}") from exc
        try:
            parsed = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            # Unparseable file reads as empty.
            return {}
        return parsed if isinstance(parsed, Mapping) else {}
