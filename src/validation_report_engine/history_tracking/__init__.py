"""History tracking domain exports."""

from .history_documents import HistoryShapeError, snapshot_from_document, snapshot_to_document
from .history_export import write_export_document
from .history_store import DEFAULT_STORAGE_KEY, HISTORY_LIMIT, EmptyExportError, HistoryStore
from .key_value_store import JsonFileKeyValueStore, KeyValueStore, StorageUnavailableError

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "HISTORY_LIMIT",
    "EmptyExportError",
    "HistoryShapeError",
    "HistoryStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageUnavailableError",
    "snapshot_from_document",
    "snapshot_to_document",
    "write_export_document",
]
