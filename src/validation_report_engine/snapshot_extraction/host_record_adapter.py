"""Host record ingestion adapter."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .snapshot_models import FieldStatus, SeverityClassification, Snapshot, ValidationEntity

logger = logging.getLogger(__name__)


class HostRecordError(Exception):
    """Raised when the hosting collaborator's document cannot be read."""


def load_host_records(path: Path | str) -> list[Mapping[str, Any]]:
    """Read host records from a JSON document.

    The document is either a list of records or an object carrying them under
    ``entities``.

    Raises:
      HostRecordError: If the file is missing, not JSON, or not a list of mappings.
    """
    source = Path(path)
    if not source.exists():
        raise HostRecordError(f"Host record file not found: {source}")
    try:
        parsed = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise HostRecordError(f"Failed to parse host record file: {exc}") from exc

    if isinstance(parsed, Mapping):
        parsed = parsed.get("entities")
    if not isinstance(parsed, list):
        raise HostRecordError("Host records must be a list or an object with an 'entities' list.")
    for index, record in enumerate(parsed):
        if not isinstance(record, Mapping):
            raise HostRecordError(f"Host record at position {index} must be an object.")
    return parsed


def extract_snapshot(
    host_records: Iterable[Mapping[str, Any]],
    *,
    timestamp: datetime | None = None,
) -> Snapshot:
    """Normalize host records into a snapshot with aggregates.

    Records without an id are skipped and excluded from every aggregate, and so
    are later records repeating an id already seen.
    """
    entities: list[ValidationEntity] = []
    seen_ids: set[str] = set()
    for position, record in enumerate(host_records):
        entity = _to_entity(record, position)
        if entity is None:
            continue
        if entity.id in seen_ids:
            logger.warning(
                "Skipping host record at position %d with duplicate id %s.", position, entity.id
            )
            continue
        seen_ids.add(entity.id)
        entities.append(entity)

    total_completeness = sum(entity.completeness_percent for entity in entities)
    average = total_completeness / len(entities) if entities else 0
    return Snapshot(
        timestamp=timestamp or datetime.now(UTC),
        total_entities=len(entities),
        average_completeness=round(average, 2),
        total_issues=sum(entity.issue_count for entity in entities),
        entities=tuple(entities),
    )


def _to_entity(record: Mapping[str, Any], position: int) -> ValidationEntity | None:
    entity_id = _normalize_id(record.get("id"))
    if entity_id is None:
        logger.warning("Skipping host record at position %d without an id.", position)
        return None

    name = record.get("name")
    completeness = _to_int(record.get("completeness"))
    if not 0 <= completeness <= 100:
        logger.warning(
            "Completeness %d of entity %s is out of range; clamping.", completeness, entity_id
        )
        completeness = min(100, max(0, completeness))

    return ValidationEntity(
        id=entity_id,
        name=str(name) if name is not None else "",
        completeness_percent=completeness,
        issue_count=max(0, _to_int(record.get("issueCount"))),
        validated_field_count=max(0, _to_int(record.get("validatedCount"))),
        field_statuses=_to_field_statuses(record.get("fields")),
    )


def _to_field_statuses(value: Any) -> dict[str, FieldStatus]:
    if not isinstance(value, Sequence) or isinstance(value, str | bytes):
        return {}
    statuses: dict[str, FieldStatus] = {}
    for marker in value:
        if not isinstance(marker, Mapping):
            continue
        field_name = marker.get("field")
        if not isinstance(field_name, str) or not field_name.strip():
            continue
        statuses[field_name.strip()] = FieldStatus(
            status=SeverityClassification.from_token(marker.get("severity")),
            accepted=bool(marker.get("accepted", False)),
            in_game_validated=bool(marker.get("inGameValidated", False)),
        )
    return statuses


def _normalize_id(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0
