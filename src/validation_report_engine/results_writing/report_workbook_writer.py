"""Report workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from validation_report_engine.snapshot_diffing.diff_models import DiffResult
from validation_report_engine.snapshot_extraction.snapshot_models import FieldStatus, Snapshot

ENTITIES_SHEET_NAME = "Entities"
FIELD_CHANGES_SHEET_NAME = "FieldChanges"
RUN_INFO_SHEET_NAME = "RunInfo"

ENTITY_COLUMNS = ("ID", "NAME", "COMPLETENESS", "ISSUES", "VALIDATED_FIELDS")
FIELD_CHANGE_COLUMNS = (
    "ENTITY_ID",
    "ENTITY_NAME",
    "FIELD",
    "PREVIOUS_STATUS",
    "CURRENT_STATUS",
    "STATUS_CHANGED",
    "ACCEPTED_CHANGED",
    "IN_GAME_CHANGED",
    "COMPLETENESS_DELTA",
)


def write_report_workbook(
    snapshot: Snapshot,
    diff: DiffResult | None,
    output_path: Path | str,
) -> Path:
    """Write the snapshot, its field changes and run info into an xlsx workbook."""
    workbook = Workbook()
    entities_sheet = workbook.active
    entities_sheet.title = ENTITIES_SHEET_NAME
    field_names = _collect_field_names(snapshot)
    _write_entities_sheet(entities_sheet, snapshot, field_names)
    _write_field_changes_sheet(workbook.create_sheet(FIELD_CHANGES_SHEET_NAME), diff)
    _write_run_info_sheet(workbook.create_sheet(RUN_INFO_SHEET_NAME), snapshot, diff)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _collect_field_names(snapshot: Snapshot) -> tuple[str, ...]:
    names: dict[str, None] = {}
    for entity in snapshot.entities:
        for field_name in entity.field_statuses:
            names.setdefault(field_name, None)
    return tuple(names)


def _write_entities_sheet(
    sheet: Worksheet,
    snapshot: Snapshot,
    field_names: Sequence[str],
) -> None:
    _write_header(sheet, tuple(ENTITY_COLUMNS) + tuple(field_names))
    for row, entity in enumerate(snapshot.entities, start=2):
        values: list[object] = [
            entity.id,
            entity.name,
            entity.completeness_percent,
            entity.issue_count,
            entity.validated_field_count,
        ]
        for field_name in field_names:
            status = entity.field_statuses.get(field_name)
            values.append(_format_field_status(status) if status else None)
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)
    sheet.freeze_panes = "C2"


def _format_field_status(status: FieldStatus) -> str:
    flags = []
    if status.accepted:
        flags.append("accepted")
    if status.in_game_validated:
        flags.append("in-game")
    suffix = f" ({', '.join(flags)})" if flags else ""
    return f"{status.status.value}{suffix}"


def _write_field_changes_sheet(sheet: Worksheet, diff: DiffResult | None) -> None:
    _write_header(sheet, FIELD_CHANGE_COLUMNS)
    if diff is None:
        return
    for row, change in enumerate(diff.field_changes, start=2):
        values = (
            change.entity_id,
            change.entity_name,
            change.field,
            change.previous_status.value,
            change.current_status.value,
            change.status_changed,
            change.accepted_changed,
            change.validation_flag_changed,
            change.completeness_delta,
        )
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)


def _write_run_info_sheet(sheet: Worksheet, snapshot: Snapshot, diff: DiffResult | None) -> None:
    entries: list[tuple[str, object]] = [
        ("timestamp", snapshot.timestamp.isoformat()),
        ("total_entities", snapshot.total_entities),
        ("average_completeness", snapshot.average_completeness),
        ("total_issues", snapshot.total_issues),
    ]
    if diff is not None:
        entries.extend(
            (
                ("previous_timestamp", diff.previous_timestamp.isoformat()),
                ("completeness_delta", diff.overall_completeness_delta),
                ("issues_delta", diff.total_issues_delta),
                ("improved", diff.per_entity_counts.improved),
                ("regressed", diff.per_entity_counts.regressed),
                ("unchanged", diff.per_entity_counts.unchanged),
                ("field_changes", len(diff.field_changes)),
            )
        )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions["A"].width = 24


def _write_header(sheet: Worksheet, columns: Sequence[str]) -> None:
    for column, name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column)].width = max(12, min(len(name) + 6, 40))
