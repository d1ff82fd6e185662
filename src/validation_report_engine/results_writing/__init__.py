"""Results writing domain exports."""

from .report_workbook_writer import (
    ENTITIES_SHEET_NAME,
    FIELD_CHANGES_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_report_workbook,
)

__all__ = [
    "ENTITIES_SHEET_NAME",
    "FIELD_CHANGES_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "write_report_workbook",
]
