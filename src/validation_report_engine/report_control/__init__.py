"""Report control domain exports."""

from .announcements import AnnouncementSink
from .clipboard_copy import ClipboardError, copy_with_fallback
from .quick_fixes import (
    QuickFixAction,
    QuickFixError,
    available_quick_fixes,
    quick_fix_command,
)
from .report_controller import ReportController, ReportStateError

__all__ = [
    "AnnouncementSink",
    "ClipboardError",
    "QuickFixAction",
    "QuickFixError",
    "ReportController",
    "ReportStateError",
    "available_quick_fixes",
    "copy_with_fallback",
    "quick_fix_command",
]
