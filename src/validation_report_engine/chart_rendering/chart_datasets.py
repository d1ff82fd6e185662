"""Aggregate series for the report charts."""

from __future__ import annotations

from collections import Counter

from validation_report_engine.result_filtering.filter_state import (
    COMPLETE_THRESHOLD,
    HIGH_THRESHOLD,
)
from validation_report_engine.snapshot_extraction.snapshot_models import (
    SeverityClassification,
    Snapshot,
)

from .chart_models import ChartSeries, ChartSeriesItem

COMPLETE_COLOR = "#48bb78"
HIGH_COLOR = "#ed8936"
LOW_COLOR = "#f56565"

_SEVERITY_SERIES = (
    (SeverityClassification.MISSING_ATTRIBUTE, "Missing Attributes", "#f56565"),
    (SeverityClassification.INACCURATE, "Data Mismatches", "#ed8936"),
    (SeverityClassification.SOURCE_CONFLICT, "Source Conflicts", "#fbbf24"),
    (SeverityClassification.PARTIAL_MATCH, "Partial Matches", "#4299e1"),
    (SeverityClassification.NO_REFERENCE, "No Reference", "#9ca3af"),
)


def _level_counts(snapshot: Snapshot) -> tuple[int, int, int]:
    complete = sum(
        1 for entity in snapshot.entities if entity.completeness_percent >= COMPLETE_THRESHOLD
    )
    high = sum(1 for entity in snapshot.entities if entity.completeness_percent >= HIGH_THRESHOLD)
    low = sum(1 for entity in snapshot.entities if entity.completeness_percent < HIGH_THRESHOLD)
    return complete, high, low


def completion_series(snapshot: Snapshot) -> ChartSeries:
    complete, high, low = _level_counts(snapshot)
    return (
        ChartSeriesItem(label="100% Validated", value=complete, color=COMPLETE_COLOR),
        ChartSeriesItem(label="75%+ Validated", value=high, color=HIGH_COLOR),
        ChartSeriesItem(label="Below 75%", value=low, color=LOW_COLOR),
    )


def validation_level_series(snapshot: Snapshot) -> ChartSeries:
    complete, high, low = _level_counts(snapshot)
    return (
        ChartSeriesItem(label="100% Complete", value=complete, color=COMPLETE_COLOR),
        ChartSeriesItem(label="75%+ Validated", value=high, color=HIGH_COLOR),
        ChartSeriesItem(label="Below 75%", value=low, color=LOW_COLOR),
    )


def issue_severity_series(snapshot: Snapshot) -> ChartSeries:
    """Count field statuses per issue severity; categories without issues are dropped."""
    counts = Counter(
        status.status for entity in snapshot.entities for status in entity.field_statuses.values()
    )
    return tuple(
        ChartSeriesItem(label=label, value=counts[severity], color=color)
        for severity, label, color in _SEVERITY_SERIES
        if counts[severity] > 0
    )
