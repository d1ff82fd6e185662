"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from validation_report_engine.chart_rendering.chart_models import ChartSurface
from validation_report_engine.history_tracking.history_store import DEFAULT_STORAGE_KEY
from validation_report_engine.result_filtering.search_coordinator import DEFAULT_DEBOUNCE_MS
from validation_report_engine.virtual_window.window_renderer import (
    DEFAULT_ACTIVATION_THRESHOLD,
    DEFAULT_ITEM_HEIGHT,
    DEFAULT_VIEWPORT_HEIGHT,
)

DEFAULT_HISTORY_FILENAME = ".validation-history.json"

CHART_COMPLETION = "completion"
CHART_ISSUES = "issues"
CHART_LEVELS = "levels"
CHART_TREND = "trend"
CHART_NAMES = (CHART_COMPLETION, CHART_ISSUES, CHART_LEVELS, CHART_TREND)


@dataclass(frozen=True)
class HistorySettings:
    """Where the snapshot history is persisted."""

    path: Path
    storage_key: str = DEFAULT_STORAGE_KEY


@dataclass(frozen=True)
class WindowSettings:
    item_height: int = DEFAULT_ITEM_HEIGHT
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    activation_threshold: int = DEFAULT_ACTIVATION_THRESHOLD


@dataclass(frozen=True)
class SearchSettings:
    debounce_ms: int = DEFAULT_DEBOUNCE_MS


def default_chart_surfaces() -> dict[str, ChartSurface]:
    return {
        CHART_COMPLETION: ChartSurface(width=300, height=300),
        CHART_ISSUES: ChartSurface(width=400, height=300),
        CHART_LEVELS: ChartSurface(width=400, height=300),
        CHART_TREND: ChartSurface(width=500, height=300),
    }


@dataclass(frozen=True)
class ReportSettings:
    """Top-level configuration aggregate."""

    path: Path | None
    history: HistorySettings
    window: WindowSettings = field(default_factory=WindowSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    charts: Mapping[str, ChartSurface] = field(default_factory=default_chart_surfaces)


def default_settings(base_path: Path | None = None) -> ReportSettings:
    """Settings used when no configuration file is given."""
    base = base_path or Path.cwd()
    return ReportSettings(
        path=None,
        history=HistorySettings(path=(base / DEFAULT_HISTORY_FILENAME).resolve()),
    )
