"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from validation_report_engine.chart_rendering.chart_models import ChartSurface

from .runtime_settings import (
    CHART_NAMES,
    DEFAULT_HISTORY_FILENAME,
    HistorySettings,
    ReportSettings,
    SearchSettings,
    WindowSettings,
    default_chart_surfaces,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> ReportSettings:
    """Load and validate the report configuration file. Every section is optional."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return ReportSettings(
        path=path,
        history=_parse_history_section(parsed.get("history"), path.parent),
        window=_parse_window_section(parsed.get("virtual_window")),
        search=_parse_search_section(parsed.get("search")),
        charts=_parse_charts_section(parsed.get("charts")),
    )


def _parse_history_section(value: Any, base_path: Path) -> HistorySettings:
    section = _optional_mapping(value, "history")
    raw_path = section.get("path", DEFAULT_HISTORY_FILENAME)
    history_path = _require_non_empty_string(raw_path, "history.path")
    storage_key = section.get("storage_key")
    if storage_key is None:
        return HistorySettings(path=_resolve_path(base_path, history_path))
    return HistorySettings(
        path=_resolve_path(base_path, history_path),
        storage_key=_require_non_empty_string(storage_key, "history.storage_key"),
    )


def _parse_window_section(value: Any) -> WindowSettings:
    section = _optional_mapping(value, "virtual_window")
    defaults = WindowSettings()
    return WindowSettings(
        item_height=_require_positive_int(
            section.get("item_height", defaults.item_height), "virtual_window.item_height"
        ),
        viewport_height=_require_positive_int(
            section.get("viewport_height", defaults.viewport_height),
            "virtual_window.viewport_height",
        ),
        activation_threshold=_require_non_negative_int(
            section.get("activation_threshold", defaults.activation_threshold),
            "virtual_window.activation_threshold",
        ),
    )


def _parse_search_section(value: Any) -> SearchSettings:
    section = _optional_mapping(value, "search")
    return SearchSettings(
        debounce_ms=_require_non_negative_int(
            section.get("debounce_ms", SearchSettings().debounce_ms), "search.debounce_ms"
        )
    )


def _parse_charts_section(value: Any) -> dict[str, ChartSurface]:
    if value is None:
        return default_chart_surfaces()
    section = _optional_mapping(value, "charts")
    surfaces: dict[str, ChartSurface] = {}
    for name, surface in section.items():
        if name not in CHART_NAMES:
            allowed = ", ".join(CHART_NAMES)
            raise ConfigurationError(f"Unknown chart '{name}'. Expected one of: {allowed}.")
        if surface is None:
            continue
        mapping = _optional_mapping(surface, f"charts.{name}")
        surfaces[name] = ChartSurface(
            width=_require_positive_int(mapping.get("width"), f"charts.{name}.width"),
            height=_require_positive_int(mapping.get("height"), f"charts.{name}.height"),
        )
    return surfaces


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    value = _require_non_negative_int(value, field_name)
    if value == 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
