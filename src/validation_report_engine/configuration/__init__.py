"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    CHART_COMPLETION,
    CHART_ISSUES,
    CHART_LEVELS,
    CHART_NAMES,
    CHART_TREND,
    HistorySettings,
    ReportSettings,
    SearchSettings,
    WindowSettings,
    default_settings,
)

__all__ = [
    "CHART_COMPLETION",
    "CHART_ISSUES",
    "CHART_LEVELS",
    "CHART_NAMES",
    "CHART_TREND",
    "HistorySettings",
    "ReportSettings",
    "SearchSettings",
    "WindowSettings",
    "ConfigurationError",
    "load_configuration",
    "default_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
