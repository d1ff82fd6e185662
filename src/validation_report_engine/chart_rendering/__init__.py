"""Chart rendering domain exports."""

from .chart_datasets import completion_series, issue_severity_series, validation_level_series
from .chart_models import (
    ChartDrawing,
    ChartRendering,
    ChartSeries,
    ChartSeriesItem,
    ChartSurface,
    LegendEntry,
)
from .chart_primitives import (
    render_bar_chart,
    render_donut_chart,
    render_horizontal_bar_chart,
    render_trend_chart,
)
from .svg_writer import to_svg, write_svg

__all__ = [
    "ChartDrawing",
    "ChartRendering",
    "ChartSeries",
    "ChartSeriesItem",
    "ChartSurface",
    "LegendEntry",
    "completion_series",
    "issue_severity_series",
    "render_bar_chart",
    "render_donut_chart",
    "render_horizontal_bar_chart",
    "render_trend_chart",
    "to_svg",
    "validation_level_series",
    "write_svg",
]
