"""Stateless chart geometry for the four report chart kinds.

Each renderer returns a :class:`ChartRendering`. Empty or degenerate input
never raises and never produces undefined geometry; the drawing then carries a
single centered placeholder message instead.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from validation_report_engine.snapshot_extraction.snapshot_models import TrendPoint

from .chart_models import (
    ChartDrawing,
    ChartRendering,
    ChartSeriesItem,
    ChartSurface,
    CircleShape,
    LegendEntry,
    LineShape,
    PolylineShape,
    RectShape,
    SectorShape,
    Shape,
    TextShape,
)

TEXT_COLOR = "#1f2937"
MUTED_TEXT_COLOR = "#6b7280"
GRID_COLOR = "#e5e7eb"
SLICE_BORDER_COLOR = "#ffffff"
TREND_COLOR = "#4299e1"

NO_DATA_MESSAGE = "No data to display"
NO_ISSUES_MESSAGE = "No issues found"
NOT_ENOUGH_ROOM_MESSAGE = "Not enough room to draw chart"
TREND_NEEDS_MORE_MESSAGE = "Need at least 2 reports to display trend"
TREND_LEGEND_LABEL = "Average Completeness (%)"
TREND_LEGEND_PLACEHOLDER = "Generate more reports to see trends"
TREND_TITLE = "Average Completeness Over Time"

DONUT_MARGIN = 20
DONUT_INNER_RATIO = 0.6
DONUT_START_ANGLE = -math.pi / 2
BAR_PADDING = 40
BAR_FILL_RATIO = 0.8
TREND_PADDING = 60
TREND_GRID_STEPS = 4
TREND_Y_MARGIN = 5
TREND_LABEL_ROTATION = -30.0
TREND_POINT_RADIUS = 4


def render_donut_chart(
    series: Sequence[ChartSeriesItem],
    surface: ChartSurface,
    *,
    caption: str = "Pokemon",
) -> ChartRendering:
    """Proportion chart: slices clockwise from the top, total and caption in the middle."""
    legend = _series_legend(series)
    total = sum(item.value for item in series)
    if total <= 0:
        return ChartRendering(_placeholder(surface, NO_DATA_MESSAGE), legend)

    cx = surface.width / 2
    cy = surface.height / 2
    outer_radius = min(cx, cy) - DONUT_MARGIN
    if outer_radius <= 0:
        return ChartRendering(_placeholder(surface, NOT_ENOUGH_ROOM_MESSAGE), legend)
    inner_radius = outer_radius * DONUT_INNER_RATIO

    elements: list[Shape] = []
    angle = DONUT_START_ANGLE
    for item in series:
        if item.value <= 0:
            continue
        sweep = item.value / total * 2 * math.pi
        elements.append(
            SectorShape(
                cx=cx,
                cy=cy,
                outer_radius=outer_radius,
                inner_radius=inner_radius,
                start_angle=angle,
                end_angle=angle + sweep,
                fill=item.color,
                stroke=SLICE_BORDER_COLOR,
            )
        )
        angle += sweep

    elements.append(
        TextShape(
            x=cx, y=cy - 8, text=_format_number(total), fill=TEXT_COLOR, font_size=18, bold=True
        )
    )
    elements.append(TextShape(x=cx, y=cy + 8, text=caption, fill=TEXT_COLOR, font_size=12))
    return ChartRendering(_drawing(surface, elements), legend)


def render_bar_chart(
    series: Sequence[ChartSeriesItem],
    surface: ChartSurface,
) -> ChartRendering:
    """Vertical bars scaled to the series maximum, values printed above each bar."""
    legend = _series_legend(series)
    if not series:
        return ChartRendering(_placeholder(surface, NO_ISSUES_MESSAGE), legend)
    max_value = max(item.value for item in series)
    if max_value <= 0:
        return ChartRendering(_placeholder(surface, NO_DATA_MESSAGE), legend)

    chart_width = surface.width - BAR_PADDING * 2
    chart_height = surface.height - BAR_PADDING * 2
    if chart_width <= 0 or chart_height <= 0:
        return ChartRendering(_placeholder(surface, NOT_ENOUGH_ROOM_MESSAGE), legend)

    slot_width = chart_width / len(series)
    bar_width = slot_width * BAR_FILL_RATIO
    elements: list[Shape] = []
    for index, item in enumerate(series):
        bar_height = item.value / max_value * chart_height
        x = BAR_PADDING + index * slot_width + slot_width * (1 - BAR_FILL_RATIO) / 2
        y = surface.height - BAR_PADDING - bar_height
        elements.append(RectShape(x=x, y=y, width=bar_width, height=bar_height, fill=item.color))
        elements.append(
            TextShape(
                x=x + bar_width / 2,
                y=y - 5,
                text=_format_number(item.value),
                fill=TEXT_COLOR,
                baseline="auto",
            )
        )
    return ChartRendering(_drawing(surface, elements), legend)


def render_horizontal_bar_chart(
    series: Sequence[ChartSeriesItem],
    surface: ChartSurface,
) -> ChartRendering:
    """Horizontal bars for long category labels, values printed at the bar ends."""
    legend = _series_legend(series)
    if not series or all(item.value <= 0 for item in series):
        return ChartRendering(_placeholder(surface, NO_DATA_MESSAGE), legend)

    chart_width = surface.width - BAR_PADDING * 2
    chart_height = surface.height - BAR_PADDING * 2
    if chart_width <= 0 or chart_height <= 0:
        return ChartRendering(_placeholder(surface, NOT_ENOUGH_ROOM_MESSAGE), legend)

    max_value = max(item.value for item in series)
    slot_height = chart_height / len(series)
    bar_height = slot_height * BAR_FILL_RATIO
    elements: list[Shape] = []
    for index, item in enumerate(series):
        bar_width = item.value / max_value * chart_width
        y = BAR_PADDING + index * slot_height + slot_height * (1 - BAR_FILL_RATIO) / 2
        elements.append(
            RectShape(x=BAR_PADDING, y=y, width=bar_width, height=bar_height, fill=item.color)
        )
        elements.append(
            TextShape(
                x=BAR_PADDING + bar_width + 5,
                y=y + bar_height / 2,
                text=_format_number(item.value),
                fill=TEXT_COLOR,
                anchor="start",
            )
        )
    return ChartRendering(_drawing(surface, elements), legend)


def trend_y_range(points: Sequence[TrendPoint]) -> tuple[float, float]:
    """Y-axis bounds: data range widened by 5 points, clamped to [0, 100]."""
    values = [point.average_completeness for point in points]
    return (
        max(0.0, min(values) - TREND_Y_MARGIN),
        min(100.0, max(values) + TREND_Y_MARGIN),
    )


def render_trend_chart(
    points: Sequence[TrendPoint],
    surface: ChartSurface,
) -> ChartRendering:
    """Line chart of average completeness over chronological snapshots."""
    if len(points) < 2:
        return ChartRendering(
            _placeholder(surface, TREND_NEEDS_MORE_MESSAGE),
            (LegendEntry(text=TREND_LEGEND_PLACEHOLDER, color=None),),
        )
    legend = (LegendEntry(text=TREND_LEGEND_LABEL, color=TREND_COLOR),)

    chart_width = surface.width - TREND_PADDING * 2
    chart_height = surface.height - TREND_PADDING * 2
    if chart_width <= 0 or chart_height <= 0:
        return ChartRendering(_placeholder(surface, NOT_ENOUGH_ROOM_MESSAGE), legend)

    low, high = trend_y_range(points)
    span = high - low or 1.0
    x_step = chart_width / (len(points) - 1)

    def project(index: int, value: float) -> tuple[float, float]:
        x = TREND_PADDING + x_step * index
        y = TREND_PADDING + chart_height - (value - low) / span * chart_height
        return x, y

    elements: list[Shape] = []
    for step in range(TREND_GRID_STEPS + 1):
        y = TREND_PADDING + chart_height / TREND_GRID_STEPS * step
        elements.append(
            LineShape(
                x1=TREND_PADDING,
                y1=y,
                x2=surface.width - TREND_PADDING,
                y2=y,
                stroke=GRID_COLOR,
            )
        )
        label_value = round(high - span * (step / TREND_GRID_STEPS))
        elements.append(
            TextShape(
                x=TREND_PADDING - 8,
                y=y,
                text=f"{label_value}%",
                fill=MUTED_TEXT_COLOR,
                font_size=11,
                anchor="end",
            )
        )

    coordinates = tuple(
        project(index, point.average_completeness) for index, point in enumerate(points)
    )
    elements.append(PolylineShape(points=coordinates, stroke=TREND_COLOR))

    for (x, y), point in zip(coordinates, points, strict=True):
        elements.append(CircleShape(cx=x, cy=y, r=TREND_POINT_RADIUS, fill=TREND_COLOR))
        elements.append(
            TextShape(
                x=x,
                y=y - 8,
                text=f"{point.average_completeness:.1f}%",
                fill=TEXT_COLOR,
                font_size=11,
                baseline="auto",
            )
        )
        elements.append(
            TextShape(
                x=x,
                y=surface.height - TREND_PADDING + 8,
                text=_format_date_label(point),
                fill=MUTED_TEXT_COLOR,
                font_size=10,
                baseline="hanging",
                rotation=TREND_LABEL_ROTATION,
            )
        )

    elements.append(
        TextShape(
            x=surface.width / 2,
            y=10,
            text=TREND_TITLE,
            fill=TEXT_COLOR,
            font_size=14,
            baseline="hanging",
            bold=True,
        )
    )
    return ChartRendering(_drawing(surface, elements), legend)


def _series_legend(series: Sequence[ChartSeriesItem]) -> tuple[LegendEntry, ...]:
    return tuple(
        LegendEntry(text=f"{item.label} ({_format_number(item.value)})", color=item.color)
        for item in series
    )


def _placeholder(surface: ChartSurface, message: str) -> ChartDrawing:
    width = max(0, surface.width)
    height = max(0, surface.height)
    text = TextShape(
        x=width / 2, y=height / 2, text=message, fill=MUTED_TEXT_COLOR, font_size=14
    )
    return ChartDrawing(width=width, height=height, elements=(text,), placeholder=message)


def _drawing(surface: ChartSurface, elements: list[Shape]) -> ChartDrawing:
    return ChartDrawing(width=surface.width, height=surface.height, elements=tuple(elements))


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _format_date_label(point: TrendPoint) -> str:
    timestamp = point.timestamp
    return f"{timestamp:%b} {timestamp.day}, {timestamp:%H:%M}"
