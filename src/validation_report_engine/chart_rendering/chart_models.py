"""Chart domain entities and drawing shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ChartSurface:
    """Drawing surface size in pixels."""

    width: int
    height: int


@dataclass(frozen=True)
class ChartSeriesItem:
    """One labelled, coloured value of a categorical chart."""

    label: str
    value: float
    color: str

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError(f"Chart value for '{self.label}' must be a finite number.")
        if self.value < 0:
            raise ValueError(f"Chart value for '{self.label}' must not be negative.")


ChartSeries = tuple[ChartSeriesItem, ...]


@dataclass(frozen=True)
class SectorShape:  # pylint: disable=too-many-instance-attributes
    """Annular sector; angles in radians, clockwise on screen."""

    cx: float
    cy: float
    outer_radius: float
    inner_radius: float
    start_angle: float
    end_angle: float
    fill: str
    stroke: str


@dataclass(frozen=True)
class RectShape:
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class LineShape:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1


@dataclass(frozen=True)
class PolylineShape:
    points: tuple[tuple[float, float], ...]
    stroke: str
    stroke_width: float = 3


@dataclass(frozen=True)
class CircleShape:
    cx: float
    cy: float
    r: float
    fill: str


@dataclass(frozen=True)
class TextShape:  # pylint: disable=too-many-instance-attributes
    """Text anchored at (x, y); ``rotation`` in degrees around the anchor."""

    x: float
    y: float
    text: str
    fill: str
    font_size: int = 12
    anchor: str = "middle"
    baseline: str = "middle"
    bold: bool = False
    rotation: float = 0.0


Shape = SectorShape | RectShape | LineShape | PolylineShape | CircleShape | TextShape


@dataclass(frozen=True)
class ChartDrawing:
    """Everything drawn on one surface.

    ``placeholder`` is set when the input could not be charted and the drawing
    only carries the explanatory message.
    """

    width: int
    height: int
    elements: tuple[Shape, ...]
    placeholder: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None


@dataclass(frozen=True)
class LegendEntry:
    text: str
    color: str | None


@dataclass(frozen=True)
class ChartRendering:
    """A chart drawing together with its legend."""

    drawing: ChartDrawing
    legend: tuple[LegendEntry, ...]
