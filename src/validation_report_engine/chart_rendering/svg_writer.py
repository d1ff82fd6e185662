"""SVG serialization for chart drawings."""

from __future__ import annotations

import math
from dataclasses import replace
from html import escape
from pathlib import Path

from .chart_models import (
    ChartDrawing,
    CircleShape,
    LineShape,
    PolylineShape,
    RectShape,
    SectorShape,
    Shape,
    TextShape,
)

_BASELINE_ATTRIBUTES = {
    "middle": "central",
    "hanging": "hanging",
    "auto": "auto",
}


def to_svg(drawing: ChartDrawing) -> str:
    """Serialize a drawing into a standalone SVG document."""
    body = "\n".join(f"  {_shape_to_svg(shape)}" for shape in drawing.elements)
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{drawing.width}" height="{drawing.height}" '
        f'viewBox="0 0 {drawing.width} {drawing.height}">\n'
        f"{body}\n"
        "</svg>\n"
    )


def write_svg(drawing: ChartDrawing, output_path: Path | str) -> Path:
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(to_svg(drawing), encoding="utf-8")
    return destination.resolve()


def sector_path(shape: SectorShape) -> str:
    """SVG path data for an annular sector, split in two arcs for full circles."""
    sweep = shape.end_angle - shape.start_angle
    if sweep >= 2 * math.pi - 1e-9:
        middle = shape.start_angle + math.pi
        first = replace(shape, end_angle=middle)
        second = replace(shape, start_angle=middle)
        return f"{sector_path(first)} {sector_path(second)}"

    large_arc = 1 if sweep > math.pi else 0
    outer_start = _polar(shape.cx, shape.cy, shape.outer_radius, shape.start_angle)
    outer_end = _polar(shape.cx, shape.cy, shape.outer_radius, shape.end_angle)
    inner_end = _polar(shape.cx, shape.cy, shape.inner_radius, shape.end_angle)
    inner_start = _polar(shape.cx, shape.cy, shape.inner_radius, shape.start_angle)
    return (
        f"M {_num(outer_start[0])} {_num(outer_start[1])} "
        f"A {_num(shape.outer_radius)} {_num(shape.outer_radius)} 0 {large_arc} 1 "
        f"{_num(outer_end[0])} {_num(outer_end[1])} "
        f"L {_num(inner_end[0])} {_num(inner_end[1])} "
        f"A {_num(shape.inner_radius)} {_num(shape.inner_radius)} 0 {large_arc} 0 "
        f"{_num(inner_start[0])} {_num(inner_start[1])} Z"
    )


def _shape_to_svg(shape: Shape) -> str:
    if isinstance(shape, SectorShape):
        return (
            f'<path d="{sector_path(shape)}" fill="{escape(shape.fill)}" '
            f'stroke="{escape(shape.stroke)}" stroke-width="2"/>'
        )
    if isinstance(shape, RectShape):
        return (
            f'<rect x="{_num(shape.x)}" y="{_num(shape.y)}" width="{_num(shape.width)}" '
            f'height="{_num(shape.height)}" fill="{escape(shape.fill)}"/>'
        )
    if isinstance(shape, LineShape):
        return (
            f'<line x1="{_num(shape.x1)}" y1="{_num(shape.y1)}" x2="{_num(shape.x2)}" '
            f'y2="{_num(shape.y2)}" stroke="{escape(shape.stroke)}" '
            f'stroke-width="{_num(shape.stroke_width)}"/>'
        )
    if isinstance(shape, PolylineShape):
        points = " ".join(f"{_num(x)},{_num(y)}" for x, y in shape.points)
        return (
            f'<polyline points="{points}" fill="none" stroke="{escape(shape.stroke)}" '
            f'stroke-width="{_num(shape.stroke_width)}" stroke-linecap="round" '
            'stroke-linejoin="round"/>'
        )
    if isinstance(shape, CircleShape):
        return (
            f'<circle cx="{_num(shape.cx)}" cy="{_num(shape.cy)}" r="{_num(shape.r)}" '
            f'fill="{escape(shape.fill)}"/>'
        )
    return _text_to_svg(shape)


def _text_to_svg(shape: TextShape) -> str:
    attributes = [
        f'x="{_num(shape.x)}"',
        f'y="{_num(shape.y)}"',
        f'fill="{escape(shape.fill)}"',
        'font-family="sans-serif"',
        f'font-size="{shape.font_size}"',
        f'text-anchor="{escape(shape.anchor)}"',
        f'dominant-baseline="{_BASELINE_ATTRIBUTES.get(shape.baseline, "auto")}"',
    ]
    if shape.bold:
        attributes.append('font-weight="bold"')
    if shape.rotation:
        attributes.append(
            f'transform="rotate({_num(shape.rotation)} {_num(shape.x)} {_num(shape.y)})"'
        )
    return f"<text {' '.join(attributes)}>{escape(shape.text)}</text>"


def _polar(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")
