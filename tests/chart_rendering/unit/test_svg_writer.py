"""SVG writer tests."""

from __future__ import annotations

import math
from pathlib import Path
from xml.etree import ElementTree

from validation_report_engine.chart_rendering import (
    ChartSeriesItem,
    ChartSurface,
    render_donut_chart,
    to_svg,
    write_svg,
)
from validation_report_engine.chart_rendering.chart_models import (
    ChartDrawing,
    SectorShape,
    TextShape,
)
from validation_report_engine.chart_rendering.svg_writer import sector_path

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_to_svg_produces_parseable_document_with_escaped_text() -> None:
    drawing = ChartDrawing(
        width=100,
        height=50,
        elements=(TextShape(x=50, y=25, text="Farfetch'd & <friends>", fill="#000"),),
    )

    svg = to_svg(drawing)

    root = ElementTree.fromstring(svg)
    assert root.attrib["width"] == "100"
    text = root.find(f"{SVG_NS}text")
    assert text is not None
    assert text.text == "Farfetch'd & <friends>"
    assert text.attrib["dominant-baseline"] == "central"


def test_single_full_slice_is_drawn_as_two_arcs() -> None:
    shape = SectorShape(
        cx=100,
        cy=100,
        outer_radius=80,
        inner_radius=48,
        start_angle=-math.pi / 2,
        end_angle=1.5 * math.pi,
        fill="#48bb78",
        stroke="#ffffff",
    )

    path = sector_path(shape)

    assert path.count("M ") == 2
    assert path.count(" A ") == 4


def test_write_svg_writes_donut_chart(tmp_path: Path) -> None:
    rendering = render_donut_chart(
        (ChartSeriesItem(label="Done", value=2, color="#48bb78"),),
        ChartSurface(width=300, height=300),
    )

    output = write_svg(rendering.drawing, tmp_path / "charts" / "completion-chart.svg")

    root = ElementTree.fromstring(output.read_text(encoding="utf-8"))
    assert len(root.findall(f"{SVG_NS}path")) == 1
    assert [node.text for node in root.findall(f"{SVG_NS}text")] == ["2", "Pokemon"]
