from __future__ import annotations

import logging
from pathlib import Path
import xml.etree.ElementTree as ET

from svgcharts.axis import AxisPosition
from svgcharts.chart import Chart, PlacedAxis, PlacedLegend
from svgcharts.components import AreaSeries, Bar, LineSeries, MarkerType, Orientation, Point
from svgcharts.errors import ChartRenderError
from svgcharts.legend import LegendMarker, PlacedLegendEntry
from svgcharts.style import ChartStyle


LOGGER = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def render_chart_svg(chart: Chart) -> str:
    """Serialize a built chart to SVG markup."""
    return ET.tostring(build_chart_element(chart), encoding="unicode")


def build_chart_element(chart: Chart) -> ET.Element:
    style = chart.style
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NAMESPACE,
            "width": _num(chart.width),
            "height": _num(chart.height),
            "viewBox": f"0 0 {_num(chart.width)} {_num(chart.height)}",
        },
    )
    if chart.title is not None:
        title = ET.SubElement(
            root,
            "text",
            {
                "class": "title",
                "x": _num(chart.title.x),
                "y": _num(chart.title.y),
                "text-anchor": "middle",
                "dominant-baseline": "middle",
                "font-family": style.font_family,
                "font-size": _num(style.title_font_size_px),
                "fill": style.title_color,
            },
        )
        title.text = chart.title.text

    group = ET.SubElement(
        root,
        "g",
        {"class": "g-chart", "transform": _translate(chart.margins.left, chart.margins.top)},
    )
    for geometry in chart.views:
        view_group = ET.SubElement(group, "g", {"class": "g-view"})
        for area in geometry.areas:
            _area(view_group, area, style)
        for bar in geometry.bars:
            _bar(view_group, bar, style)
        for line in geometry.lines:
            _line(view_group, line, style)
        for point in geometry.points:
            _point(view_group, point, style)
    for placed in chart.axes:
        _axis(group, placed, style)
    if chart.legend is not None and not chart.legend.layout.is_empty:
        _legend(group, chart.legend, style)
    return root


def save_chart(chart: Chart, path: str | Path) -> Path:
    out = Path(path)
    if out.suffix.lower() != ".svg":
        raise ChartRenderError(f"unsupported output format {out.suffix or '(none)'!r}: only .svg is supported")
    out.write_text(render_chart_svg(chart), encoding="utf-8")
    LOGGER.debug("chart saved to %s", out)
    return out


def _bar(parent: ET.Element, bar: Bar, style: ChartStyle) -> None:
    group = ET.SubElement(parent, "g", {"class": "bar"})
    vertical = bar.orientation == Orientation.VERTICAL
    for block in bar.blocks:
        lo = min(block.start, block.end)
        size = abs(block.size)
        if vertical:
            geometry = {"x": bar.offset, "y": lo, "width": bar.bandwidth, "height": size}
        else:
            geometry = {"x": lo, "y": bar.offset, "width": size, "height": bar.bandwidth}
        attrs = {name: _num(value) for name, value in geometry.items()}
        attrs["fill"] = block.color
        ET.SubElement(group, "rect", attrs)
    for label in bar.labels:
        x = bar.offset + label.x if vertical else label.x
        y = label.y if vertical else bar.offset + label.y
        _text(
            group,
            label.text,
            x=x,
            y=y,
            anchor=label.anchor,
            size=style.value_label_font_size_px,
            color=style.value_label_color,
            style=style,
            css_class="bar-label",
        )


def _point(parent: ET.Element, point: Point, style: ChartStyle) -> None:
    group = ET.SubElement(parent, "g", {"class": "point", "transform": _translate(point.x, point.y)})
    m = point.marker_size
    if point.marker == MarkerType.SQUARE:
        ET.SubElement(
            group,
            "rect",
            {"x": _num(-m), "y": _num(-m), "width": _num(2 * m), "height": _num(2 * m), "fill": point.color},
        )
    elif point.marker == MarkerType.X:
        for x1, y1, x2, y2 in ((-m, -m, m, m), (-m, m, m, -m)):
            ET.SubElement(
                group,
                "line",
                {
                    "x1": _num(x1),
                    "y1": _num(y1),
                    "x2": _num(x2),
                    "y2": _num(y2),
                    "stroke": point.color,
                    "stroke-width": _num(style.line_width),
                },
            )
    else:
        ET.SubElement(group, "circle", {"cx": "0", "cy": "0", "r": _num(m), "fill": point.color})
    if point.label is not None:
        _text(
            group,
            point.label.text,
            x=point.label.dx,
            y=point.label.dy,
            anchor=point.label.anchor,
            size=style.value_label_font_size_px,
            color=style.value_label_color,
            style=style,
            css_class="point-label",
        )


def _line(parent: ET.Element, line: LineSeries, style: ChartStyle) -> None:
    group = ET.SubElement(parent, "g", {"class": "line-series"})
    if line.points:
        ET.SubElement(
            group,
            "path",
            {
                "d": _path_data(line.path()),
                "fill": "none",
                "stroke": line.color,
                "stroke-width": _num(line.stroke_width),
            },
        )
    for point in line.points:
        _point(group, point, style)


def _area(parent: ET.Element, area: AreaSeries, style: ChartStyle) -> None:
    group = ET.SubElement(parent, "g", {"class": "area-series"})
    outline = area.outline()
    if outline:
        ET.SubElement(group, "path", {"d": _path_data(outline) + " Z", "fill": area.color, "stroke": "none"})
    for point in area.points:
        _point(group, point, style)


def _axis(parent: ET.Element, placed: PlacedAxis, style: ChartStyle) -> None:
    layout = placed.layout
    horizontal = layout.position in (AxisPosition.TOP, AxisPosition.BOTTOM)
    group = ET.SubElement(
        parent,
        "g",
        {
            "class": "x-axis" if horizontal else "y-axis",
            "transform": _translate(*placed.translate),
        },
    )
    x1, y1, x2, y2 = layout.line
    ET.SubElement(
        group,
        "line",
        {
            "class": "domain",
            "x1": _num(x1),
            "y1": _num(y1),
            "x2": _num(x2),
            "y2": _num(y2),
            "stroke": style.axis_color,
        },
    )
    for tick in layout.ticks:
        tick_group = ET.SubElement(group, "g", {"class": "tick", "transform": _translate(tick.x, tick.y)})
        ET.SubElement(
            tick_group,
            "line",
            {"x2": _num(tick.line_end[0]), "y2": _num(tick.line_end[1]), "stroke": style.axis_color},
        )
        label = _text(
            tick_group,
            tick.label,
            x=tick.label_x,
            y=tick.label_y,
            anchor=tick.anchor,
            size=style.tick_font_size_px,
            color=style.tick_label_color,
            style=style,
        )
        if tick.rotation:
            label.set("transform", _rotate(tick.rotation, tick.label_x, tick.label_y))
    if layout.has_label:
        text = _text(
            group,
            layout.label or "",
            x=layout.label_x,
            y=layout.label_y,
            anchor="middle",
            size=style.axis_label_font_size_px,
            color=style.axis_label_color,
            style=style,
            css_class="axis-label",
        )
        if layout.label_rotation:
            text.set("transform", _rotate(layout.label_rotation, layout.label_x, layout.label_y))


def _legend(parent: ET.Element, legend: PlacedLegend, style: ChartStyle) -> None:
    group = ET.SubElement(parent, "g", {"class": "g-legend", "transform": _translate(*legend.translate)})
    for placed in legend.layout.entries:
        _legend_entry(group, placed, legend.layout.row_height, style)


def _legend_entry(parent: ET.Element, placed: PlacedLegendEntry, row_height: float, style: ChartStyle) -> None:
    entry = placed.entry
    group = ET.SubElement(parent, "g", {"class": "legend-entry", "transform": _translate(placed.x, placed.y)})
    m = entry.marker_size
    cy = row_height / 2.0
    if entry.marker == LegendMarker.CIRCLE:
        ET.SubElement(group, "circle", {"cx": _num(m), "cy": _num(cy), "r": _num(m), "fill": entry.color})
    elif entry.marker == LegendMarker.SQUARE:
        ET.SubElement(
            group,
            "rect",
            {"x": "0", "y": _num(cy - m), "width": _num(2 * m), "height": _num(2 * m), "fill": entry.color},
        )
    elif entry.marker == LegendMarker.X:
        for x1, y1, x2, y2 in ((0.0, cy - m, 2 * m, cy + m), (0.0, cy + m, 2 * m, cy - m)):
            ET.SubElement(
                group,
                "line",
                {"x1": _num(x1), "y1": _num(y1), "x2": _num(x2), "y2": _num(y2), "stroke": entry.color},
            )
    else:
        ET.SubElement(
            group,
            "line",
            {
                "x1": "0",
                "y1": _num(cy),
                "x2": _num(2 * m),
                "y2": _num(cy),
                "stroke": entry.color,
                "stroke-width": _num(style.line_width),
                "stroke-dasharray": entry.stroke_dasharray,
            },
        )
    _text(
        group,
        entry.label,
        x=2 * m + entry.marker_to_label_gap,
        y=cy,
        anchor="start",
        size=style.legend_font_size_px,
        color=style.legend_label_color,
        style=style,
    )


def _text(
    parent: ET.Element,
    content: str,
    *,
    x: float,
    y: float,
    anchor: str,
    size: float,
    color: str,
    style: ChartStyle,
    css_class: str | None = None,
) -> ET.Element:
    attrs = {
        "x": _num(x),
        "y": _num(y),
        "text-anchor": anchor,
        "dominant-baseline": "middle",
        "font-family": style.font_family,
        "font-size": _num(size),
        "fill": color,
    }
    if css_class:
        attrs["class"] = css_class
    elem = ET.SubElement(parent, "text", attrs)
    elem.text = content
    return elem


def _path_data(points: tuple[tuple[float, float], ...]) -> str:
    return " ".join(f"{'M' if i == 0 else 'L'}{_num(x)},{_num(y)}" for i, (x, y) in enumerate(points))


def _translate(x: float, y: float) -> str:
    return f"translate({_num(x)},{_num(y)})"


def _rotate(angle: float, cx: float, cy: float) -> str:
    return f"rotate({_num(angle)},{_num(cx)},{_num(cy)})"


def _num(value: float) -> str:
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return f"{v:.4f}".rstrip("0").rstrip(".")
