from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import Any, ClassVar, Iterable, Sequence

from svgcharts.adapters.rows import BarRow, PointRow, normalize_bar_rows, normalize_point_rows
from svgcharts.colors import DEFAULT_PALETTE, Color, coerce_palette
from svgcharts.components import (
    AreaSeries,
    Bar,
    BarBlock,
    BarLabel,
    BarLabelPosition,
    LineSeries,
    MarkerType,
    Orientation,
    Point,
    PointLabel,
    PointLabelPosition,
    point_label_offset,
)
from svgcharts.errors import ChartDataError, ScaleConfigError
from svgcharts.formatting import format_tick, round_label
from svgcharts.legend import LegendEntry, LegendMarker
from svgcharts.scales import Scale, ScaleKind, band_center
from svgcharts.stacking import build_color_map, extract_keys, group_by_category, stack_blocks


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewGeometry:
    """Everything a renderer needs from one loaded view."""

    bars: tuple[Bar, ...] = ()
    points: tuple[Point, ...] = ()
    lines: tuple[LineSeries, ...] = ()
    areas: tuple[AreaSeries, ...] = ()


def _require_scale(scale: Scale | None, dimension: str) -> Scale:
    if scale is None:
        raise ScaleConfigError(f"Please provide a scale for the {dimension} dimension before loading data")
    return scale


def _require_kind(scale: Scale | None, dimension: str, kind: ScaleKind) -> Scale:
    resolved = _require_scale(scale, dimension)
    if resolved.kind != kind:
        article = "a Band" if kind == ScaleKind.BAND else "a Linear"
        raise ScaleConfigError(f"The {dimension} axis scale should be {article} scale.")
    return resolved


@dataclass
class _SeriesView(ABC):
    x_scale: Scale | None = None
    y_scale: Scale | None = None
    keys: tuple[str, ...] = ()
    colors: tuple[Color, ...] = DEFAULT_PALETTE
    labels_visible: bool = True
    custom_data_label: str = ""
    _color_map: dict[str, str] = field(default_factory=dict)
    _keys_given: bool = False
    _loaded: bool = False

    legend_marker: ClassVar[LegendMarker] = LegendMarker.SQUARE

    def set_x_scale(self, scale: Scale) -> "_SeriesView":
        self.x_scale = scale
        return self

    def set_y_scale(self, scale: Scale) -> "_SeriesView":
        self.y_scale = scale
        return self

    def set_keys(self, keys: Sequence[str]) -> "_SeriesView":
        self.keys = tuple(str(k) for k in keys)
        self._keys_given = bool(self.keys)
        return self

    def set_colors(self, colors: Iterable[Color | str]) -> "_SeriesView":
        self.colors = coerce_palette(colors)
        return self

    def set_label_visibility(self, visible: bool) -> "_SeriesView":
        self.labels_visible = bool(visible)
        return self

    def set_custom_data_label(self, label: str) -> "_SeriesView":
        # Only used when the data has a single, empty key.
        self.custom_data_label = str(label)
        return self

    @property
    def color_map(self) -> dict[str, str]:
        return dict(self._color_map)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _resolve_keys(self, rows: Sequence[Any]) -> tuple[str, ...]:
        if not self._keys_given:
            self.keys = extract_keys(rows)
        self._color_map = build_color_map(self.keys, self.colors)
        return self.keys

    def legend_entries(self) -> tuple[LegendEntry, ...]:
        if len(self.keys) == 1 and self.keys[0] == "":
            color = self._color_map.get("", self.colors[0].as_hex())
            return (LegendEntry(marker=self.legend_marker, color=color, label=self.custom_data_label),)
        return tuple(
            LegendEntry(marker=self.legend_marker, color=self._color_map.get(key, self.colors[0].as_hex()), label=key)
            for key in self.keys
        )

    @abstractmethod
    def geometry(self) -> ViewGeometry:
        raise NotImplementedError


@dataclass
class _BarView(_SeriesView):
    label_position: BarLabelPosition = BarLabelPosition.END_OUTSIDE
    label_rounding_precision: int | None = None
    label_offset: float = 12.0
    _bars: tuple[Bar, ...] = ()

    orientation: ClassVar[Orientation] = Orientation.VERTICAL

    def set_label_position(self, position: BarLabelPosition) -> "_BarView":
        self.label_position = BarLabelPosition(position)
        return self

    def set_label_rounding_precision(self, nr_of_digits: int) -> "_BarView":
        if nr_of_digits < 0:
            raise ValueError("label rounding precision must be >= 0")
        self.label_rounding_precision = int(nr_of_digits)
        return self

    @property
    def bars(self) -> tuple[Bar, ...]:
        return self._bars

    @abstractmethod
    def _category_and_value_scales(self) -> tuple[Scale, Scale]:
        raise NotImplementedError

    def load_data(self, rows: Iterable[Any]) -> "_BarView":
        category_scale, value_scale = self._category_and_value_scales()
        data: tuple[BarRow, ...] = normalize_bar_rows(rows)
        self._resolve_keys(data)
        grouped = group_by_category(data, self.keys)

        bandwidth = category_scale.bandwidth() or 0.0
        reversed_range = value_scale.is_range_reversed()
        bars: list[Bar] = []
        for category, pairs in grouped.items():
            blocks = stack_blocks(pairs, value_scale, self._color_map)
            labels: tuple[BarLabel, ...] = ()
            if self.labels_visible:
                labels = tuple(self._block_label(block, bandwidth, reversed_range) for block in blocks)
            bars.append(
                Bar(
                    category=category,
                    orientation=self.orientation,
                    offset=category_scale.scale(category),
                    bandwidth=bandwidth,
                    blocks=blocks,
                    labels=labels,
                )
            )
        self._bars = tuple(bars)
        self._loaded = True
        LOGGER.debug(
            "%s loaded %d row(s) into %d bar(s) over %d key(s)",
            type(self).__name__,
            len(data),
            len(bars),
            len(self.keys),
        )
        return self

    def _block_label(self, block: BarBlock, bandwidth: float, reversed_range: bool) -> BarLabel:
        # Blocks grow from ``start`` to ``end``, or from ``end`` to ``start`` on reversed ranges.
        direction = -1.0 if reversed_range else 1.0
        base_edge, far_edge = (block.end, block.start) if reversed_range else (block.start, block.end)
        off = self.label_offset
        position = self.label_position
        if position == BarLabelPosition.END_OUTSIDE:
            along = far_edge + direction * off
        elif position == BarLabelPosition.END_INSIDE:
            along = far_edge - direction * off
        elif position == BarLabelPosition.START_INSIDE:
            along = base_edge + direction * off
        elif position == BarLabelPosition.START_OUTSIDE:
            along = base_edge - direction * off
        else:
            along = (block.start + block.end) / 2.0
        text = round_label(block.value, self.label_rounding_precision)
        across = bandwidth / 2.0

        if self.orientation == Orientation.VERTICAL:
            return BarLabel(text=text, x=across, y=along, anchor="middle")

        if position == BarLabelPosition.CENTER:
            anchor = "middle"
        elif position in (BarLabelPosition.END_OUTSIDE, BarLabelPosition.START_INSIDE):
            anchor = "start" if direction > 0 else "end"
        else:
            anchor = "end" if direction > 0 else "start"
        return BarLabel(text=text, x=along, y=across, anchor=anchor)

    def geometry(self) -> ViewGeometry:
        return ViewGeometry(bars=self._bars)


@dataclass
class VerticalBarView(_BarView):
    """Bars standing on a band X axis, measured along a linear Y axis."""

    orientation: ClassVar[Orientation] = Orientation.VERTICAL

    def _category_and_value_scales(self) -> tuple[Scale, Scale]:
        x = _require_kind(self.x_scale, "X", ScaleKind.BAND)
        y = _require_kind(self.y_scale, "Y", ScaleKind.LINEAR)
        return x, y


@dataclass
class HorizontalBarView(_BarView):
    """Bars laid out on a band Y axis, measured along a linear X axis."""

    orientation: ClassVar[Orientation] = Orientation.HORIZONTAL

    def _category_and_value_scales(self) -> tuple[Scale, Scale]:
        x = _require_kind(self.x_scale, "X", ScaleKind.LINEAR)
        y = _require_kind(self.y_scale, "Y", ScaleKind.BAND)
        return y, x


@dataclass
class _PointView(_SeriesView):
    marker_type: MarkerType = MarkerType.CIRCLE
    marker_size: float = 5.0
    label_position: PointLabelPosition = PointLabelPosition.NW

    def set_marker_type(self, marker_type: MarkerType) -> "_PointView":
        self.marker_type = MarkerType(marker_type)
        return self

    def set_marker_size(self, size: float) -> "_PointView":
        if size <= 0:
            raise ValueError("marker size must be > 0")
        self.marker_size = float(size)
        return self

    def set_label_position(self, position: PointLabelPosition) -> "_PointView":
        self.label_position = PointLabelPosition(position)
        return self

    def _point_scales(self) -> tuple[Scale, Scale]:
        return _require_scale(self.x_scale, "X"), _require_scale(self.y_scale, "Y")

    def _make_point(
        self,
        row: PointRow,
        x_scale: Scale,
        y_scale: Scale,
        color: str,
        *,
        labelled: bool,
    ) -> Point:
        x = band_center(x_scale, _checked_coordinate(row.x, x_scale, "x"))
        y = band_center(y_scale, _checked_coordinate(row.y, y_scale, "y"))
        x_label = _coordinate_text(row.x)
        y_label = _coordinate_text(row.y)
        label = None
        if labelled:
            dx, dy, anchor = point_label_offset(self.label_position, self.marker_size)
            label = PointLabel(text=f"({x_label}, {y_label})", dx=dx, dy=dy, anchor=anchor)
        return Point(
            x=x,
            y=y,
            x_label=x_label,
            y_label=y_label,
            marker=self.marker_type,
            marker_size=self.marker_size,
            color=color,
            key=row.key,
            label=label,
        )


@dataclass
class ScatterView(_PointView):
    _points: tuple[Point, ...] = ()

    @property
    def points(self) -> tuple[Point, ...]:
        return self._points

    def legend_entries(self) -> tuple[LegendEntry, ...]:
        marker = LegendMarker.from_marker_type(self.marker_type)
        return tuple(
            LegendEntry(marker=marker, color=entry.color, label=entry.label) for entry in super().legend_entries()
        )

    def load_data(self, rows: Iterable[Any]) -> "ScatterView":
        x_scale, y_scale = self._point_scales()
        data = normalize_point_rows(rows)
        self._resolve_keys(data)
        points = tuple(
            self._make_point(row, x_scale, y_scale, self._color_map[row.key], labelled=self.labels_visible)
            for row in data
            if row.key in self._color_map
        )
        self._points = points
        self._loaded = True
        LOGGER.debug("ScatterView loaded %d point(s) from %d row(s)", len(points), len(data))
        return self

    def geometry(self) -> ViewGeometry:
        return ViewGeometry(points=self._points)


@dataclass
class LineSeriesView(_PointView):
    stroke_width: float = 2.0
    _series: tuple[LineSeries, ...] = ()

    legend_marker: ClassVar[LegendMarker] = LegendMarker.LINE

    @property
    def series(self) -> tuple[LineSeries, ...]:
        return self._series

    def load_data(self, rows: Iterable[Any]) -> "LineSeriesView":
        x_scale, y_scale = self._point_scales()
        data = normalize_point_rows(rows)
        self._resolve_keys(data)
        series: list[LineSeries] = []
        for key in self.keys:
            color = self._color_map[key]
            points = tuple(
                self._make_point(row, x_scale, y_scale, color, labelled=self.labels_visible)
                for row in data
                if row.key == key
            )
            series.append(LineSeries(key=key, color=color, points=points, stroke_width=self.stroke_width))
        self._series = tuple(series)
        self._loaded = True
        LOGGER.debug("LineSeriesView loaded %d series from %d row(s)", len(series), len(data))
        return self

    def geometry(self) -> ViewGeometry:
        return ViewGeometry(lines=self._series)


@dataclass
class AreaSeriesView(_PointView):
    """A single filled series closed back to the Y range start."""

    _area: AreaSeries | None = None

    @property
    def area(self) -> AreaSeries | None:
        return self._area

    def legend_entries(self) -> tuple[LegendEntry, ...]:
        return (LegendEntry(marker=LegendMarker.SQUARE, color=self.colors[0].as_hex(), label=self.custom_data_label),)

    def load_data(self, rows: Iterable[Any]) -> "AreaSeriesView":
        x_scale, y_scale = self._point_scales()
        data = normalize_point_rows(rows)
        if not data:
            raise ChartDataError("an area series needs at least one point")
        color = self.colors[0].as_hex()
        points = tuple(
            self._make_point(row, x_scale, y_scale, color, labelled=self.labels_visible) for row in data
        )
        self._area = AreaSeries(key=data[0].key, color=color, points=points, baseline=y_scale.range_start())
        self._color_map = {data[0].key: color}
        self._loaded = True
        LOGGER.debug("AreaSeriesView loaded %d point(s)", len(points))
        return self

    def geometry(self) -> ViewGeometry:
        return ViewGeometry(areas=(self._area,) if self._area is not None else ())


def _checked_coordinate(value: str | float, scale: Scale, axis: str) -> str | float:
    if scale.kind == ScaleKind.LINEAR and isinstance(value, str):
        raise ChartDataError(f"{axis} value {value!r} must be numeric for a linear scale")
    if scale.kind == ScaleKind.BAND and isinstance(value, float) and value.is_integer():
        # Rows coerce numbers to float; look integral categories up as "2019", not "2019.0".
        return int(value)
    return value


def _coordinate_text(value: str | float) -> str:
    if isinstance(value, str):
        return value
    return format_tick(value)
