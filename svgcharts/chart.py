from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Any, Mapping, Sequence

from svgcharts.axis import AxisLayout, AxisPosition, layout_axis
from svgcharts.errors import ChartConfigError
from svgcharts.formatting import FormatSpec, parse_format_spec
from svgcharts.legend import LegendEntry, LegendLayout, layout_legend
from svgcharts.scales import Scale
from svgcharts.style import DEFAULT_STYLE, ChartStyle, resolve_chart_style
from svgcharts.views import ViewGeometry


LOGGER = logging.getLogger(__name__)

DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 400


@dataclass(frozen=True)
class Margins:
    top: float = 20.0
    right: float = 20.0
    bottom: float = 50.0
    left: float = 60.0

    def __post_init__(self) -> None:
        for name in ("top", "right", "bottom", "left"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value < 0:
                raise ChartConfigError(f"margin `{name}` must be a finite number >= 0")
            object.__setattr__(self, name, value)


@dataclass(frozen=True)
class TitlePlacement:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class PlacedAxis:
    """An axis layout and where its origin sits inside the view area."""

    layout: AxisLayout
    translate: tuple[float, float]

    @property
    def position(self) -> AxisPosition:
        return self.layout.position


@dataclass(frozen=True)
class PlacedLegend:
    position: AxisPosition
    layout: LegendLayout
    translate: tuple[float, float]


@dataclass(frozen=True)
class Chart:
    """Frozen chart layout produced by :meth:`ChartBuilder.build`.

    Axis and legend translations are relative to the view area, whose origin
    is offset from the document origin by the left and top margins.
    """

    width: float
    height: float
    margins: Margins
    view_width: float
    view_height: float
    title: TitlePlacement | None
    axes: tuple[PlacedAxis, ...]
    views: tuple[ViewGeometry, ...]
    legend: PlacedLegend | None
    style: ChartStyle = DEFAULT_STYLE

    def axis(self, position: AxisPosition | str) -> PlacedAxis | None:
        wanted = AxisPosition(position)
        for placed in self.axes:
            if placed.position == wanted:
                return placed
        return None


@dataclass
class _AxisSpec:
    scale: Scale
    label: str | None = None
    tick_label_rotation: float = 0.0
    tick_label_format: FormatSpec | None = None


@dataclass
class ChartBuilder:
    """Collects views, axes and a legend, then lays them out in :meth:`build`.

    Setters validate eagerly and raise :class:`ChartConfigError` on misuse, so a
    bad call fails where it is made instead of at build time.
    """

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    margins: Margins = field(default_factory=Margins)
    title: str | None = None
    style: ChartStyle = DEFAULT_STYLE
    _views: list[Any] = field(default_factory=list)
    _axes: dict[AxisPosition, _AxisSpec] = field(default_factory=dict)
    _legend_position: AxisPosition | None = None

    def set_width(self, width: float) -> "ChartBuilder":
        _check_view_area(_positive(width, "width"), self.height, self.margins)
        self.width = float(width)
        return self

    def set_height(self, height: float) -> "ChartBuilder":
        _check_view_area(self.width, _positive(height, "height"), self.margins)
        self.height = float(height)
        return self

    def set_margins(self, top: float, right: float, bottom: float, left: float) -> "ChartBuilder":
        margins = Margins(top=top, right=right, bottom=bottom, left=left)
        _check_view_area(self.width, self.height, margins)
        self.margins = margins
        return self

    def set_dimensions(
        self, width: float, height: float, margins: Margins | Sequence[float] | None = None
    ) -> "ChartBuilder":
        """Set size and margins together, validating the combination once."""
        w = _positive(width, "width")
        h = _positive(height, "height")
        if margins is None:
            m = self.margins
        elif isinstance(margins, Margins):
            m = margins
        else:
            if len(margins) != 4:
                raise ChartConfigError("margins must be (top, right, bottom, left)")
            m = Margins(*margins)
        _check_view_area(w, h, m)
        self.width, self.height, self.margins = w, h, m
        return self

    def add_title(self, title: str) -> "ChartBuilder":
        self.title = str(title)
        return self

    def set_style(self, overrides: ChartStyle | Mapping[str, Any] | None = None) -> "ChartBuilder":
        if isinstance(overrides, ChartStyle):
            self.style = overrides
            return self
        try:
            self.style = resolve_chart_style(overrides, base=self.style)
        except ValueError as exc:
            raise ChartConfigError(str(exc)) from exc
        return self

    def add_view(self, view: Any) -> "ChartBuilder":
        if not callable(getattr(view, "geometry", None)) or not callable(getattr(view, "legend_entries", None)):
            raise ChartConfigError(f"object of type {type(view).__name__} is not a chart view")
        self._views.append(view)
        return self

    @property
    def views(self) -> tuple[Any, ...]:
        return tuple(self._views)

    def add_axis_top(self, scale: Scale) -> "ChartBuilder":
        return self._add_axis(AxisPosition.TOP, scale)

    def add_axis_right(self, scale: Scale) -> "ChartBuilder":
        return self._add_axis(AxisPosition.RIGHT, scale)

    def add_axis_bottom(self, scale: Scale) -> "ChartBuilder":
        return self._add_axis(AxisPosition.BOTTOM, scale)

    def add_axis_left(self, scale: Scale) -> "ChartBuilder":
        return self._add_axis(AxisPosition.LEFT, scale)

    def add_top_axis_label(self, label: str) -> "ChartBuilder":
        self._axis_spec(AxisPosition.TOP, "label").label = str(label)
        return self

    def add_right_axis_label(self, label: str) -> "ChartBuilder":
        self._axis_spec(AxisPosition.RIGHT, "label").label = str(label)
        return self

    def add_bottom_axis_label(self, label: str) -> "ChartBuilder":
        self._axis_spec(AxisPosition.BOTTOM, "label").label = str(label)
        return self

    def add_left_axis_label(self, label: str) -> "ChartBuilder":
        self._axis_spec(AxisPosition.LEFT, "label").label = str(label)
        return self

    def set_top_axis_tick_label_rotation(self, rotation: float) -> "ChartBuilder":
        return self._set_rotation(AxisPosition.TOP, rotation)

    def set_right_axis_tick_label_rotation(self, rotation: float) -> "ChartBuilder":
        return self._set_rotation(AxisPosition.RIGHT, rotation)

    def set_bottom_axis_tick_label_rotation(self, rotation: float) -> "ChartBuilder":
        return self._set_rotation(AxisPosition.BOTTOM, rotation)

    def set_left_axis_tick_label_rotation(self, rotation: float) -> "ChartBuilder":
        return self._set_rotation(AxisPosition.LEFT, rotation)

    def set_top_axis_tick_label_format(self, spec: str) -> "ChartBuilder":
        return self._set_format(AxisPosition.TOP, spec)

    def set_right_axis_tick_label_format(self, spec: str) -> "ChartBuilder":
        return self._set_format(AxisPosition.RIGHT, spec)

    def set_bottom_axis_tick_label_format(self, spec: str) -> "ChartBuilder":
        return self._set_format(AxisPosition.BOTTOM, spec)

    def set_left_axis_tick_label_format(self, spec: str) -> "ChartBuilder":
        return self._set_format(AxisPosition.LEFT, spec)

    def add_legend_at(self, position: AxisPosition | str) -> "ChartBuilder":
        try:
            self._legend_position = AxisPosition(position)
        except ValueError as exc:
            raise ChartConfigError(f"unsupported legend position: {position!r}") from exc
        return self

    @property
    def view_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def view_height(self) -> float:
        return self.height - self.margins.top - self.margins.bottom

    def build(self) -> Chart:
        view_width = self.view_width
        view_height = self.view_height

        axes: list[PlacedAxis] = []
        for position in AxisPosition:
            spec = self._axes.get(position)
            if spec is None:
                continue
            layout = layout_axis(
                spec.scale,
                position,
                label=spec.label,
                tick_label_rotation=spec.tick_label_rotation,
                tick_label_format=spec.tick_label_format,
                style=self.style,
            )
            axes.append(PlacedAxis(layout=layout, translate=_axis_translation(position, view_width, view_height)))

        views = tuple(view.geometry() for view in self._views)
        legend = self._place_legend(view_width, view_height)

        title = None
        if self.title:
            title = TitlePlacement(text=self.title, x=self.margins.left + view_width / 2.0, y=self.margins.top / 2.0)

        LOGGER.debug(
            "chart built: %sx%s view=%sx%s axes=%d views=%d legend=%s",
            self.width,
            self.height,
            view_width,
            view_height,
            len(axes),
            len(views),
            legend.position.value if legend else None,
        )
        return Chart(
            width=self.width,
            height=self.height,
            margins=self.margins,
            view_width=view_width,
            view_height=view_height,
            title=title,
            axes=tuple(axes),
            views=views,
            legend=legend,
            style=self.style,
        )

    def legend_spacing(self, position: AxisPosition) -> float:
        """Distance between the view edge and the legend on ``position``."""
        spacing = self.style.legend_edge_gap
        spec = self._axes.get(position)
        if spec is not None:
            spacing += self.style.legend_axis_gap
            if spec.label:
                spacing += self.style.legend_axis_label_gap
        return spacing

    def _place_legend(self, view_width: float, view_height: float) -> PlacedLegend | None:
        position = self._legend_position
        if position is None:
            return None
        entries: list[LegendEntry] = []
        for view in self._views:
            for entry in view.legend_entries():
                entries.append(
                    LegendEntry(
                        marker=entry.marker,
                        color=entry.color,
                        label=entry.label,
                        stroke_dasharray=entry.stroke_dasharray,
                        marker_size=self.style.legend_marker_size,
                        marker_to_label_gap=self.style.legend_marker_to_label_gap,
                        letter_width=self.style.legend_letter_width,
                    )
                )

        if position == AxisPosition.LEFT:
            available = self.margins.left
        elif position == AxisPosition.RIGHT:
            available = self.margins.right
        else:
            available = view_width
        layout = layout_legend(
            entries,
            available,
            gap=self.style.legend_gap,
            row_height=self.style.legend_row_height,
        )

        spacing = self.legend_spacing(position)
        if position == AxisPosition.TOP:
            translate = (0.0, -spacing - layout.height)
        elif position == AxisPosition.BOTTOM:
            translate = (0.0, view_height + spacing)
        elif position == AxisPosition.LEFT:
            translate = (-spacing - layout.width, 0.0)
        else:
            translate = (view_width + spacing, 0.0)
        return PlacedLegend(position=position, layout=layout, translate=translate)

    def _add_axis(self, position: AxisPosition, scale: Scale) -> "ChartBuilder":
        if not callable(getattr(scale, "scale", None)) or not callable(getattr(scale, "ticks", None)):
            raise ChartConfigError(f"the {position.value} axis needs a band or linear scale")
        self._axes[position] = _AxisSpec(scale=scale)
        return self

    def _axis_spec(self, position: AxisPosition, what: str) -> _AxisSpec:
        spec = self._axes.get(position)
        if spec is None:
            raise ChartConfigError(f"cannot set {what} on the {position.value} axis: add the axis first")
        return spec

    def _set_rotation(self, position: AxisPosition, rotation: float) -> "ChartBuilder":
        spec = self._axis_spec(position, "tick label rotation")
        value = float(rotation)
        if not math.isfinite(value):
            raise ChartConfigError("tick label rotation must be finite")
        spec.tick_label_rotation = value
        return self

    def _set_format(self, position: AxisPosition, spec_text: str) -> "ChartBuilder":
        spec = self._axis_spec(position, "tick label format")
        spec.tick_label_format = parse_format_spec(spec_text)
        return self


def _check_view_area(width: float, height: float, margins: Margins) -> None:
    if width - margins.left - margins.right <= 0 or height - margins.top - margins.bottom <= 0:
        raise ChartConfigError(f"margins {margins} leave no view area in a {width}x{height} chart")


def _positive(value: float, name: str) -> float:
    if isinstance(value, bool):
        raise ChartConfigError(f"{name} must be a number")
    out = float(value)
    if not math.isfinite(out) or out <= 0:
        raise ChartConfigError(f"{name} must be > 0")
    return out


def _axis_translation(position: AxisPosition, view_width: float, view_height: float) -> tuple[float, float]:
    if position == AxisPosition.BOTTOM:
        return (0.0, view_height)
    if position == AxisPosition.RIGHT:
        return (view_width, 0.0)
    return (0.0, 0.0)
