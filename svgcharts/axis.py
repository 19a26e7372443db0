from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import Any

from svgcharts.components import Orientation
from svgcharts.errors import ChartConfigError
from svgcharts.formatting import FormatSpec, format_ticks_for_axis, parse_format_spec
from svgcharts.scales import DEFAULT_TICK_COUNT, Scale, ScaleKind
from svgcharts.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)


class AxisPosition(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def orientation(self) -> Orientation:
        if self in (AxisPosition.TOP, AxisPosition.BOTTOM):
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL


@dataclass(frozen=True)
class AxisTick:
    """A tick translated to ``(x, y)``; line and label are relative to that point."""

    value: Any
    offset: float
    x: float
    y: float
    line_end: tuple[float, float]
    label: str
    label_x: float
    label_y: float
    anchor: str
    rotation: float = 0.0


@dataclass(frozen=True)
class AxisLayout:
    position: AxisPosition
    scale_kind: ScaleKind
    ticks: tuple[AxisTick, ...]
    line: tuple[float, float, float, float]
    label: str | None = None
    label_x: float = 0.0
    label_y: float = 0.0
    label_rotation: float = 0.0

    @property
    def orientation(self) -> Orientation:
        return self.position.orientation

    @property
    def has_label(self) -> bool:
        return bool(self.label)


def layout_axis(
    scale: Scale,
    position: AxisPosition,
    *,
    label: str | None = None,
    tick_label_rotation: float = 0.0,
    tick_label_format: str | FormatSpec | None = None,
    tick_count: int = DEFAULT_TICK_COUNT,
    style: ChartStyle = DEFAULT_STYLE,
) -> AxisLayout:
    rotation = float(tick_label_rotation)
    if not math.isfinite(rotation):
        raise ChartConfigError("tick label rotation must be finite")
    fmt = parse_format_spec(tick_label_format) if isinstance(tick_label_format, str) else tick_label_format

    values = list(scale.ticks(tick_count))
    if scale.kind == ScaleKind.BAND:
        texts = [str(v) for v in values]
        if not values:
            LOGGER.warning("band scale on the %s axis has an empty domain; no ticks laid out", position.value)
    else:
        texts = format_ticks_for_axis(values, fmt)
    half_band = (scale.bandwidth() or 0.0) / 2.0

    line_end, label_dx, label_dy, anchor = _tick_geometry(position, rotation, style)
    horizontal = position.orientation == Orientation.HORIZONTAL
    ticks: list[AxisTick] = []
    for value, text in zip(values, texts):
        offset = scale.scale(value) + half_band
        ticks.append(
            AxisTick(
                value=value,
                offset=offset,
                x=offset if horizontal else 0.0,
                y=0.0 if horizontal else offset,
                line_end=line_end,
                label=text,
                label_x=label_dx,
                label_y=label_dy,
                anchor=anchor,
                rotation=rotation,
            )
        )

    lo = min(scale.range_start(), scale.range_end())
    hi = max(scale.range_start(), scale.range_end())
    line = (lo, 0.0, hi, 0.0) if horizontal else (0.0, lo, 0.0, hi)
    label_x, label_y, label_rotation = _axis_label_placement(position, (lo + hi) / 2.0, style.axis_label_gap)
    return AxisLayout(
        position=position,
        scale_kind=scale.kind,
        ticks=tuple(ticks),
        line=line,
        label=label or None,
        label_x=label_x,
        label_y=label_y,
        label_rotation=label_rotation,
    )


def _tick_geometry(
    position: AxisPosition,
    rotation: float,
    style: ChartStyle,
) -> tuple[tuple[float, float], float, float, str]:
    size = style.tick_size
    gap = style.tick_label_offset
    if position == AxisPosition.TOP:
        anchor = "middle" if rotation == 0 else ("start" if rotation < 0 else "end")
        return (0.0, -size), 0.0, -gap, anchor
    if position == AxisPosition.BOTTOM:
        anchor = "middle" if rotation == 0 else ("end" if rotation < 0 else "start")
        return (0.0, size), 0.0, gap, anchor
    if position == AxisPosition.LEFT:
        return (-size, 0.0), -gap, 0.0, "end"
    return (size, 0.0), gap, 0.0, "start"


def _axis_label_placement(position: AxisPosition, middle: float, gap: float) -> tuple[float, float, float]:
    if position == AxisPosition.TOP:
        return middle, -gap, 0.0
    if position == AxisPosition.BOTTOM:
        return middle, gap, 0.0
    if position == AxisPosition.LEFT:
        return -gap, middle, -90.0
    return gap, middle, 90.0
