from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from svgcharts.colors import is_hex_color


@dataclass(frozen=True)
class ChartStyle:
    """Layout constants and presentation tokens shared by layout and rendering."""

    font_family: str = "sans-serif"
    title_font_size_px: float = 24.0
    tick_font_size_px: float = 14.0
    axis_label_font_size_px: float = 14.0
    legend_font_size_px: float = 12.0
    value_label_font_size_px: float = 14.0

    axis_color: str = "#bbbbbb"
    tick_label_color: str = "#777777"
    axis_label_color: str = "#777777"
    legend_label_color: str = "#777777"
    value_label_color: str = "#333333"
    title_color: str = "#333333"

    tick_size: float = 6.0
    tick_label_offset: float = 16.0
    axis_label_gap: float = 42.0

    legend_gap: float = 10.0
    legend_row_height: float = 20.0
    legend_letter_width: float = 7.0
    legend_marker_size: float = 7.0
    legend_marker_to_label_gap: float = 6.0
    legend_edge_gap: float = 10.0
    legend_axis_gap: float = 30.0
    legend_axis_label_gap: float = 30.0

    line_width: float = 2.0


DEFAULT_STYLE = ChartStyle()

_COLOR_TOKENS = frozenset(f.name for f in fields(ChartStyle) if f.name.endswith("_color"))
_SIZE_TOKENS = frozenset(
    f.name for f in fields(ChartStyle) if f.name not in _COLOR_TOKENS and f.name != "font_family"
)


def resolve_chart_style(overrides: Mapping[str, Any] | None = None, *, base: ChartStyle = DEFAULT_STYLE) -> ChartStyle:
    """Validate and merge style overrides on top of ``base``."""

    raw: dict[str, Any] = asdict(base)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in sorted(_COLOR_TOKENS):
        if not is_hex_color(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RGB, #RRGGBB or #RRGGBBAA)")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    for key in sorted(_SIZE_TOKENS):
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
        raw[key] = float(value)

    return ChartStyle(**raw)
