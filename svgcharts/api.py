from __future__ import annotations

from typing import Any, Mapping, Sequence

from svgcharts.chart import DEFAULT_HEIGHT, DEFAULT_WIDTH, ChartBuilder
from svgcharts.errors import ChartConfigError

DEFAULT_ASPECT_RATIO = DEFAULT_WIDTH / DEFAULT_HEIGHT


def chart(
    width: float | None = None,
    height: float | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    title: str | None = None,
    margins: Sequence[float] | None = None,
    style: Mapping[str, Any] | None = None,
) -> ChartBuilder:
    """Start a chart; a missing dimension follows from the other and ``aspect_ratio``."""
    if aspect_ratio <= 0:
        raise ChartConfigError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = DEFAULT_WIDTH, DEFAULT_HEIGHT
    elif width is None and height is not None:
        if height <= 0:
            raise ChartConfigError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ChartConfigError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))
    assert width is not None and height is not None

    builder = ChartBuilder().set_dimensions(width, height, margins)
    if title:
        builder.add_title(title)
    if style:
        builder.set_style(style)
    return builder
