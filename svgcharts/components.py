from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class MarkerType(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    X = "x"


class BarLabelPosition(str, Enum):
    START_OUTSIDE = "start-outside"
    START_INSIDE = "start-inside"
    CENTER = "center"
    END_INSIDE = "end-inside"
    END_OUTSIDE = "end-outside"


class PointLabelPosition(str, Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"


@dataclass(frozen=True)
class BarBlock:
    """One stacked segment of a bar, in pixels along the value axis."""

    start: float
    end: float
    value: float
    color: str
    key: str = ""

    @property
    def size(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class BarLabel:
    text: str
    x: float
    y: float
    anchor: str


@dataclass(frozen=True)
class Bar:
    """A category's column (vertical) or row (horizontal).

    ``offset`` is the band start on the category axis; blocks and labels are
    relative to it on that axis and absolute on the value axis.
    """

    category: str
    orientation: Orientation
    offset: float
    bandwidth: float
    blocks: tuple[BarBlock, ...]
    labels: tuple[BarLabel, ...] = ()

    @property
    def total(self) -> float:
        return sum(block.value for block in self.blocks)


@dataclass(frozen=True)
class PointLabel:
    text: str
    dx: float
    dy: float
    anchor: str


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    x_label: str
    y_label: str
    marker: MarkerType
    marker_size: float
    color: str
    key: str = ""
    label: PointLabel | None = None


@dataclass(frozen=True)
class LineSeries:
    key: str
    color: str
    points: tuple[Point, ...]
    stroke_width: float = 2.0

    def path(self) -> tuple[tuple[float, float], ...]:
        return tuple((p.x, p.y) for p in self.points)


@dataclass(frozen=True)
class AreaSeries:
    key: str
    color: str
    points: tuple[Point, ...]
    baseline: float

    def outline(self) -> tuple[tuple[float, float], ...]:
        """Closed polygon: the data points, then back along the baseline."""
        if not self.points:
            return ()
        first = self.points[0]
        last = self.points[-1]
        return tuple((p.x, p.y) for p in self.points) + ((last.x, self.baseline), (first.x, self.baseline))


def point_label_offset(position: PointLabelPosition, marker_size: float) -> tuple[float, float, str]:
    """Label displacement ``(dx, dy, text_anchor)`` relative to the point centre."""
    m = float(marker_size)
    table: dict[PointLabelPosition, tuple[float, float, str]] = {
        PointLabelPosition.N: (0.0, -m - 12.0, "middle"),
        PointLabelPosition.NE: (m + 4.0, -m - 8.0, "start"),
        PointLabelPosition.E: (m + 8.0, 0.0, "start"),
        PointLabelPosition.SE: (m + 4.0, m + 8.0, "start"),
        PointLabelPosition.S: (0.0, m + 12.0, "middle"),
        PointLabelPosition.SW: (-m - 4.0, m + 8.0, "end"),
        PointLabelPosition.W: (-m - 8.0, 0.0, "end"),
        PointLabelPosition.NW: (-m - 4.0, -m - 8.0, "end"),
    }
    return table[position]
