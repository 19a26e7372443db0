from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from svgcharts.components import MarkerType


class LegendMarker(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    X = "x"
    LINE = "line"

    @classmethod
    def from_marker_type(cls, marker: MarkerType) -> "LegendMarker":
        return cls(marker.value)


@dataclass(frozen=True)
class LegendEntry:
    marker: LegendMarker
    color: str
    label: str
    stroke_dasharray: str = "none"
    marker_size: float = 7.0
    marker_to_label_gap: float = 6.0
    letter_width: float = 7.0

    @property
    def width(self) -> float:
        # Rough width of a 12px sans-serif label plus the marker; not real text metrics.
        return self.letter_width * len(self.label) + self.marker_size * 2 + self.marker_to_label_gap


@dataclass(frozen=True)
class PlacedLegendEntry:
    entry: LegendEntry
    x: float
    y: float
    row: int


@dataclass(frozen=True)
class LegendLayout:
    entries: tuple[PlacedLegendEntry, ...] = ()
    row_count: int = 0
    row_height: float = 20.0
    entry_width: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def width(self) -> float:
        if not self.entries:
            return 0.0
        return max(placed.x for placed in self.entries) + self.entry_width

    @property
    def height(self) -> float:
        return self.row_count * self.row_height


def layout_legend(
    entries: Sequence[LegendEntry],
    available_width: float,
    *,
    gap: float = 10.0,
    row_height: float = 20.0,
) -> LegendLayout:
    """Wrap entries into rows of equal-width slots, greedily and in order.

    Every slot is as wide as the widest entry. An entry moves to a new row when
    another slot would overflow ``available_width``, unless the row is still
    empty.
    """
    if not entries:
        return LegendLayout(row_height=row_height)
    max_entry_width = max(entry.width for entry in entries)
    placed: list[PlacedLegendEntry] = []
    row = 0
    acc_row_width = 0.0
    for entry in entries:
        if acc_row_width + max_entry_width > available_width and acc_row_width > 0:
            acc_row_width = 0.0
            row += 1
        placed.append(PlacedLegendEntry(entry=entry, x=acc_row_width, y=row * row_height, row=row))
        acc_row_width += max_entry_width + gap
    return LegendLayout(
        entries=tuple(placed),
        row_count=row + 1,
        row_height=row_height,
        entry_width=max_entry_width,
    )
