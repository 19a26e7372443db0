from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


@dataclass(frozen=True)
class Color:
    hex: str

    def __post_init__(self) -> None:
        if not is_hex_color(self.hex):
            raise ValueError(f"color must be a hex string (#RGB, #RRGGBB or #RRGGBBAA), got {self.hex!r}")

    @classmethod
    def from_hex_strings(cls, values: Iterable[str]) -> tuple["Color", ...]:
        colors = tuple(cls(v) for v in values)
        if not colors:
            raise ValueError("a color palette needs at least one color")
        return colors

    def as_hex(self) -> str:
        return self.hex


CATEGORY_10: tuple[Color, ...] = Color.from_hex_strings(
    (
        "#1f77b4",
        "#ff7f0e",
        "#2ca02c",
        "#d62728",
        "#9467bd",
        "#8c564b",
        "#e377c2",
        "#7f7f7f",
        "#bcbd22",
        "#17becf",
    )
)

# Tableau 10 categorical palette.
TABLEAU_10: tuple[Color, ...] = Color.from_hex_strings(
    (
        "#4e79a7",
        "#f28e2c",
        "#e15759",
        "#76b7b2",
        "#59a14f",
        "#edc949",
        "#af7aa1",
        "#ff9da7",
        "#9c755f",
        "#bab0ab",
    )
)

DARK_8: tuple[Color, ...] = Color.from_hex_strings(
    (
        "#1b9e77",
        "#d95f02",
        "#7570b3",
        "#e7298a",
        "#66a61e",
        "#e6ab02",
        "#a6761d",
        "#666666",
    )
)

DEFAULT_PALETTE = CATEGORY_10


def coerce_palette(colors: Iterable[Color | str]) -> tuple[Color, ...]:
    out = tuple(c if isinstance(c, Color) else Color(str(c)) for c in colors)
    if not out:
        raise ValueError("a color palette needs at least one color")
    return out
