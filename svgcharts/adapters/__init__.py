from .rows import (
    BarDatum,
    BarRow,
    PointDatum,
    PointRow,
    bar_rows_from_frame,
    normalize_bar_rows,
    normalize_point_rows,
    point_rows_from_frame,
)

__all__ = [
    "BarDatum",
    "BarRow",
    "PointDatum",
    "PointRow",
    "bar_rows_from_frame",
    "normalize_bar_rows",
    "normalize_point_rows",
    "point_rows_from_frame",
]
