from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
import math
from typing import Any, Protocol, runtime_checkable

from svgcharts.errors import ChartDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


@runtime_checkable
class BarDatum(Protocol):
    """Accessors a row must offer to be drawn as (part of) a bar."""

    def get_category(self) -> str: ...

    def get_value(self) -> float: ...

    def get_key(self) -> str: ...


@runtime_checkable
class PointDatum(Protocol):
    """Accessors a row must offer to be drawn as a point, line vertex or area vertex."""

    def get_x(self) -> Any: ...

    def get_y(self) -> Any: ...

    def get_key(self) -> str: ...


@dataclass(frozen=True)
class BarRow:
    category: str
    value: float
    key: str = ""

    def get_category(self) -> str:
        return self.category

    def get_value(self) -> float:
        return self.value

    def get_key(self) -> str:
        return self.key


@dataclass(frozen=True)
class PointRow:
    x: str | float
    y: str | float
    key: str = ""

    def get_x(self) -> str | float:
        return self.x

    def get_y(self) -> str | float:
        return self.y

    def get_key(self) -> str:
        return self.key


def normalize_bar_rows(rows: Iterable[Any]) -> tuple[BarRow, ...]:
    if isinstance(rows, (str, bytes)):
        raise ChartDataError("bar rows must be an iterable of rows, not a string")
    if pd is not None and isinstance(rows, pd.DataFrame):
        raise ChartDataError("use bar_rows_from_frame() to load a DataFrame")
    return tuple(_to_bar_row(raw, index=i) for i, raw in enumerate(rows))


def normalize_point_rows(rows: Iterable[Any]) -> tuple[PointRow, ...]:
    if isinstance(rows, (str, bytes)):
        raise ChartDataError("point rows must be an iterable of rows, not a string")
    if pd is not None and isinstance(rows, pd.DataFrame):
        raise ChartDataError("use point_rows_from_frame() to load a DataFrame")
    return tuple(_to_point_row(raw, index=i) for i, raw in enumerate(rows))


def bar_rows_from_frame(frame: Any, *, category: str, value: str, key: str | None = None) -> tuple[BarRow, ...]:
    _require_frame(frame, columns=(category, value) + ((key,) if key is not None else ()))
    keys = frame[key].tolist() if key is not None else [""] * len(frame)
    return tuple(
        BarRow(category=str(c), value=_coerce_number(v, label="value", index=i), key=str(k))
        for i, (c, v, k) in enumerate(zip(frame[category].tolist(), frame[value].tolist(), keys))
    )


def point_rows_from_frame(frame: Any, *, x: str, y: str, key: str | None = None) -> tuple[PointRow, ...]:
    _require_frame(frame, columns=(x, y) + ((key,) if key is not None else ()))
    keys = frame[key].tolist() if key is not None else [""] * len(frame)
    return tuple(
        PointRow(
            x=_coerce_coordinate(xv, label="x", index=i),
            y=_coerce_coordinate(yv, label="y", index=i),
            key=str(k),
        )
        for i, (xv, yv, k) in enumerate(zip(frame[x].tolist(), frame[y].tolist(), keys))
    )


def _require_frame(frame: Any, *, columns: Sequence[str]) -> None:
    if pd is None:
        raise ChartDataError("pandas is required to load rows from a DataFrame")
    if not isinstance(frame, pd.DataFrame):
        raise ChartDataError("`frame` must be a pandas DataFrame")
    for column in columns:
        if column not in frame.columns:
            raise ChartDataError(f"column not found: {column}")


def _to_bar_row(raw: Any, *, index: int) -> BarRow:
    if isinstance(raw, BarRow):
        return raw
    if isinstance(raw, BarDatum):
        return BarRow(
            category=str(raw.get_category()),
            value=_coerce_number(raw.get_value(), label="value", index=index),
            key=str(raw.get_key()),
        )
    if isinstance(raw, Mapping):
        if "category" not in raw or "value" not in raw:
            raise ChartDataError(f"bar row {index} must provide `category` and `value`")
        return BarRow(
            category=str(raw["category"]),
            value=_coerce_number(raw["value"], label="value", index=index),
            key="" if raw.get("key") is None else str(raw["key"]),
        )
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
        if len(raw) == 2:
            first, second = raw
            # (category, value) and (value, category) are both accepted.
            if isinstance(first, str):
                return BarRow(category=first, value=_coerce_number(second, label="value", index=index))
            return BarRow(category=str(second), value=_coerce_number(first, label="value", index=index))
        if len(raw) == 3:
            category, value, key = raw
            return BarRow(category=str(category), value=_coerce_number(value, label="value", index=index), key=str(key))
        raise ChartDataError(f"bar row {index} must have 2 or 3 fields, got {len(raw)}")
    raise ChartDataError(f"unsupported bar row type at index {index}: {type(raw)!r}")


def _to_point_row(raw: Any, *, index: int) -> PointRow:
    if isinstance(raw, PointRow):
        return raw
    if isinstance(raw, PointDatum):
        return PointRow(
            x=_coerce_coordinate(raw.get_x(), label="x", index=index),
            y=_coerce_coordinate(raw.get_y(), label="y", index=index),
            key=str(raw.get_key()),
        )
    if isinstance(raw, Mapping):
        if "x" not in raw or "y" not in raw:
            raise ChartDataError(f"point row {index} must provide `x` and `y`")
        return PointRow(
            x=_coerce_coordinate(raw["x"], label="x", index=index),
            y=_coerce_coordinate(raw["y"], label="y", index=index),
            key="" if raw.get("key") is None else str(raw["key"]),
        )
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
        if len(raw) not in (2, 3):
            raise ChartDataError(f"point row {index} must have 2 or 3 fields, got {len(raw)}")
        key = str(raw[2]) if len(raw) == 3 else ""
        return PointRow(
            x=_coerce_coordinate(raw[0], label="x", index=index),
            y=_coerce_coordinate(raw[1], label="y", index=index),
            key=key,
        )
    raise ChartDataError(f"unsupported point row type at index {index}: {type(raw)!r}")


def _coerce_coordinate(raw: Any, *, label: str, index: int) -> str | float:
    if isinstance(raw, str):
        return raw
    return _coerce_number(raw, label=label, index=index)


def _coerce_number(raw: Any, *, label: str, index: int) -> float:
    if raw is None:
        raise ChartDataError(f"{label} is missing at index {index}")
    if isinstance(raw, Decimal):
        out = float(raw)
    else:
        try:
            out = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label} contains non-numeric value at index {index}: {raw!r}") from exc
    if not math.isfinite(out):
        raise ChartDataError(f"{label} must be finite at index {index}, got {raw!r}")
    return out
