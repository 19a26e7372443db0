from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
import logging
import math
from typing import Any, Iterator, Protocol, Sequence

import numpy as np

from svgcharts.errors import ScaleConfigError, UnknownCategoryError


LOGGER = logging.getLogger(__name__)

DEFAULT_TICK_COUNT = 10

# Leading-digit snapping thresholds of the classic D3 tick algorithm.
_E10 = math.sqrt(50.0)
_E5 = math.sqrt(10.0)
_E2 = math.sqrt(2.0)


class ScaleKind(str, Enum):
    BAND = "band"
    LINEAR = "linear"


class Scale(Protocol):
    """Read-only contract shared by every scale a view or axis can borrow."""

    @property
    def kind(self) -> ScaleKind: ...

    def scale(self, value: Any) -> float: ...

    def bandwidth(self) -> float | None: ...

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> Iterator[Any]: ...

    def range_start(self) -> float: ...

    def range_end(self) -> float: ...

    def is_range_reversed(self) -> bool: ...


def nice_tick_increment(start: float, stop: float, count: int) -> float:
    """Return the signed D3 tick increment for ``start < stop``.

    A positive result is the step itself. For steps below one the result is the
    negated inverse step (``-10`` for a step of ``0.1``) so callers can divide by
    an integer instead of multiplying by an inexact fraction.
    """
    if count <= 0:
        raise ValueError("tick count must be > 0")
    raw = (stop - start) / count
    if raw <= 0 or not math.isfinite(raw):
        return 0.0
    power = math.floor(math.log10(raw))
    error = raw / (10.0**power)
    if error >= _E10:
        factor = 10.0
    elif error >= _E5:
        factor = 5.0
    elif error >= _E2:
        factor = 2.0
    else:
        factor = 1.0
    if power >= 0:
        return factor * (10.0**power)
    return -(10.0 ** (-power)) / factor


def tick_step(start: float, stop: float, count: int) -> float:
    """Absolute distance between consecutive nice ticks over ``[start, stop]``."""
    lo, hi = (stop, start) if stop < start else (start, stop)
    inc = nice_tick_increment(lo, hi, count)
    if inc == 0 or not math.isfinite(inc):
        return 0.0
    return inc if inc > 0 else 1.0 / -inc


def generate_nice_ticks(vmin: float, vmax: float, count: int = DEFAULT_TICK_COUNT) -> np.ndarray:
    if count <= 0:
        raise ValueError("tick count must be > 0")
    vmin = float(vmin)
    vmax = float(vmax)
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        raise ValueError("tick domain must be finite")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    reverse = vmax < vmin
    lo, hi = (vmax, vmin) if reverse else (vmin, vmax)
    inc = nice_tick_increment(lo, hi, count)
    if inc == 0 or not math.isfinite(inc):
        return np.asarray([], dtype=np.float64)

    if inc > 0:
        i0 = math.ceil(lo / inc)
        i1 = math.floor(hi / inc)
        ticks = np.arange(i0, i1 + 1, dtype=np.float64) * inc
    else:
        inverse = -inc
        i0 = math.ceil(lo * inverse)
        i1 = math.floor(hi * inverse)
        ticks = np.arange(i0, i1 + 1, dtype=np.float64) / inverse
    if reverse:
        ticks = ticks[::-1].copy()
    return ticks


def _coerce_pair(values: Sequence[Any], *, label: str) -> tuple[float, float]:
    if isinstance(values, (str, bytes)) or len(values) != 2:
        raise ScaleConfigError(f"{label} must have exactly two endpoints")
    out: list[float] = []
    for raw in values:
        try:
            v = float(raw)
        except (TypeError, ValueError) as exc:
            raise ScaleConfigError(f"{label} endpoints must be numeric, got {raw!r}") from exc
        if not math.isfinite(v):
            raise ScaleConfigError(f"{label} endpoints must be finite, got {raw!r}")
        out.append(v)
    return (out[0], out[1])


@dataclass(frozen=True)
class BandScale:
    """Maps ordered categories onto evenly spaced pixel bands.

    Instances are immutable: the ``with_*`` helpers return a rescaled copy, so a
    single scale can be shared by any number of views and axes.
    """

    domain: tuple[str, ...] = ()
    range: tuple[float, float] = (0.0, 1.0)
    padding_inner: float = 0.1
    padding_outer: float = 0.1
    align: float = 0.5

    _step: float = field(init=False, repr=False, compare=False, default=1.0)
    _bandwidth: float = field(init=False, repr=False, compare=False, default=1.0)
    _offsets: tuple[float, ...] = field(init=False, repr=False, compare=False, default=())
    _index: dict[str, int] = field(init=False, repr=False, compare=False, default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.domain, str):
            raise ScaleConfigError("band scale domain must be a sequence of categories")
        if not 0.0 <= self.padding_inner < 1.0:
            raise ScaleConfigError("padding_inner must be in [0, 1)")
        if not 0.0 <= self.padding_outer < 1.0:
            raise ScaleConfigError("padding_outer must be in [0, 1)")
        if not 0.0 <= self.align <= 1.0:
            raise ScaleConfigError("align must be in [0, 1]")
        object.__setattr__(self, "range", _coerce_pair(self.range, label="band scale range"))
        self._rescale()

    def _rescale(self) -> None:
        index: dict[str, int] = {}
        unique: list[str] = []
        for raw in self.domain:
            category = str(raw)
            if category not in index:
                index[category] = len(unique)
                unique.append(category)

        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        n = len(unique)

        denominator = max(1.0, n - self.padding_inner + self.padding_outer * 2.0)
        step = (stop - start) / denominator
        start += (stop - start - step * (n - self.padding_inner)) * self.align
        bandwidth = step * (1.0 - self.padding_inner)

        offsets = start + step * np.arange(n, dtype=np.float64)
        if reverse:
            offsets = offsets[::-1]

        object.__setattr__(self, "domain", tuple(unique))
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_step", float(step))
        object.__setattr__(self, "_bandwidth", float(bandwidth))
        object.__setattr__(self, "_offsets", tuple(float(v) for v in offsets.tolist()))
        LOGGER.debug(
            "band scale rescaled: n=%d step=%.6g bandwidth=%.6g start=%.6g reversed=%s",
            n,
            step,
            bandwidth,
            start,
            reverse,
        )

    @property
    def kind(self) -> ScaleKind:
        return ScaleKind.BAND

    @property
    def step(self) -> float:
        return self._step

    @property
    def offsets(self) -> tuple[float, ...]:
        return self._offsets

    def with_domain(self, domain: Sequence[Any]) -> "BandScale":
        return replace(self, domain=tuple(domain))

    def with_range(self, r0: float, r1: float) -> "BandScale":
        return replace(self, range=(r0, r1))

    def with_padding(self, *, inner: float | None = None, outer: float | None = None) -> "BandScale":
        return replace(
            self,
            padding_inner=self.padding_inner if inner is None else float(inner),
            padding_outer=self.padding_outer if outer is None else float(outer),
        )

    def with_align(self, align: float) -> "BandScale":
        return replace(self, align=float(align))

    def contains(self, category: Any) -> bool:
        return str(category) in self._index

    def index_of(self, category: Any) -> int:
        key = category if isinstance(category, str) else str(category)
        try:
            return self._index[key]
        except KeyError:
            raise UnknownCategoryError(key) from None

    def scale(self, value: Any) -> float:
        return self._offsets[self.index_of(value)]

    def bandwidth(self) -> float | None:
        return self._bandwidth

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> Iterator[str]:
        yield from self.domain

    def range_start(self) -> float:
        return self.range[0]

    def range_end(self) -> float:
        return self.range[1]

    def is_range_reversed(self) -> bool:
        return self.range[0] > self.range[1]


@dataclass(frozen=True)
class LinearScale:
    """Affine map from a numeric interval onto a pixel interval.

    The range keeps the direction given by the caller; chart Y axes are usually
    declared as ``(height, 0)`` and consumers query :meth:`is_range_reversed`.
    """

    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", _coerce_pair(self.domain, label="linear scale domain"))
        object.__setattr__(self, "range", _coerce_pair(self.range, label="linear scale range"))

    @property
    def kind(self) -> ScaleKind:
        return ScaleKind.LINEAR

    def with_domain(self, d0: float, d1: float) -> "LinearScale":
        return replace(self, domain=(d0, d1))

    def with_range(self, r0: float, r1: float) -> "LinearScale":
        return replace(self, range=(r0, r1))

    def normalize(self, value: float) -> float:
        d0, d1 = self.domain
        if d0 == d1:
            return 0.5
        return (float(value) - d0) / (d1 - d0)

    def scale(self, value: Any) -> float:
        t = self.normalize(value)
        r0, r1 = self.range
        return r0 * (1.0 - t) + r1 * t

    def invert(self, pixel: float) -> float:
        r0, r1 = self.range
        d0, d1 = self.domain
        if r0 == r1:
            return d0 * 0.5 + d1 * 0.5
        t = (float(pixel) - r0) / (r1 - r0)
        return d0 * (1.0 - t) + d1 * t

    def nice(self, count: int = DEFAULT_TICK_COUNT) -> "LinearScale":
        d0, d1 = self.domain
        if d0 == d1:
            return self
        reverse = d1 < d0
        lo, hi = (d1, d0) if reverse else (d0, d1)
        previous: float | None = None
        for _ in range(10):
            inc = nice_tick_increment(lo, hi, count)
            if inc == previous or inc == 0 or not math.isfinite(inc):
                break
            if inc > 0:
                lo = math.floor(lo / inc) * inc
                hi = math.ceil(hi / inc) * inc
            else:
                lo = math.ceil(lo * inc) / inc
                hi = math.floor(hi * inc) / inc
            previous = inc
        return replace(self, domain=(hi, lo) if reverse else (lo, hi))

    def bandwidth(self) -> float | None:
        return None

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> Iterator[float]:
        d0, d1 = self.domain
        for value in generate_nice_ticks(d0, d1, count).tolist():
            yield float(value)

    def tick_step(self, count: int = DEFAULT_TICK_COUNT) -> float:
        d0, d1 = self.domain
        return tick_step(d0, d1, count)

    def range_start(self) -> float:
        return self.range[0]

    def range_end(self) -> float:
        return self.range[1]

    def is_range_reversed(self) -> bool:
        return self.range[0] > self.range[1]


def band_center(scale: Scale, value: Any) -> float:
    """Pixel position of ``value``, centred inside its band for band scales."""
    return scale.scale(value) + (scale.bandwidth() or 0.0) / 2.0
