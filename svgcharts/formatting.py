from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
import re
from typing import Sequence

import numpy as np

from svgcharts.errors import ChartConfigError


_FORMAT_SPEC = re.compile(r"^(?P<comma>,)?(?:\.(?P<precision>\d{1,2}))?(?P<type>[sfd%])?$")

_SI_PREFIXES: dict[int, str] = {
    -24: "y",
    -21: "z",
    -18: "a",
    -15: "f",
    -12: "p",
    -9: "n",
    -6: "µ",
    -3: "m",
    0: "",
    3: "k",
    6: "M",
    9: "G",
    12: "T",
    15: "P",
    18: "E",
    21: "Z",
    24: "Y",
}


@dataclass(frozen=True)
class FormatSpec:
    """Parsed subset of the d3-format mini language.

    Supported: ``s`` / ``.Ns`` (SI prefix, N significant digits), ``.Nf``,
    ``d``, ``.N%`` and a leading ``,`` for thousands grouping.
    """

    kind: str | None
    precision: int | None
    group_thousands: bool


def parse_format_spec(spec: str) -> FormatSpec:
    match = _FORMAT_SPEC.match(spec.strip())
    if match is None or not spec.strip():
        raise ChartConfigError(f"unsupported tick label format: {spec!r}")
    precision = match.group("precision")
    kind = match.group("type")
    if kind == "s" and precision is not None and int(precision) == 0:
        raise ChartConfigError("SI format precision must be >= 1")
    return FormatSpec(
        kind=kind,
        precision=int(precision) if precision is not None else None,
        group_thousands=match.group("comma") is not None,
    )


def format_value(value: float, spec: str | FormatSpec | None = None, *, step: float | None = None) -> str:
    if spec is None:
        return format_tick(value, step=step)
    parsed = spec if isinstance(spec, FormatSpec) else parse_format_spec(spec)
    value = float(value)
    if not math.isfinite(value):
        return str(value)

    if parsed.kind == "s":
        return _format_si(value, parsed.precision)
    if parsed.kind == "f":
        text = f"{value:.{6 if parsed.precision is None else parsed.precision}f}"
    elif parsed.kind == "d":
        text = str(int(round(value)))
    elif parsed.kind == "%":
        text = f"{value * 100.0:.{0 if parsed.precision is None else parsed.precision}f}%"
    elif parsed.precision is not None:
        text = f"{value:.{parsed.precision}g}"
    else:
        text = format_tick(value, step=step)
    if parsed.group_thousands:
        text = _group_thousands(text)
    return text


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e15 or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(repr(float(value)))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Integers keep their trailing zeros (30, 40); fractions are trimmed.
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: Sequence[float], spec: str | FormatSpec | None = None) -> list[str]:
    values = [float(v) for v in ticks]
    if not values:
        return []
    step = abs(values[1] - values[0]) if len(values) > 1 else None
    return [format_value(v, spec, step=step) for v in values]


def round_label(value: float, precision: int | None) -> str:
    if precision is None:
        return format_tick(value)
    return f"{float(value):.{precision}f}"


def _format_si(value: float, precision: int | None) -> str:
    if value == 0:
        return "0"
    if precision is not None:
        value = float(f"{value:.{precision - 1}e}")
    exponent = math.floor(math.log10(abs(value)))
    prefix_exp = max(-24, min(24, (exponent // 3) * 3))
    scaled = value / (10.0**prefix_exp)
    if precision is None:
        text = f"{scaled:.6g}"
    else:
        digits = max(0, precision - 1 - (exponent - prefix_exp))
        text = f"{scaled:.{digits}f}"
    return text + _SI_PREFIXES[prefix_exp]


def _group_thousands(text: str) -> str:
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    suffix = ""
    while text and not text[-1].isdigit():
        suffix = text[-1] + suffix
        text = text[:-1]
    whole, dot, frac = text.partition(".")
    if not whole.isdigit():
        return sign + text + suffix
    grouped = f"{int(whole):,}"
    return sign + grouped + (dot + frac if dot else "") + suffix


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(repr(float(step))).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
