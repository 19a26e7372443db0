from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from typing import Any

from svgcharts.adapters.rows import BarDatum
from svgcharts.colors import Color
from svgcharts.components import BarBlock
from svgcharts.scales import Scale


LOGGER = logging.getLogger(__name__)


def extract_keys(rows: Iterable[Any]) -> tuple[str, ...]:
    """Keys in first-seen order; ``rows`` only need a ``get_key()`` accessor."""
    seen: dict[str, None] = {}
    for row in rows:
        seen.setdefault(row.get_key(), None)
    return tuple(seen)


def build_color_map(keys: Sequence[str], palette: Sequence[Color]) -> dict[str, str]:
    if not palette:
        raise ValueError("palette must contain at least one color")
    color_map: dict[str, str] = {}
    for i, key in enumerate(keys):
        color_map.setdefault(key, palette[i % len(palette)].as_hex())
    return color_map


def group_by_category(rows: Sequence[BarDatum], keys: Sequence[str]) -> dict[str, list[tuple[str, float]]]:
    """Group ``(key, value)`` pairs per category.

    Categories keep the order in which they first appear in ``rows``. Inside a
    category the pairs follow the order of ``keys``, with rows sharing a key kept
    in row order. Rows whose key is not listed are dropped.
    """
    rank: dict[str, int] = {}
    for key in keys:
        rank.setdefault(key, len(rank))

    staged: dict[str, list[tuple[int, int, str, float]]] = {}
    dropped = 0
    for seq, row in enumerate(rows):
        key = row.get_key()
        if key not in rank:
            dropped += 1
            continue
        staged.setdefault(row.get_category(), []).append((rank[key], seq, key, float(row.get_value())))

    if dropped:
        LOGGER.warning("dropped %d row(s) whose key is not in the key list", dropped)
    return {
        category: [(key, value) for _, _, key, value in sorted(entries, key=lambda e: (e[0], e[1]))]
        for category, entries in staged.items()
    }


def stack_blocks(
    pairs: Sequence[tuple[str, float]],
    value_scale: Scale,
    color_map: dict[str, str],
) -> tuple[BarBlock, ...]:
    """Turn running totals into adjacent pixel blocks growing from ``value_scale(0)``."""
    reversed_range = value_scale.is_range_reversed()
    acc = 0.0
    start = value_scale.scale(acc)
    end = start
    blocks: list[BarBlock] = []
    for key, value in pairs:
        acc += value
        if reversed_range:
            end = start
            start = value_scale.scale(acc)
        else:
            start = end
            end = value_scale.scale(acc)
        blocks.append(BarBlock(start=start, end=end, value=value, color=color_map[key], key=key))
    return tuple(blocks)
