"""
Lumina Kernel — Resize Policy

Pure function: (forest, block_id, width%) → forest

Only the resized block's width is authoritative. Inside a row container the
immediately following sibling absorbs the change when its width is a
percentage, so the pair keeps its combined width. Earlier siblings and
siblings past the next one are never touched. Column containers and the top
level do no compensation.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import replace

from engine.kernel.types import Block

MIN_WIDTH = 5.0
MAX_WIDTH = 100.0
DEFAULT_WIDTH = 100.0

# Leading float, like JavaScript parseFloat: "42.5%" → 42.5, "300px" → 300
_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_width(value: str | None, default: float | None = DEFAULT_WIDTH) -> float | None:
    """Parse the leading number of a width string; unit suffixes are ignored."""
    if value is None:
        return default
    m = _LEADING_FLOAT_RE.match(value)
    if m is None:
        return default
    return float(m.group(1))


def clamp_width(width: float) -> float:
    return max(MIN_WIDTH, min(MAX_WIDTH, width))


def format_percent(width: float) -> str:
    """One decimal place, e.g. 42.25 → '42.3%'."""
    return f"{width:.1f}%"


def resize(forest: Sequence[Block], block_id: str, width: float) -> Sequence[Block]:
    """Set a block's width to `width` percent, compensating the next row sibling."""
    new_width = float(f"{clamp_width(width):.1f}")
    result, found = _resize_level(tuple(forest), block_id, new_width, parent_direction=None)
    return result if found else forest


def _resize_level(
    siblings: tuple[Block, ...],
    block_id: str,
    new_width: float,
    parent_direction: str | None,
) -> tuple[tuple[Block, ...], bool]:
    for index, block in enumerate(siblings):
        if block.id == block_id:
            return _apply_at(siblings, index, new_width, parent_direction), True

    for index, block in enumerate(siblings):
        if block.children:
            direction = block.style.get("flex-direction") or "column"
            children, found = _resize_level(block.children, block_id, new_width, direction)
            if found:
                rebuilt = replace(block, children=children)
                return siblings[:index] + (rebuilt,) + siblings[index + 1 :], True

    return siblings, False


def _apply_at(
    siblings: tuple[Block, ...],
    index: int,
    new_width: float,
    parent_direction: str | None,
) -> tuple[Block, ...]:
    target = siblings[index]
    old_width = parse_width(target.style.get("width"))
    updated = list(siblings)
    updated[index] = _with_width(target, format_percent(new_width))

    if parent_direction == "row" and index + 1 < len(siblings):
        neighbour = siblings[index + 1]
        neighbour_raw = neighbour.style.get("width")
        neighbour_width = parse_width(neighbour_raw, default=None)
        if neighbour_raw and "%" in neighbour_raw and neighbour_width is not None:
            adjusted = max(MIN_WIDTH, neighbour_width - (new_width - old_width))
            updated[index + 1] = _with_width(neighbour, format_percent(adjusted))

    return tuple(updated)


def _with_width(block: Block, width: str) -> Block:
    return replace(block, style={**block.style, "width": width})
