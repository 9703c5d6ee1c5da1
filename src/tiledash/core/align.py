"""Alignment of rectangles and text within an area."""

from __future__ import annotations

from enum import Enum

from tiledash.core.geometry import Point, Rect, Size
from tiledash.core.runewidth import string_width


class Horizontal(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Vertical(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


def _offset(free: int, start: bool, end: bool) -> int:
    if start:
        return 0
    if end:
        return free
    return free // 2


def align_rect(area: Rect, size: Size, h: Horizontal = Horizontal.LEFT, v: Vertical = Vertical.TOP) -> Rect:
    """Place a rectangle of the given size inside area."""
    if size.width > area.width or size.height > area.height:
        raise ValueError(f"cannot align size {size} within area {area.size}, it doesn't fit")
    x = area.min.x + _offset(area.width - size.width, h == Horizontal.LEFT, h == Horizontal.RIGHT)
    y = area.min.y + _offset(area.height - size.height, v == Vertical.TOP, v == Vertical.BOTTOM)
    return Rect.from_size(size, Point(x, y))


def align_text(area: Rect, text: str, h: Horizontal = Horizontal.LEFT, v: Vertical = Vertical.TOP) -> Point:
    """
    Return the point where a single line of text starts when aligned in area.

    Text wider than the area starts at the left edge.
    """
    width = min(string_width(text), area.width)
    return align_rect(area, Size(width, min(1, area.height)), h, v).min
