"""Core data structures: geometry, colors, cells and the canvas."""

from tiledash.core.align import Horizontal, Vertical
from tiledash.core.canvas import Canvas, diff
from tiledash.core.cell import Cell
from tiledash.core.color import Color, ColorMode
from tiledash.core.draw import LineStyle, OverrunMode
from tiledash.core.geometry import Orientation, Point, Rect, Size

__all__ = [
    "Canvas",
    "Cell",
    "Color",
    "ColorMode",
    "Horizontal",
    "LineStyle",
    "Orientation",
    "OverrunMode",
    "Point",
    "Rect",
    "Size",
    "Vertical",
    "diff",
]
