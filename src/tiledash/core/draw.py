"""Drawing primitives on top of Canvas - borders, text, rectangles and lines."""

from __future__ import annotations

from enum import Enum

from tiledash.core.align import Horizontal
from tiledash.core.canvas import Canvas
from tiledash.core.geometry import Point, Rect
from tiledash.core.runewidth import rune_width, string_width
from tiledash.errors import CanvasError, SizeError

# Drawn in place of a widget whose area is smaller than its minimum size.
RESIZE_NEEDED = '⇄'


class LineStyle(Enum):
    """Style of lines used for borders and separators."""
    NONE = "none"
    LIGHT = "light"
    DOUBLE = "double"
    ROUND = "round"


# (horizontal, vertical, top-left, top-right, bottom-left, bottom-right)
_LINE_PARTS: dict[LineStyle, tuple[str, str, str, str, str, str]] = {
    LineStyle.LIGHT: ('─', '│', '┌', '┐', '└', '┘'),
    LineStyle.DOUBLE: ('═', '║', '╔', '╗', '╚', '╝'),
    LineStyle.ROUND: ('─', '│', '╭', '╮', '╰', '╯'),
}


class OverrunMode(Enum):
    """What to do with text that doesn't fit."""
    STRICT = "strict"        # Fail
    TRIM = "trim"            # Cut at the last cell
    THREE_DOT = "three_dot"  # Cut and end with '…'


def trim_text(text: str, max_cells: int, mode: OverrunMode = OverrunMode.STRICT) -> str:
    """
    Fit text into max_cells cells according to mode.

    Raises:
        SizeError: the text doesn't fit and mode is STRICT.
    """
    if max_cells < 0:
        raise ValueError(f"max_cells cannot be negative, got {max_cells}")
    if string_width(text) <= max_cells:
        return text
    if mode == OverrunMode.STRICT:
        raise SizeError(f"text {text!r} needs {string_width(text)} cells, only {max_cells} available")

    budget = max_cells - 1 if mode == OverrunMode.THREE_DOT else max_cells
    out: list[str] = []
    used = 0
    for r in text:
        w = rune_width(r)
        if used + w > budget:
            break
        out.append(r)
        used += w
    if mode == OverrunMode.THREE_DOT and max_cells > 0:
        out.append('…')
    return "".join(out)


def draw_text(
    cvs: Canvas,
    text: str,
    start: Point,
    max_x: int | None = None,
    overrun: OverrunMode = OverrunMode.STRICT,
    **style,
) -> int:
    """
    Draw a single line of text starting at start.

    max_x is the exclusive X coordinate where text must end, defaults to the
    canvas width. Returns the number of cells drawn.
    """
    if not cvs.area.contains(start):
        raise CanvasError(f"text start {start} falls outside of the canvas area {cvs.size}")
    limit = cvs.width if max_x is None else min(max_x, cvs.width)
    fitted = trim_text(text, max(0, limit - start.x), overrun)
    return cvs.set_text(start, fitted, **style)


def rectangle(cvs: Canvas, rect: Rect, char: str = ' ', **style) -> None:
    """Fill rect with char, applying style on top of existing cells."""
    if not rect.inside(cvs.area):
        raise CanvasError(f"rectangle {rect} falls outside of the canvas area {cvs.size}")
    for point in rect.points():
        cvs.set_cell(point, char, **style)


def vertical_line(cvs: Canvas, x: int, y0: int, y1: int, line_style: LineStyle = LineStyle.LIGHT, **style) -> None:
    """Draw a vertical line at column x from row y0 to row y1, both inclusive."""
    if line_style == LineStyle.NONE:
        return
    char = _LINE_PARTS[line_style][1]
    for y in range(y0, y1 + 1):
        cvs.set_cell(Point(x, y), char, **style)


def horizontal_line(cvs: Canvas, y: int, x0: int, x1: int, line_style: LineStyle = LineStyle.LIGHT, **style) -> None:
    """Draw a horizontal line at row y from column x0 to column x1, both inclusive."""
    if line_style == LineStyle.NONE:
        return
    char = _LINE_PARTS[line_style][0]
    for x in range(x0, x1 + 1):
        cvs.set_cell(Point(x, y), char, **style)


def border(
    cvs: Canvas,
    rect: Rect,
    line_style: LineStyle = LineStyle.LIGHT,
    title: str = "",
    title_align: Horizontal = Horizontal.LEFT,
    title_overrun: OverrunMode = OverrunMode.THREE_DOT,
    title_style: dict | None = None,
    **style,
) -> None:
    """
    Draw a 1-cell border along the edges of rect with an optional title.

    Raises:
        SizeError: rect is smaller than 2x2.
    """
    if line_style == LineStyle.NONE:
        return
    if rect.width < 2 or rect.height < 2:
        raise SizeError(f"border needs at least 2x2 cells, got {rect.size}")
    if not rect.inside(cvs.area):
        raise CanvasError(f"border {rect} falls outside of the canvas area {cvs.size}")

    hline, vline, tl, tr, bl, br = _LINE_PARTS[line_style]
    x0, y0 = rect.min.x, rect.min.y
    x1, y1 = rect.max.x - 1, rect.max.y - 1
    for x in range(x0 + 1, x1):
        cvs.set_cell(Point(x, y0), hline, **style)
        cvs.set_cell(Point(x, y1), hline, **style)
    for y in range(y0 + 1, y1):
        cvs.set_cell(Point(x0, y), vline, **style)
        cvs.set_cell(Point(x1, y), vline, **style)
    cvs.set_cell(Point(x0, y0), tl, **style)
    cvs.set_cell(Point(x1, y0), tr, **style)
    cvs.set_cell(Point(x0, y1), bl, **style)
    cvs.set_cell(Point(x1, y1), br, **style)

    available = rect.width - 2
    if not title or available <= 0:
        return
    trimmed = trim_text(title, available, title_overrun)
    free = available - string_width(trimmed)
    if title_align == Horizontal.RIGHT:
        start = x0 + 1 + free
    elif title_align == Horizontal.CENTER:
        start = x0 + 1 + free // 2
    else:
        start = x0 + 1
    cvs.set_text(Point(start, y0), trimmed, **(title_style if title_style is not None else style))


def resize_needed(cvs: Canvas) -> None:
    """Indicate that the canvas is too small for its content."""
    if cvs.area.empty:
        return
    cvs.set_cell(Point(0, 0), RESIZE_NEEDED)
