"""Canvas - 2D buffer of cells that widgets draw into."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from tiledash.core.cell import Cell
from tiledash.core.geometry import Point, Rect, Size
from tiledash.core.runewidth import rune_width
from tiledash.errors import CanvasError

_BLANK = Cell()


@dataclass
class Canvas:
    """
    A fixed size 2D grid of Cells addressed by local coordinates.

    The origin is the position of the canvas' top left cell on the screen.
    Sub-canvases are independent copies, writes reach the parent only when
    copied back with copy_to(). A canvas never clears itself, callers fill
    areas that could otherwise keep stale content.
    """
    size: Size
    origin: Point = Point()
    _buffer: list[list[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the buffer."""
        if self.size.width < 0 or self.size.height < 0:
            raise ValueError(f"canvas size cannot be negative, got {self.size}")
        if not self._buffer:
            self._buffer = [[_BLANK] * self.size.width for _ in range(self.size.height)]

    @property
    def area(self) -> Rect:
        """The area of the canvas in its own coordinates, always starting at (0, 0)."""
        return Rect.from_size(self.size)

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    def _check(self, point: Point) -> None:
        if not self.area.contains(point):
            raise CanvasError(f"point {point} falls outside of the canvas area {self.size}")

    def cell(self, point: Point) -> Cell:
        """Get the cell at point."""
        self._check(point)
        return self._buffer[point.y][point.x]

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        """Get cell using indexing: canvas[x, y]."""
        x, y = pos
        return self.cell(Point(x, y))

    def __setitem__(self, pos: tuple[int, int], cell: Cell) -> None:
        """Set cell using indexing: canvas[x, y] = cell."""
        x, y = pos
        point = Point(x, y)
        self._check(point)
        self._put(point, cell)

    def _put(self, point: Point, cell: Cell) -> None:
        row = self._buffer[point.y]
        x = point.x
        # Overwriting either half of a full-width rune orphans the other half.
        if not cell.is_continuation and row[x].is_continuation and x > 0:
            row[x - 1] = _BLANK
        if x + 1 < self.width and row[x + 1].is_continuation:
            row[x + 1] = _BLANK
        row[x] = cell

    def set_cell(self, point: Point, char: str, **style) -> int:
        """
        Put a rune at point, applying the style on top of the cell's current style.

        Returns the number of cells the rune occupies, 2 for full-width runes.

        Raises:
            CanvasError: the point or, for a full-width rune, the cell right
                of it falls outside of the canvas.
        """
        self._check(point)
        width = rune_width(char)
        if width == 2:
            self._check(Point(point.x + 1, point.y))
        cell = Cell(char, **self._buffer[point.y][point.x].style()).with_style(**style)
        self._put(point, cell)
        if width == 2:
            self._put(Point(point.x + 1, point.y), Cell('', **cell.style()))
        return width

    def set_text(self, point: Point, text: str, **style) -> int:
        """Put text starting at point. Returns the number of cells used."""
        cur = point
        for char in text:
            cur = Point(cur.x + self.set_cell(cur, char, **style), cur.y)
        return cur.x - point.x

    def fill(self, rect: Rect, char: str = ' ', **style) -> None:
        """Fill a rectangle with copies of a cell."""
        if not rect.inside(self.area):
            raise CanvasError(f"rectangle {rect} falls outside of the canvas area {self.size}")
        cell = Cell(char).with_style(**style)
        for y in range(rect.min.y, rect.max.y):
            for x in range(rect.min.x, rect.max.x):
                self._put(Point(x, y), cell)

    def clear(self, **style) -> None:
        """Reset every cell to a blank with the given style."""
        self.fill(self.area, ' ', **style)

    def sub_canvas(self, rect: Rect) -> "Canvas":
        """
        Return an independent canvas holding a copy of the cells in rect.

        The returned canvas' origin is rect.min translated by this canvas'
        origin, so copy_to() without an offset writes it back in place.
        """
        if not rect.inside(self.area):
            raise CanvasError(f"sub-canvas {rect} falls outside of the canvas area {self.size}")
        buffer = [list(self._buffer[y][rect.min.x:rect.max.x]) for y in range(rect.min.y, rect.max.y)]
        return Canvas(size=rect.size, origin=self.origin + rect.min, _buffer=buffer)

    def copy_to(self, dst: "Canvas", offset: Point | None = None) -> None:
        """
        Overwrite cells of dst with the content of this canvas.

        The offset is the position in dst where this canvas' top left cell
        lands. It defaults to this canvas' origin relative to dst's origin.
        """
        if offset is None:
            offset = self.origin - dst.origin
        target = self.area.translate(offset)
        if not target.inside(dst.area):
            raise CanvasError(f"cannot copy canvas of size {self.size} to {offset}, destination size is {dst.size}")
        for y, row in enumerate(self._buffer):
            dst._buffer[offset.y + y][offset.x:offset.x + self.width] = row

    def rows(self) -> Iterator[list[Cell]]:
        """Iterate over rows."""
        yield from self._buffer

    def cells(self) -> Iterator[tuple[Point, Cell]]:
        """Iterate over all cells as (point, cell) tuples."""
        for y, row in enumerate(self._buffer):
            for x, cell in enumerate(row):
                yield Point(x, y), cell

    def text(self) -> str:
        """Plain text content, one line per row. Handy in tests and logs."""
        return "\n".join("".join(cell.char for cell in row) for row in self._buffer)


def diff(previous: Canvas | None, current: Canvas) -> list[tuple[Point, Cell]]:
    """
    Return the cells of current that differ from previous.

    When there is no previous canvas or its size differs, every cell of
    current is returned.
    """
    if previous is None or previous.size != current.size:
        return list(current.cells())
    changes: list[tuple[Point, Cell]] = []
    for y, (old_row, new_row) in enumerate(zip(previous.rows(), current.rows())):
        if old_row == new_row:
            continue
        for x, (old, new) in enumerate(zip(old_row, new_row)):
            if old != new:
                changes.append((Point(x, y), new))
    return changes
