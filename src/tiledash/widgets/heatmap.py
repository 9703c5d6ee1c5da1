"""HeatMap - a grid of values shaded by magnitude."""

from __future__ import annotations

from typing import Optional, Sequence

from tiledash.core.canvas import Canvas
from tiledash.core.color import Color
from tiledash.core.draw import OverrunMode, draw_text
from tiledash.core.geometry import Point, Rect, Size
from tiledash.core.runewidth import string_width
from tiledash.widgets.base import BaseWidget, Meta, WidgetOptions

# The 24 step grayscale ramp of the 256 color palette, darkest first.
GRAYSCALE = tuple(Color.from_256(i) for i in range(232, 256))


class HeatMap(BaseWidget):
    """
    Displays a matrix of values as colored cells.

    Rows are drawn top to bottom, each value as cell_width cells whose
    background is picked from the palette by where the value falls between
    the smallest and the largest value. Optional labels go left of the rows
    and under the columns.
    """

    def __init__(self, cell_width: int = 3, palette: Sequence[Color] = GRAYSCALE, label_color: Optional[Color] = None) -> None:
        super().__init__()
        if cell_width < 1:
            raise ValueError(f"invalid cell width {cell_width}, must be a positive number of cells")
        if not palette:
            raise ValueError("the palette needs at least one color")
        self.cell_width = cell_width
        self.palette = tuple(palette)
        self.label_color = label_color
        self._values: list[list[float]] = []
        self._x_labels: list[str] = []
        self._y_labels: list[str] = []
        self._min = 0.0
        self._max = 0.0
        self._last_width = 0

    def values(
        self,
        values: Sequence[Sequence[float]],
        x_labels: Sequence[str] = (),
        y_labels: Sequence[str] = (),
    ) -> None:
        """
        Replace the displayed matrix.

        All rows must be of the same length, labels are optional but when
        given there must be exactly one per column or row.
        """
        rows = [list(row) for row in values]
        if rows:
            columns = len(rows[0])
            if any(len(row) != columns for row in rows):
                raise ValueError("all rows of the heat map must have the same number of values")
            if x_labels and len(x_labels) != columns:
                raise ValueError(f"got {len(x_labels)} X labels for {columns} columns")
        if y_labels and len(y_labels) != len(rows):
            raise ValueError(f"got {len(y_labels)} Y labels for {len(rows)} rows")
        flat = [v for row in rows for v in row]
        with self._lock:
            self._values = rows
            self._x_labels = list(x_labels)
            self._y_labels = list(y_labels)
            self._min = min(flat, default=0.0)
            self._max = max(flat, default=0.0)

    def clear_x_labels(self) -> None:
        with self._lock:
            self._x_labels = []

    def clear_y_labels(self) -> None:
        with self._lock:
            self._y_labels = []

    def value_capacity(self) -> int:
        """Number of columns that fit into the width of the last drawn canvas."""
        with self._lock:
            usable = self._last_width - self._y_label_width()
            return max(0, usable // self.cell_width)

    def _y_label_width(self) -> int:
        if not self._y_labels:
            return 0
        # One cell of space between the labels and the cells.
        return max(string_width(label) for label in self._y_labels) + 1

    def color_of(self, value: float) -> Color:
        """The palette color representing value."""
        with self._lock:
            if self._max == self._min:
                return self.palette[-1]
            position = (value - self._min) / (self._max - self._min)
            index = int(position * (len(self.palette) - 1) + 0.5)
            return self.palette[min(max(index, 0), len(self.palette) - 1)]

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        with self._lock:
            self._last_width = cvs.width
            label_width = self._y_label_width()
            rows_height = cvs.height - (1 if self._x_labels else 0)

            for y, row in enumerate(self._values[:max(rows_height, 0)]):
                if self._y_labels:
                    draw_text(cvs, self._y_labels[y], Point(0, y), max_x=label_width - 1,
                              overrun=OverrunMode.TRIM, fg=self.label_color)
                for column, value in enumerate(row):
                    x = label_width + column * self.cell_width
                    if x + self.cell_width > cvs.width:
                        break
                    cvs.fill(Rect.of(x, y, x + self.cell_width, y + 1), ' ', bg=self.color_of(value))

            if self._x_labels and cvs.height > 0:
                y = cvs.height - 1
                for column, label in enumerate(self._x_labels):
                    x = label_width + column * self.cell_width
                    if x + self.cell_width > cvs.width:
                        break
                    draw_text(cvs, label, Point(x, y), max_x=x + self.cell_width,
                              overrun=OverrunMode.TRIM, fg=self.label_color)

    def options(self) -> WidgetOptions:
        with self._lock:
            return WidgetOptions(minimum_size=Size(self._y_label_width() + self.cell_width, 1))
