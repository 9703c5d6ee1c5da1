"""Text - displays styled, optionally wrapped and rolling text."""

from __future__ import annotations

import dataclasses

from tiledash.core.canvas import Canvas
from tiledash.core.cell import Cell
from tiledash.core.geometry import Point, Size
from tiledash.core.runewidth import rune_width
from tiledash.widgets.base import BaseWidget, Meta, WidgetOptions


class Text(BaseWidget):
    """
    A block of text written in chunks, each chunk with its own style.

    Lines longer than the canvas are cut unless wrap is set, in which case
    they continue on the next line. With rolling set and more lines than
    fit, the last lines are shown, which makes the widget usable as a log.

    Example:
        text = Text(rolling=True)
        text.write("started\\n", fg=Color.GREEN)
    """

    def __init__(self, wrap: bool = False, rolling: bool = False, max_lines: int = 0) -> None:
        super().__init__()
        if max_lines < 0:
            raise ValueError(f"invalid max_lines {max_lines}, must be zero or positive")
        self.wrap = wrap
        self.rolling = rolling
        self.max_lines = max_lines
        self._lines: list[list[Cell]] = [[]]

    def write(self, text: str, replace: bool = False, **style) -> None:
        """
        Append text, newlines start a new line.

        Style keywords are those of Cell (fg, bg, bold, ...).
        """
        for char in text:
            if not char.isprintable() and char not in "\n\t":
                raise ValueError(f"invalid text {text!r}, contains the non-printable character {char!r}")
        template = Cell().with_style(**style)
        with self._lock:
            if replace:
                self._lines = [[]]
            for char in text.replace("\t", "    "):
                if char == "\n":
                    self._lines.append([])
                else:
                    self._lines[-1].append(dataclasses.replace(template, char=char))
            if self.max_lines and len(self._lines) > self.max_lines:
                del self._lines[:len(self._lines) - self.max_lines]

    def reset(self) -> None:
        """Remove all text."""
        with self._lock:
            self._lines = [[]]

    def content(self) -> str:
        """The text without styling."""
        with self._lock:
            return "\n".join("".join(r.char for r in line) for line in self._lines)

    def _visual_lines(self, width: int) -> list[list[Cell]]:
        if not self.wrap:
            return self._lines
        out: list[list[Cell]] = []
        for line in self._lines:
            current: list[Cell] = []
            used = 0
            for r in line:
                w = rune_width(r.char)
                if used + w > width and current:
                    out.append(current)
                    current, used = [], 0
                current.append(r)
                used += w
            out.append(current)
        return out

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        with self._lock:
            lines = self._visual_lines(cvs.width)
            if self.rolling and len(lines) > cvs.height:
                lines = lines[len(lines) - cvs.height:]
            for y, line in enumerate(lines[:cvs.height]):
                x = 0
                for r in line:
                    if x + rune_width(r.char) > cvs.width:
                        break
                    x += cvs.set_cell(Point(x, y), r.char, **r.style())

    def options(self) -> WidgetOptions:
        # At least one full-width rune.
        return WidgetOptions(minimum_size=Size(2, 1))

