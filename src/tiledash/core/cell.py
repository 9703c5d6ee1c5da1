"""Cell - atomic unit of the terminal screen."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from tiledash.core.color import Color

# Style attributes accepted wherever a cell is written.
STYLE_FIELDS = ("fg", "bg", "bold", "underline", "italic", "blink", "reverse")


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character cell with styling attributes.

    Cells are values: two cells are equal when they would look the same on
    screen, which is what the renderer uses to decide what to redraw. A None
    color means the terminal's default color.

    The second cell covered by a full-width rune holds an empty char.
    """
    char: str = ' '
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    underline: bool = False
    italic: bool = False
    blink: bool = False
    reverse: bool = False

    def with_style(self, **style) -> "Cell":
        """Return a copy with the provided style attributes replaced."""
        unknown = set(style) - set(STYLE_FIELDS)
        if unknown:
            raise TypeError(f"unknown cell style attribute(s): {', '.join(sorted(unknown))}")
        return replace(self, **style)

    def style(self) -> dict:
        """The style attributes as keyword arguments for with_style() and Canvas.set_cell()."""
        return {name: getattr(self, name) for name in STYLE_FIELDS}

    def is_default(self) -> bool:
        """Check if this cell has default values (empty space, default colors)."""
        return self == _DEFAULT

    @property
    def is_continuation(self) -> bool:
        """True for the second half of a full-width rune."""
        return self.char == ''


_DEFAULT = Cell()
