"""Mirror - a widget that displays what it received, for tests and demos."""

from __future__ import annotations

from typing import Optional

from tiledash.core.canvas import Canvas
from tiledash.core.draw import OverrunMode, border, draw_text
from tiledash.core.geometry import Point, Size
from tiledash.terminal.api import Button, Key, KeyEvent, MouseEvent
from tiledash.widgets.base import BaseWidget, EventMeta, KeyScope, Meta, MouseScope, WidgetOptions

# Smallest canvas with room for the border and one line of content.
MINIMUM_SIZE = Size(3, 3)

# Rows inside the border used for each piece of information.
_SIZE_LINE = 0
_KEYBOARD_LINE = 1
_MOUSE_LINE = 2
_FOCUS_LINE = 3

_FOCUSED_PREFIX = "F:"


class Mirror(BaseWidget):
    """
    Draws a border and mirrors what it knows inside of it.

    Inside the border, line by line: the size of its canvas followed by the
    custom text, the last keyboard event, the last mouse event and "focus"
    while its container is focused. Events received while focused are
    prefixed with "F:". Lines that don't fit are skipped, text that doesn't
    fit onto its line is an error.

    Escape and the right mouse button reset the last event of their kind and
    are rejected, so that tests can exercise error paths.
    """

    def __init__(self, options: Optional[WidgetOptions] = None) -> None:
        super().__init__()
        if options is None:
            options = WidgetOptions(
                minimum_size=MINIMUM_SIZE,
                want_keyboard=KeyScope.FOCUSED,
                want_mouse=MouseScope.WIDGET,
            )
        self._options = options
        self._text = ""
        self._last_key = ""
        self._last_mouse = ""

    def text(self, text: str) -> None:
        """Set custom text displayed after the canvas size."""
        with self._lock:
            self._text = text

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        with self._lock:
            border(cvs, cvs.area)
            lines = {_SIZE_LINE: f"{cvs.size}{self._text}"}
            if self._last_key:
                lines[_KEYBOARD_LINE] = self._last_key
            if self._last_mouse:
                lines[_MOUSE_LINE] = self._last_mouse
            if meta.focused:
                lines[_FOCUS_LINE] = "focus"

            for line, text in lines.items():
                y = 1 + line
                if y >= cvs.height - 1:
                    continue
                draw_text(cvs, text, Point(1, y), max_x=cvs.width - 1, overrun=OverrunMode.STRICT)

    def keyboard(self, event: KeyEvent, meta: EventMeta) -> None:
        with self._lock:
            if event.key == Key.ESCAPE:
                self._last_key = ""
                raise ValueError("the Mirror widget rejects the escape key")
            self._last_key = _prefixed(str(event), meta.focused)

    def mouse(self, event: MouseEvent, meta: EventMeta) -> None:
        with self._lock:
            if event.button == Button.RIGHT:
                self._last_mouse = ""
                raise ValueError("the Mirror widget rejects the right mouse button")
            self._last_mouse = _prefixed(str(event), meta.focused)

    def options(self) -> WidgetOptions:
        with self._lock:
            return self._options


def _prefixed(text: str, focused: bool) -> str:
    return f"{_FOCUSED_PREFIX}{text}" if focused else text
