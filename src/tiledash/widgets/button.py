"""Button - a clickable button that runs a callback."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from tiledash.core.align import Horizontal, Vertical, align_text
from tiledash.core.canvas import Canvas
from tiledash.core.color import Color
from tiledash.core.draw import OverrunMode, draw_text
from tiledash.core.geometry import Size
from tiledash.core.runewidth import string_width
from tiledash.errors import UnsupportedEventError
from tiledash.terminal.api import Button as MouseButton
from tiledash.terminal.api import KeyBinding, KeyEvent, MouseEvent
from tiledash.widgets.base import BaseWidget, EventMeta, KeyScope, Meta, MouseScope, WidgetOptions

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Button(BaseWidget):
    """
    A button with a text label.

    The callback runs when the button is clicked (left press followed by a
    release on the button), when key is pressed while the button's
    container is focused, or when any of global_keys is pressed.
    Exceptions raised by the callback propagate to the run loop.
    """

    def __init__(
        self,
        text: str,
        callback: Optional[Callback] = None,
        key: Optional[KeyBinding] = None,
        global_keys: Sequence[KeyBinding] = (),
        height: int = 1,
        padding: int = 1,
        fill_color: Optional[Color] = Color.BLUE,
        focused_fill_color: Optional[Color] = Color.CYAN,
        pressed_fill_color: Optional[Color] = Color.YELLOW,
        text_color: Optional[Color] = Color.BRIGHT_WHITE,
    ) -> None:
        super().__init__()
        if not text:
            raise ValueError("the button text cannot be empty")
        if height < 1:
            raise ValueError(f"invalid height {height}, must be a positive number of cells")
        if padding < 0:
            raise ValueError(f"invalid padding {padding}, must be zero or positive")
        self.text = text
        self.key = key
        self.global_keys = tuple(global_keys)
        self.height = height
        self.padding = padding
        self.fill_color = fill_color
        self.focused_fill_color = focused_fill_color
        self.pressed_fill_color = pressed_fill_color
        self.text_color = text_color
        self._callback = callback
        self._pressed = False

    def set_callback(self, callback: Optional[Callback]) -> None:
        with self._lock:
            self._callback = callback

    @property
    def pressed(self) -> bool:
        with self._lock:
            return self._pressed

    def _trigger(self) -> None:
        with self._lock:
            callback = self._callback
        logger.debug("button %r activated", self.text)
        if callback is not None:
            # Outside of the lock, the callback may update the layout.
            callback()

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        with self._lock:
            if self._pressed:
                fill = self.pressed_fill_color
            elif meta.focused:
                fill = self.focused_fill_color
            else:
                fill = self.fill_color
            cvs.fill(cvs.area, ' ', bg=fill)
            start = align_text(cvs.area, self.text, Horizontal.CENTER, Vertical.MIDDLE)
            draw_text(cvs, self.text, start, overrun=OverrunMode.THREE_DOT, fg=self.text_color)

    def keyboard(self, event: KeyEvent, meta: EventMeta) -> None:
        if any(event.matches(k) for k in self.global_keys) or (
            meta.focused and self.key is not None and event.matches(self.key)
        ):
            self._trigger()
            return
        raise UnsupportedEventError(f"the Button widget doesn't handle {event}")

    def mouse(self, event: MouseEvent, meta: EventMeta) -> None:
        if event.button == MouseButton.LEFT:
            with self._lock:
                self._pressed = True
            return
        if event.button == MouseButton.RELEASE:
            with self._lock:
                was_pressed, self._pressed = self._pressed, False
            if was_pressed:
                self._trigger()
            return
        raise UnsupportedEventError(f"the Button widget doesn't handle {event.button}")

    def options(self) -> WidgetOptions:
        with self._lock:
            if self.global_keys:
                scope = KeyScope.GLOBAL
            elif self.key is not None:
                scope = KeyScope.FOCUSED
            else:
                scope = KeyScope.NONE
            size = Size(string_width(self.text) + 2 * self.padding, self.height)
            return WidgetOptions(
                minimum_size=size,
                maximum_size=size,
                want_keyboard=scope,
                want_mouse=MouseScope.WIDGET,
            )
