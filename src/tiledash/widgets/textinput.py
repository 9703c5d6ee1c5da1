"""TextInput - a single line text field with an optional label."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from tiledash.core.canvas import Canvas
from tiledash.core.color import Color
from tiledash.core.geometry import Point, Size
from tiledash.core.runewidth import rune_width, string_width
from tiledash.terminal.api import Button, Key, KeyEvent, MouseEvent
from tiledash.widgets.base import BaseWidget, EventMeta, KeyScope, Meta, MouseScope, WidgetOptions

logger = logging.getLogger(__name__)

# Narrowest field that still shows a character and the cursor.
MIN_FIELD_WIDTH = 2


class TextInput(BaseWidget):
    """
    Accepts a line of text typed by the user.

    Supports the usual editing keys: arrows, Home, End, Backspace and
    Delete. Enter submits the text to on_submit. A left click moves the
    cursor. With exclusive_keyboard_on_focus set, the field gets every key
    while focused, including the ones that normally move focus.

    Example:
        name = TextInput(label="Name: ", width=30, on_submit=print)
    """

    def __init__(
        self,
        label: str = "",
        label_color: Optional[Color] = None,
        default_text: str = "",
        placeholder: str = "",
        placeholder_color: Optional[Color] = Color.BRIGHT_BLACK,
        width: int = 0,
        max_length: int = 0,
        fill_color: Optional[Color] = Color.from_256(236),
        text_color: Optional[Color] = None,
        accept: Optional[Callable[[str], bool]] = None,
        on_submit: Optional[Callable[[str], None]] = None,
        clear_on_submit: bool = False,
        exclusive_keyboard_on_focus: bool = False,
    ) -> None:
        super().__init__()
        if width < 0:
            raise ValueError(f"invalid width {width}, must be zero or positive")
        if width and width < string_width(label) + MIN_FIELD_WIDTH:
            raise ValueError(f"width {width} leaves no room for the text field after label {label!r}")
        if max_length < 0:
            raise ValueError(f"invalid max_length {max_length}, must be zero or positive")
        self.label = label
        self.label_color = label_color
        self.placeholder = placeholder
        self.placeholder_color = placeholder_color
        self.width = width
        self.max_length = max_length
        self.fill_color = fill_color
        self.text_color = text_color
        self.accept = accept
        self.on_submit = on_submit
        self.clear_on_submit = clear_on_submit
        self.exclusive_keyboard_on_focus = exclusive_keyboard_on_focus

        self._text: list[str] = []
        self._cursor = 0
        # Index of the first visible character.
        self._offset = 0
        # Field geometry from the last draw, used to translate clicks.
        self._field_x = 0
        for char in default_text:
            self._insert(char)

    # Public API

    def read(self) -> str:
        """Return the current text."""
        with self._lock:
            return "".join(self._text)

    def read_and_clear(self) -> str:
        """Return the current text and empty the field."""
        with self._lock:
            text = "".join(self._text)
            self._reset()
            return text

    def set_text(self, text: str) -> None:
        """Replace the content, placing the cursor at its end."""
        with self._lock:
            self._reset()
            for char in text:
                self._insert(char)

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    # Editing

    def _reset(self) -> None:
        self._text = []
        self._cursor = 0
        self._offset = 0

    def _insert(self, char: str) -> None:
        if not char.isprintable():
            return
        if self.max_length and len(self._text) >= self.max_length:
            return
        if self.accept is not None and not self.accept(char):
            return
        self._text.insert(self._cursor, char)
        self._cursor += 1

    def _delete_before(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1
            del self._text[self._cursor]

    def _delete_at(self) -> None:
        if self._cursor < len(self._text):
            del self._text[self._cursor]

    # Widget capability

    def keyboard(self, event: KeyEvent, meta: EventMeta) -> None:
        submitted: Optional[str] = None
        with self._lock:
            if event.is_char:
                self._insert(event.char)
            elif event.key == Key.BACKSPACE:
                self._delete_before()
            elif event.key == Key.DELETE:
                self._delete_at()
            elif event.key == Key.LEFT:
                self._cursor = max(0, self._cursor - 1)
            elif event.key == Key.RIGHT:
                self._cursor = min(len(self._text), self._cursor + 1)
            elif event.key == Key.HOME:
                self._cursor = 0
            elif event.key == Key.END:
                self._cursor = len(self._text)
            elif event.key == Key.ENTER:
                submitted = "".join(self._text)
                if self.clear_on_submit:
                    self._reset()
        if submitted is not None and self.on_submit is not None:
            logger.debug("text input submitted %d characters", len(submitted))
            self.on_submit(submitted)

    def mouse(self, event: MouseEvent, meta: EventMeta) -> None:
        if event.button != Button.LEFT:
            return
        with self._lock:
            x = event.position.x - self._field_x
            if x < 0:
                return
            index = self._offset
            used = 0
            while index < len(self._text) and used + rune_width(self._text[index]) <= x:
                used += rune_width(self._text[index])
                index += 1
            self._cursor = index

    def _scroll(self, field_width: int) -> None:
        """Adjust the visible window so that the cursor cell is inside the field."""
        if self._cursor < self._offset:
            self._offset = self._cursor
        while self._offset < self._cursor and string_width("".join(self._text[self._offset:self._cursor])) + 1 > field_width:
            self._offset += 1

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        with self._lock:
            label_width = min(string_width(self.label), cvs.width)
            if self.label:
                x = 0
                for char in self.label:
                    if x + rune_width(char) > label_width:
                        break
                    x += cvs.set_cell(Point(x, 0), char, fg=self.label_color)

            self._field_x = label_width
            field_width = cvs.width - label_width
            if field_width <= 0:
                return
            y = 0
            for x in range(label_width, cvs.width):
                cvs.set_cell(Point(x, y), ' ', bg=self.fill_color)

            if not self._text and self.placeholder and not meta.focused:
                x = label_width
                for char in self.placeholder:
                    if x + rune_width(char) > cvs.width:
                        break
                    x += cvs.set_cell(Point(x, y), char, fg=self.placeholder_color)
                return

            self._scroll(field_width)
            x = label_width
            cursor_x: Optional[int] = None
            for index in range(self._offset, len(self._text)):
                char = self._text[index]
                if x + rune_width(char) > cvs.width:
                    break
                if index == self._cursor:
                    cursor_x = x
                x += cvs.set_cell(Point(x, y), char, fg=self.text_color)
            if self._cursor == len(self._text) and x < cvs.width:
                cursor_x = x
            if meta.focused and cursor_x is not None:
                cvs.set_cell(Point(cursor_x, y), cvs.cell(Point(cursor_x, y)).char or ' ', reverse=True)

    def options(self) -> WidgetOptions:
        with self._lock:
            label_width = string_width(self.label)
            return WidgetOptions(
                minimum_size=Size(label_width + MIN_FIELD_WIDTH, 1),
                maximum_size=Size(self.width, 1),
                want_keyboard=KeyScope.FOCUSED,
                want_mouse=MouseScope.WIDGET,
                exclusive_keyboard_on_focus=self.exclusive_keyboard_on_focus,
            )
