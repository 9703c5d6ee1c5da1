"""Decoding of the raw terminal input stream into key and mouse events."""

from __future__ import annotations

import codecs
import os
import re
import select
import sys
import time
from typing import Optional, Union

from tiledash.core.geometry import Point
from tiledash.terminal.api import Button, Key, KeyEvent, MouseEvent

InputEvent = Union[KeyEvent, MouseEvent]

# Bodies of CSI (ESC [) and SS3 (ESC O) sequences that name a key.
KEY_SEQUENCES: dict[str, Key] = {
    "[A": Key.UP, "[B": Key.DOWN, "[C": Key.RIGHT, "[D": Key.LEFT,
    "OA": Key.UP, "OB": Key.DOWN, "OC": Key.RIGHT, "OD": Key.LEFT,
    "[H": Key.HOME, "OH": Key.HOME, "[1~": Key.HOME, "[7~": Key.HOME,
    "[F": Key.END, "OF": Key.END, "[4~": Key.END, "[8~": Key.END,
    "[2~": Key.INSERT, "[3~": Key.DELETE,
    "[5~": Key.PAGE_UP, "[6~": Key.PAGE_DOWN,
    "[Z": Key.BACKTAB,
    "OP": Key.F1, "OQ": Key.F2, "OR": Key.F3, "OS": Key.F4,
    "[15~": Key.F5, "[17~": Key.F6, "[18~": Key.F7, "[19~": Key.F8,
    "[20~": Key.F9, "[21~": Key.F10, "[23~": Key.F11, "[24~": Key.F12,
}

CONTROL_KEYS: dict[str, Key] = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
    "\x03": Key.CTRL_C,
}

# A complete CSI or SS3 sequence, group 1 is its body without the ESC.
_SEQUENCE = re.compile(r"\x1b(\[[0-9;<?]*[A-Za-z~]|O[A-Za-z])")

# SGR (1006) mouse report body, M for presses and m for releases.
_SGR_MOUSE = re.compile(r"\[<(\d+);(\d+);(\d+)([Mm])")

# How long a lone ESC waits for the rest of its sequence.
ESCAPE_TIMEOUT = 0.1

_READ_SIZE = 1024


def _mouse_event(code: int, x: int, y: int, pressed: bool) -> MouseEvent:
    if not pressed:
        button = Button.RELEASE
    elif code & 64:
        button = Button.WHEEL_DOWN if code & 1 else Button.WHEEL_UP
    else:
        button = (Button.LEFT, Button.MIDDLE, Button.RIGHT, Button.RELEASE)[code & 3]
    # Reports count from 1.
    return MouseEvent(position=Point(x - 1, y - 1), button=button)


class InputReader:
    """
    Reads the terminal input stream and decodes it one event at a time.

    Reads go straight to the file descriptor with os.read(), Python's own
    stdin buffering would hide pending bytes from select(). Bytes are
    decoded incrementally, so a character split across reads is kept whole.
    Mouse reports are expected in the SGR (1006) encoding.

    Tests and other sources of input can pass a negative fd to skip the
    descriptor and feed() already decoded text.
    """

    def __init__(self, fd: Optional[int] = None) -> None:
        self._fd = fd
        self._pending = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    @property
    def pending(self) -> bool:
        """Whether input is buffered that next_event() hasn't decoded yet."""
        return bool(self._pending)

    def feed(self, data: str) -> None:
        self._pending += data

    def read(self, timeout: float = 0.1) -> Optional[InputEvent]:
        """
        Return the next event, waiting up to timeout for input.

        Returns None if no input arrived or it only held characters that
        are skipped, e.g. unknown control characters.

        Raises:
            EOFError: the input was closed, e.g. the terminal hung up.
            OSError: reading the descriptor failed.
        """
        if not self._pending:
            if not self._wait(timeout):
                return None
            self._fill()
            if self._pending == "\x1b":
                self._complete_escape()
        return self.next_event()

    def next_event(self) -> Optional[InputEvent]:
        """Decode the next event from input that was already read or fed."""
        if not self._pending:
            return None
        first = self._pending[0]
        if first == "\x1b":
            return self._escape()
        self._pending = self._pending[1:]
        if first in CONTROL_KEYS:
            return KeyEvent(key=CONTROL_KEYS[first], raw=first)
        if first.isprintable():
            return KeyEvent(char=first, raw=first)
        return None

    def _escape(self) -> InputEvent:
        match = _SEQUENCE.match(self._pending)
        if match is None:
            self._pending = self._pending[1:]
            return KeyEvent(key=Key.ESCAPE, raw="\x1b")
        raw, body = match.group(0), match.group(1)
        self._pending = self._pending[match.end():]
        if body in KEY_SEQUENCES:
            return KeyEvent(key=KEY_SEQUENCES[body], raw=raw)
        mouse = _SGR_MOUSE.fullmatch(body)
        if mouse is not None:
            code, x, y, final = mouse.groups()
            return _mouse_event(int(code), int(x), int(y), pressed=final == "M")
        return KeyEvent(raw=raw)

    def _complete_escape(self) -> None:
        """Give the rest of a sequence a moment to arrive after its ESC."""
        deadline = time.monotonic() + ESCAPE_TIMEOUT
        while not _SEQUENCE.match(self._pending):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            if self._wait(min(remaining, 0.025)):
                self._fill()

    def _fill(self) -> None:
        try:
            data = os.read(self.fd, _READ_SIZE)
        except BlockingIOError:
            return
        if not data:
            # select() said the descriptor is readable, nothing to read means end of input.
            raise EOFError("the terminal input was closed")
        self._pending += self._decoder.decode(data)

    def _wait(self, timeout: float) -> bool:
        if self._fd is not None and self._fd < 0:
            # Without a descriptor only fed input is ever available.
            return False
        ready, _, _ = select.select([self.fd], [], [], timeout)
        return bool(ready)
