"""ANSI terminal backend - a Display over escape sequences and a raw-mode tty."""

from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import ExitStack, contextmanager
from typing import Iterator, Optional, Sequence, TextIO

from tiledash.core.cell import Cell
from tiledash.core.color import Color, ColorMode
from tiledash.core.geometry import Point, Size
from tiledash.core.runewidth import rune_width
from tiledash.terminal.api import ErrorEvent, Event, Resize
from tiledash.terminal.input import InputReader

logger = logging.getLogger(__name__)

DEFAULT_SIZE = Size(80, 24)

# How often the terminal size is sampled while waiting for input.
_POLL_SLICE = 0.05


class AnsiDisplay:
    """
    Display for VT100 compatible terminals.

    Takes over the terminal on open(): alternate screen, hidden cursor, raw
    input and SGR mouse reporting. close() restores everything. Use it as a
    context manager:

        with AnsiDisplay() as display:
            run(display, container, cancel=stop)
    """

    def __init__(
        self,
        color_mode: ColorMode = ColorMode.EXTENDED_256,
        clear_fg: Optional[Color] = None,
        clear_bg: Optional[Color] = None,
        mouse: bool = True,
        output: Optional[TextIO] = None,
        reader: Optional[InputReader] = None,
    ) -> None:
        self.color_mode = color_mode
        self.clear_style = Cell(fg=clear_fg, bg=clear_bg)
        self.mouse = mouse
        self._out = output if output is not None else sys.stdout
        self._reader = reader if reader is not None else InputReader()
        self._stack: Optional[ExitStack] = None
        self._last_size: Optional[Size] = None

    # Lifecycle

    def open(self) -> "AnsiDisplay":
        """Switch the terminal into full screen TUI mode."""
        if self._stack is None:
            stack = ExitStack()
            stack.enter_context(self._managed_mode())
            self._stack = stack
            self._last_size = self.size()
            logger.debug("terminal opened, size %s, color mode %s", self._last_size, self.color_mode.value)
        return self

    def close(self) -> None:
        """Restore the terminal."""
        if self._stack is not None:
            stack, self._stack = self._stack, None
            stack.close()
            logger.debug("terminal closed")

    def __enter__(self) -> "AnsiDisplay":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Display capability

    def size(self) -> Size:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size(self._output_fd())
            return Size(size.columns, size.lines)
        except (OSError, ValueError):
            return DEFAULT_SIZE

    def poll_event(self, timeout: float) -> Optional[Event]:
        """Wait for input or a size change, whichever comes first."""
        deadline = time.monotonic() + timeout
        while True:
            size = self.size()
            if size != self._last_size:
                self._last_size = size
                return Resize(size)
            remaining = deadline - time.monotonic()
            try:
                event = self._reader.read(timeout=max(0.0, min(_POLL_SLICE, remaining)))
            except (OSError, EOFError) as exc:
                logger.debug("terminal input failed: %s", exc)
                return ErrorEvent(exc)
            if event is not None:
                return event
            if remaining <= 0:
                return None

    def clear(self) -> None:
        """Clear screen with the clear style and move cursor to home."""
        self._write(f"\x1b[0m{self._sgr(self.clear_style)}\x1b[2J\x1b[H")

    def flush(self, changes: Sequence[tuple[Point, Cell]]) -> None:
        """Write the changed cells, moving the cursor only across gaps."""
        parts: list[str] = []
        cursor: Optional[Point] = None
        last_sgr: Optional[str] = None

        for point, cell in sorted(changes, key=lambda change: (change[0].y, change[0].x)):
            if cell.is_continuation:
                # The terminal fills it when drawing the full-width rune before it.
                continue
            if cursor != point:
                parts.append(f"\x1b[{point.y + 1};{point.x + 1}H")
            sgr = self._sgr(cell)
            if sgr != last_sgr:
                parts.append(sgr)
                last_sgr = sgr
            parts.append(cell.char)
            cursor = Point(point.x + rune_width(cell.char), point.y)

        if parts:
            parts.append('\x1b[0m')
            self._write("".join(parts))

    # Helpers

    def _sgr(self, cell: Cell) -> str:
        """Build the full SGR sequence for a cell's style, starting with a reset."""
        codes = ['0']
        if cell.bold:
            codes.append('1')
        if cell.italic:
            codes.append('3')
        if cell.underline:
            codes.append('4')
        if cell.blink:
            codes.append('5')
        if cell.reverse:
            codes.append('7')
        fg = cell.fg if cell.fg is not None else self.clear_style.fg
        bg = cell.bg if cell.bg is not None else self.clear_style.bg
        if fg is not None:
            codes.append(fg.downgrade(self.color_mode).to_sgr_fg())
        if bg is not None:
            codes.append(bg.downgrade(self.color_mode).to_sgr_bg())
        return f"\x1b[{';'.join(codes)}m"

    def _output_fd(self) -> int:
        return self._out.fileno()

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    @contextmanager
    def _raw_mode(self) -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return
        fd = self._reader.fd
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @contextmanager
    def _alternate_screen(self) -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        self._write('\x1b[?1049h')
        try:
            yield
        finally:
            self._write('\x1b[?1049l')

    @contextmanager
    def _mouse_reporting(self) -> Iterator[None]:
        """Enable button and drag reporting in SGR encoding."""
        if not self.mouse:
            yield
            return
        self._write('\x1b[?1000h\x1b[?1002h\x1b[?1006h')
        try:
            yield
        finally:
            self._write('\x1b[?1006l\x1b[?1002l\x1b[?1000l')

    @contextmanager
    def _managed_mode(self) -> Iterator[None]:
        """Full TUI mode: alternate screen, hidden cursor, raw input, mouse."""
        with self._alternate_screen():
            self._write('\x1b[?25l')
            try:
                with self._raw_mode(), self._mouse_reporting():
                    yield
            finally:
                self._write('\x1b[?25h\x1b[0m')
