"""Tests for input decoding and the ANSI display (no real terminal needed)."""

import io
import os
import threading
from typing import Iterator

import pytest

from tiledash.container import Container, PlaceWidget
from tiledash.core.cell import Cell
from tiledash.core.color import Color, ColorMode
from tiledash.core.geometry import Point, Size
from tiledash.engine import run
from tiledash.errors import DisplayError
from tiledash.terminal.ansi import DEFAULT_SIZE, AnsiDisplay
from tiledash.terminal.api import Button, Display, ErrorEvent, Key, KeyEvent, MouseEvent, Resize
from tiledash.terminal.fake import FakeDisplay
from tiledash.terminal.input import InputReader
from tiledash.widgets import Mirror


@pytest.fixture
def hung_up_fd() -> Iterator[int]:
    """Read end of a pipe whose writer is already gone."""
    read_fd, write_fd = os.pipe()
    os.close(write_fd)
    yield read_fd
    os.close(read_fd)


def read_all(reader: InputReader) -> list:
    events = []
    while reader.pending:
        event = reader.next_event()
        if event is not None:
            events.append(event)
    return events


class TestInputReader:
    """Tests for decoding fed input."""

    @pytest.mark.parametrize("data,expected", [
        ('\r', Key.ENTER),
        ('\t', Key.TAB),
        ('\x7f', Key.BACKSPACE),
        ('\x03', Key.CTRL_C),
        ('\x1b', Key.ESCAPE),
        ('\x1b[A', Key.UP),
        ('\x1bOD', Key.LEFT),
        ('\x1b[3~', Key.DELETE),
        ('\x1b[Z', Key.BACKTAB),
        ('\x1b[15~', Key.F5),
    ])
    def test_keys(self, data: str, expected: Key) -> None:
        reader = InputReader(fd=-1)
        reader.feed(data)
        assert read_all(reader) == [KeyEvent(key=expected, raw=data)]

    def test_characters(self) -> None:
        reader = InputReader(fd=-1)
        reader.feed("aé世")
        assert [e.char for e in read_all(reader)] == ['a', 'é', '世']

    def test_sequences_back_to_back(self) -> None:
        reader = InputReader(fd=-1)
        reader.feed("\x1b[B\x1b[Cx")
        events = read_all(reader)
        assert [e.key for e in events[:2]] == [Key.DOWN, Key.RIGHT]
        assert events[2].char == 'x'

    def test_sgr_mouse(self) -> None:
        reader = InputReader(fd=-1)
        reader.feed("\x1b[<0;5;3M\x1b[<0;5;3m\x1b[<2;1;1M\x1b[<65;10;10M")
        assert read_all(reader) == [
            MouseEvent(Point(4, 2), Button.LEFT),
            MouseEvent(Point(4, 2), Button.RELEASE),
            MouseEvent(Point(0, 0), Button.RIGHT),
            MouseEvent(Point(9, 9), Button.WHEEL_DOWN),
        ]

    def test_unknown_sequence(self) -> None:
        reader = InputReader(fd=-1)
        reader.feed("\x1b[99~")
        event = read_all(reader)[0]
        assert event.key is None
        assert event.char is None
        assert event.raw == "\x1b[99~"

    def test_closed_input(self, hung_up_fd: int) -> None:
        reader = InputReader(fd=hung_up_fd)
        with pytest.raises(EOFError):
            reader.read(timeout=0.1)

    def test_without_descriptor_nothing_to_read(self) -> None:
        assert InputReader(fd=-1).read(timeout=0) is None

    def test_key_event_matching(self) -> None:
        assert KeyEvent(key=Key.TAB).matches(Key.TAB)
        assert KeyEvent(char='q').matches('q')
        assert not KeyEvent(char='q').matches(Key.TAB)
        assert str(KeyEvent(key=Key.PAGE_UP)) == "KeyPageUp"


class TestAnsiDisplay:
    """Tests for AnsiDisplay output, written to a string buffer."""

    def make(self, **kwargs) -> tuple[AnsiDisplay, io.StringIO]:
        out = io.StringIO()
        return AnsiDisplay(output=out, reader=InputReader(fd=-1), **kwargs), out

    def test_is_a_display(self) -> None:
        display, _ = self.make()
        assert isinstance(display, Display)
        assert isinstance(FakeDisplay(), Display)

    def test_size_without_terminal(self) -> None:
        display, _ = self.make()
        assert display.size() == DEFAULT_SIZE

    def test_flush_runs(self) -> None:
        display, out = self.make()
        display.flush([(Point(1, 0), Cell('b')), (Point(0, 0), Cell('a'))])
        assert out.getvalue() == "\x1b[1;1H\x1b[0mab\x1b[0m"

    def test_flush_moves_cursor_across_gaps(self) -> None:
        display, out = self.make(color_mode=ColorMode.STANDARD_16)
        display.flush([(Point(0, 0), Cell('a')), (Point(5, 2), Cell('c', fg=Color.from_rgb(255, 0, 0)))])
        assert out.getvalue() == "\x1b[1;1H\x1b[0ma\x1b[3;6H\x1b[0;31mc\x1b[0m"

    def test_flush_full_width(self) -> None:
        display, out = self.make()
        display.flush([(Point(0, 0), Cell('世')), (Point(1, 0), Cell('')), (Point(2, 0), Cell('x'))])
        assert out.getvalue() == "\x1b[1;1H\x1b[0m世x\x1b[0m"

    def test_flush_nothing(self) -> None:
        display, out = self.make()
        display.flush([])
        assert out.getvalue() == ""

    def test_clear_uses_clear_style(self) -> None:
        display, out = self.make(clear_bg=Color.BLUE)
        display.clear()
        assert out.getvalue() == "\x1b[0m\x1b[0;44m\x1b[2J\x1b[H"

    def test_poll_reports_size_then_input(self) -> None:
        reader = InputReader(fd=-1)
        reader.feed("q")
        display = AnsiDisplay(output=io.StringIO(), reader=reader)
        assert display.poll_event(0) == Resize(DEFAULT_SIZE)
        assert display.poll_event(0) == KeyEvent(char='q', raw='q')
        assert display.poll_event(0) is None

    def test_poll_reports_hang_up(self, hung_up_fd: int) -> None:
        display = AnsiDisplay(output=io.StringIO(), reader=InputReader(fd=hung_up_fd))
        assert display.poll_event(0.1) == Resize(DEFAULT_SIZE)
        event = display.poll_event(0.1)
        assert isinstance(event, ErrorEvent)
        assert isinstance(event.error, EOFError)

    def test_hang_up_ends_run(self, hung_up_fd: int) -> None:
        display = AnsiDisplay(output=io.StringIO(), reader=InputReader(fd=hung_up_fd))
        cancel = threading.Event()
        watchdog = threading.Timer(5, cancel.set)
        watchdog.start()
        try:
            with pytest.raises(DisplayError):
                run(display, Container(display, PlaceWidget(Mirror())), cancel=cancel)
            assert not cancel.is_set()
        finally:
            watchdog.cancel()


class TestFakeDisplay:
    """Tests for the in-memory display."""

    def test_flush_updates_screen(self) -> None:
        display = FakeDisplay(Size(3, 1))
        display.flush([(Point(1, 0), Cell('x'))])
        assert display.text() == " x "
        assert display.last_flush == [(Point(1, 0), Cell('x'))]

    def test_resize_queues_event(self) -> None:
        display = FakeDisplay(Size(3, 1))
        display.resize(Size(5, 2))
        assert display.size() == Size(5, 2)
        assert display.poll_event(0) == Resize(Size(5, 2))
        assert display.poll_event(0) is None
