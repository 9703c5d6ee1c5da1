"""Pytest configuration and shared fixtures."""

from typing import Callable

import pytest

from tiledash.core.canvas import Canvas
from tiledash.core.geometry import Point, Size
from tiledash.terminal.api import Button, Key, KeyEvent, MouseEvent
from tiledash.terminal.fake import FakeDisplay


@pytest.fixture
def display() -> FakeDisplay:
    """A 40x12 in-memory display."""
    return FakeDisplay(Size(40, 12))


@pytest.fixture
def make_display() -> Callable[[int, int], FakeDisplay]:
    """Factory for in-memory displays of a given size."""
    def make(width: int, height: int) -> FakeDisplay:
        return FakeDisplay(Size(width, height))
    return make


def key(binding) -> KeyEvent:
    """A keyboard event for a Key or a character."""
    if isinstance(binding, Key):
        return KeyEvent(key=binding)
    return KeyEvent(char=binding, raw=binding)


def click(x: int, y: int, button: Button = Button.LEFT) -> MouseEvent:
    return MouseEvent(Point(x, y), button)


def canvas_line(cvs: Canvas, y: int) -> str:
    return cvs.text().split("\n")[y]
