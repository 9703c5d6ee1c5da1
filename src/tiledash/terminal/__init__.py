"""Terminal abstraction: the Display capability, events and backends."""

from tiledash.terminal.ansi import AnsiDisplay
from tiledash.terminal.api import Button, Display, ErrorEvent, Event, Key, KeyEvent, MouseEvent, Resize
from tiledash.terminal.fake import FakeDisplay
from tiledash.terminal.input import InputReader

__all__ = [
    "AnsiDisplay",
    "Button",
    "Display",
    "ErrorEvent",
    "Event",
    "FakeDisplay",
    "InputReader",
    "Key",
    "KeyEvent",
    "MouseEvent",
    "Resize",
]
