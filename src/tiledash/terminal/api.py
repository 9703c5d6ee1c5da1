"""Terminal API - the events a display reports and the Display capability."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol, Sequence, Union, runtime_checkable

from tiledash.core.cell import Cell
from tiledash.core.geometry import Point, Size


def _camel(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKTAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    CTRL_C = auto()
    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F6 = auto()
    F7 = auto()
    F8 = auto()
    F9 = auto()
    F10 = auto()
    F11 = auto()
    F12 = auto()

    def __str__(self) -> str:
        return f"Key{_camel(self.name)}"


# A key binding is either a named key or a single printable character.
KeyBinding = Union[Key, str]


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""  # Raw escape sequence

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None

    def matches(self, binding: KeyBinding) -> bool:
        """Check if this event was produced by the bound key or character."""
        if isinstance(binding, Key):
            return self.key == binding
        return self.char == binding

    def __str__(self) -> str:
        if self.key is not None:
            return str(self.key)
        if self.char is not None:
            return self.char
        return repr(self.raw)


class Button(Enum):
    """Mouse buttons and wheel directions."""
    LEFT = auto()
    MIDDLE = auto()
    RIGHT = auto()
    RELEASE = auto()
    WHEEL_UP = auto()
    WHEEL_DOWN = auto()

    def __str__(self) -> str:
        return f"Button{_camel(self.name)}"


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a screen position, or a widget-local one once routed."""
    position: Point = Point()
    button: Button = Button.LEFT

    def __str__(self) -> str:
        return f"{self.position}{self.button}"


@dataclass(frozen=True)
class Resize:
    """The terminal changed its size."""
    size: Size


@dataclass(frozen=True)
class ErrorEvent:
    """The backend failed, fatal to the run loop."""
    error: BaseException


Event = Union[KeyEvent, MouseEvent, Resize, ErrorEvent]


@runtime_checkable
class Display(Protocol):
    """
    Capability of a terminal backend.

    Any implementation plugs into the engine, the engine never assumes a
    specific one.
    """

    def poll_event(self, timeout: float) -> Optional[Event]:
        """Wait up to timeout seconds for the next event, None if there was none."""
        ...

    def size(self) -> Size:
        """Current terminal dimensions."""
        ...

    def clear(self) -> None:
        """Clear the whole screen."""
        ...

    def flush(self, changes: Sequence[tuple[Point, Cell]]) -> None:
        """Draw the changed cells on the physical screen."""
        ...

    def close(self) -> None:
        """Restore the terminal and release resources."""
        ...
