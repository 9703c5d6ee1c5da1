"""Widget capability - the contract between widgets and the container."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from tiledash.core.canvas import Canvas
from tiledash.core.geometry import Size
from tiledash.errors import UnsupportedEventError
from tiledash.terminal.api import KeyEvent, MouseEvent


class KeyScope(Enum):
    """Which keyboard events a widget wants."""
    NONE = "none"        # No keyboard events
    FOCUSED = "focused"  # Only while its container is focused
    GLOBAL = "global"    # Every keyboard event, regardless of focus


class MouseScope(Enum):
    """Which mouse events a widget wants."""
    NONE = "none"            # No mouse events
    WIDGET = "widget"        # Events that land on the widget's canvas
    CONTAINER = "container"  # Events that land anywhere in its container, border included
    GLOBAL = "global"        # Every mouse event on the screen


@dataclass(frozen=True)
class WidgetOptions:
    """
    Size constraints and event subscriptions reported by a widget.

    Attributes:
        minimum_size: Smallest canvas the widget can draw on.
        maximum_size: Largest canvas the widget uses, zero on an axis means unbounded.
        ratio: Desired width:height aspect ratio of the canvas, zero means any.
        want_keyboard: Keyboard subscription scope.
        want_mouse: Mouse subscription scope.
        exclusive_keyboard_on_focus: While focused, the widget gets every key
            including the ones that would move focus.
    """
    minimum_size: Size = Size()
    maximum_size: Size = Size()
    ratio: Size = Size()
    want_keyboard: KeyScope = KeyScope.NONE
    want_mouse: MouseScope = MouseScope.NONE
    exclusive_keyboard_on_focus: bool = False


@dataclass(frozen=True)
class Meta:
    """Context passed to Widget.draw()."""
    focused: bool = False
    id: str = ""


@dataclass(frozen=True)
class EventMeta:
    """Context passed with keyboard and mouse events."""
    focused: bool = False


@runtime_checkable
class Widget(Protocol):
    """
    Protocol for widgets placed into containers.

    Widgets are updated by application threads while the run loop draws
    them, so each widget guards its own state with a lock that both its
    mutators and draw() acquire.
    """

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        """Draw onto the canvas, which is exactly the widget's area."""
        ...

    def keyboard(self, event: KeyEvent, meta: EventMeta) -> None:
        """Handle a keyboard event, raise UnsupportedEventError to decline."""
        ...

    def mouse(self, event: MouseEvent, meta: EventMeta) -> None:
        """Handle a mouse event in widget-local coordinates, raise UnsupportedEventError to decline."""
        ...

    def options(self) -> WidgetOptions:
        """Report size constraints and event subscriptions."""
        ...


class BaseWidget(ABC):
    """Base class with common widget functionality."""

    def __init__(self) -> None:
        # Reentrant so that mutators can call each other while holding it.
        self._lock = threading.RLock()

    @abstractmethod
    def draw(self, cvs: Canvas, meta: Meta) -> None:
        """Subclasses must implement drawing."""
        pass

    def keyboard(self, event: KeyEvent, meta: EventMeta) -> None:
        """Default: decline keyboard events."""
        raise UnsupportedEventError(f"the {type(self).__name__} widget doesn't support keyboard events")

    def mouse(self, event: MouseEvent, meta: EventMeta) -> None:
        """Default: decline mouse events."""
        raise UnsupportedEventError(f"the {type(self).__name__} widget doesn't support mouse events")

    def options(self) -> WidgetOptions:
        return WidgetOptions()
