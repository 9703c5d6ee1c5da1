"""Routing of keyboard and mouse events to widgets."""

from __future__ import annotations

import logging
from typing import Callable, Union

from tiledash.container.container import Container
from tiledash.container.node import Node
from tiledash.core.geometry import Point
from tiledash.errors import EventError, UnsupportedEventError
from tiledash.terminal.api import Button, KeyEvent, MouseEvent
from tiledash.widgets.base import EventMeta, KeyScope, MouseScope

logger = logging.getLogger(__name__)

# Position reported to GLOBAL mouse subscribers when the pointer is outside of their widget.
OUTSIDE = Point(-1, -1)

InputEvent = Union[KeyEvent, MouseEvent]


class EventDistributor:
    """
    Delivers input events to the widgets of a container.

    Keyboard events are tried in order: a focused widget with exclusive
    keyboard access gets the event alone, then the container's global keys
    and focus keys consume it, and what remains goes to the focused widget
    and to every widget subscribed globally.

    Mouse events go to the widget of the leaf under the pointer according
    to its subscription scope and to every globally subscribed widget. A
    left button press focuses the leaf under the pointer.

    Widgets declining an event with UnsupportedEventError are skipped.
    Other widget failures are raised as EventError once every subscriber
    was served.
    """

    def __init__(self, container: Container) -> None:
        self._container = container

    def keyboard(self, event: KeyEvent) -> None:
        container = self._container
        failures: list[tuple[Node, Exception]] = []

        focused = container.focused
        if focused is not None and focused.widget is not None:
            if focused.widget.options().exclusive_keyboard_on_focus:
                self._deliver(focused, focused.widget.keyboard, event, failures)
                self._raise(failures)
                return

        handler = container.global_key_handler(event)
        if handler is not None:
            logger.debug("global key %s", event)
            handler(event)
            return

        binding = container.focus_binding(event)
        if binding is not None and container.move_focus(binding):
            return

        for leaf in container.leaves():
            # A widget handling the event may have updated the container.
            if leaf.widget is None or not container.is_attached(leaf):
                continue
            scope = leaf.widget.options().want_keyboard
            if scope == KeyScope.GLOBAL or (scope == KeyScope.FOCUSED and container.is_focused(leaf)):
                self._deliver(leaf, leaf.widget.keyboard, event, failures)
        self._raise(failures)

    def mouse(self, event: MouseEvent) -> None:
        container = self._container
        failures: list[tuple[Node, Exception]] = []

        hit = container.leaf_at(event.position)
        if hit is not None and event.button == Button.LEFT and hit.widget is not None:
            container.focus_leaf(hit)

        for leaf in container.leaves():
            # A widget handling the event may have updated the container.
            if leaf.widget is None or not container.is_attached(leaf):
                continue
            scope = leaf.widget.options().want_mouse
            if scope == MouseScope.NONE:
                continue
            on_widget = not leaf.resize_needed and leaf.widget_area.contains(event.position)
            local = event.position - leaf.widget_area.min
            if scope == MouseScope.GLOBAL:
                position = local if on_widget else OUTSIDE
            elif hit is None or leaf.index != hit.index:
                continue
            elif scope == MouseScope.WIDGET and not on_widget:
                continue
            else:
                position = local
            self._deliver(leaf, leaf.widget.mouse, MouseEvent(position, event.button), failures)
        self._raise(failures)

    def _deliver(
        self,
        leaf: Node,
        handler: Callable[[InputEvent, EventMeta], None],
        event: InputEvent,
        failures: list[tuple[Node, Exception]],
    ) -> None:
        meta = EventMeta(focused=self._container.is_focused(leaf))
        try:
            handler(event, meta)
        except UnsupportedEventError as exc:
            logger.debug("container %s: %s", leaf.label, exc)
        except Exception as exc:
            logger.debug("container %s failed to handle %s: %s", leaf.label, event, exc)
            failures.append((leaf, exc))

    @staticmethod
    def _raise(failures: list[tuple[Node, Exception]]) -> None:
        if failures:
            leaf, exc = failures[0]
            raise EventError(leaf.label, exc) from exc
