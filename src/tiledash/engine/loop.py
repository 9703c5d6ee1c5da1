"""The run loop merging display events with a periodic redraw."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from tiledash.container.container import Container
from tiledash.engine.distributor import EventDistributor
from tiledash.engine.renderer import Renderer
from tiledash.errors import ConfigError, DisplayError, EventError
from tiledash.terminal.api import Display, ErrorEvent, Event, KeyEvent, MouseEvent, Resize

logger = logging.getLogger(__name__)

DEFAULT_REDRAW_INTERVAL = 0.25

# How long the poller thread waits for a display event before checking for cancellation.
_POLL_TIMEOUT = 0.1

# Queued by the poller thread once it noticed cancellation.
_CANCELLED = object()


@dataclass
class RunConfig:
    """
    Settings of the run loop.

    Attributes:
        redraw_interval: Seconds between periodic redraws.
        keyboard_subscriber: Called with every keyboard event after the
            widgets got it, e.g. to quit on a key.
        mouse_subscriber: Called with every mouse event after the widgets got it.
        error_handler: Called with EventError raised while routing events.
            Without it such errors end the loop.
    """
    redraw_interval: float = DEFAULT_REDRAW_INTERVAL
    keyboard_subscriber: Optional[Callable[[KeyEvent], None]] = None
    mouse_subscriber: Optional[Callable[[MouseEvent], None]] = None
    error_handler: Optional[Callable[[EventError], None]] = None

    def validate(self) -> None:
        if self.redraw_interval <= 0:
            raise ConfigError(f"invalid redraw interval {self.redraw_interval}, must be positive")


class Controller:
    """
    Drives a container without a run loop.

    The caller feeds events through handle_event() and decides when to
    redraw(). Draws the first frame on creation.
    """

    def __init__(self, display: Display, container: Container, config: Optional[RunConfig] = None) -> None:
        self._config = config if config is not None else RunConfig()
        self._config.validate()
        self._container = container
        self._distributor = EventDistributor(container)
        self._renderer = Renderer(display, container)
        self._closed = False
        self.redraw()

    def redraw(self) -> None:
        """Render the container onto the display."""
        self._check_open()
        self._renderer.render()

    def handle_event(self, event: Event) -> None:
        """
        Process one display event.

        Raises:
            DisplayError: the event reports a display failure.
            EventError: a widget failed and there is no error handler.
        """
        self._check_open()
        if isinstance(event, Resize):
            logger.debug("terminal resized to %s", event.size)
            self._container.relayout(event.size)
        elif isinstance(event, KeyEvent):
            self._route(self._distributor.keyboard, event)
            if self._config.keyboard_subscriber is not None:
                self._config.keyboard_subscriber(event)
        elif isinstance(event, MouseEvent):
            self._route(self._distributor.mouse, event)
            if self._config.mouse_subscriber is not None:
                self._config.mouse_subscriber(event)
        elif isinstance(event, ErrorEvent):
            raise DisplayError(f"display failed: {event.error}") from event.error

    def _route(self, distribute: Callable, event: Event) -> None:
        try:
            distribute(event)
        except EventError as exc:
            if self._config.error_handler is None:
                raise
            logger.debug("passing event error to the error handler: %s", exc)
            self._config.error_handler(exc)

    def close(self) -> None:
        """Stop using the controller, further calls raise RuntimeError."""
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("the controller is closed")


def coalesce_resizes(events: Iterable[object]) -> list[object]:
    """Collapse runs of consecutive Resize events into the last one of each run."""
    out: list[object] = []
    for event in events:
        if isinstance(event, Resize) and out and isinstance(out[-1], Resize):
            out[-1] = event
        else:
            out.append(event)
    return out


def _poll(display: Display, events: queue.Queue, cancel: threading.Event, stop: threading.Event) -> None:
    """Feed display events into the queue until cancelled or stopped."""
    while not stop.is_set():
        if cancel.is_set():
            events.put(_CANCELLED)
            return
        try:
            event = display.poll_event(_POLL_TIMEOUT)
        except Exception as exc:
            events.put(ErrorEvent(exc))
            return
        if event is not None:
            events.put(event)
        if isinstance(event, ErrorEvent):
            return


def run(
    display: Display,
    container: Container,
    *,
    cancel: Optional[threading.Event] = None,
    config: Optional[RunConfig] = None,
) -> None:
    """
    Run the dashboard until cancel is set.

    Display events are read on a background thread and queued. The loop
    waits for the next event or the next redraw tick, whichever comes
    first, handles pending events in order with consecutive resizes
    coalesced, and redraws after input and on every tick. All layout,
    routing and drawing happen on the calling thread.

    Raises:
        DisplayError: the display failed.
        RenderError: a widget failed to draw.
        EventError: a widget failed to handle an event and config has no
            error_handler.
    """
    config = config if config is not None else RunConfig()
    cancel = cancel if cancel is not None else threading.Event()
    controller = Controller(display, container, config)

    events: queue.Queue = queue.Queue()
    stop = threading.Event()
    poller = threading.Thread(
        target=_poll, args=(display, events, cancel, stop), name="tiledash-poller", daemon=True
    )
    poller.start()
    logger.debug("run loop started, redraw every %.3fs", config.redraw_interval)

    next_tick = time.monotonic() + config.redraw_interval
    try:
        while not cancel.is_set():
            timeout = max(0.0, next_tick - time.monotonic())
            pending = []
            try:
                pending.append(events.get(timeout=timeout))
                while True:
                    pending.append(events.get_nowait())
            except queue.Empty:
                pass
            if _CANCELLED in pending or cancel.is_set():
                break

            for event in coalesce_resizes(pending):
                controller.handle_event(event)

            now = time.monotonic()
            if pending or now >= next_tick:
                controller.redraw()
            if now >= next_tick:
                next_tick = now + config.redraw_interval
    finally:
        stop.set()
        controller.close()
        poller.join(timeout=1.0)
        logger.debug("run loop stopped")
