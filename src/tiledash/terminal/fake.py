"""In-memory Display for tests and headless rendering."""

from __future__ import annotations

import queue
import threading
from typing import Optional, Sequence

from tiledash.core.canvas import Canvas
from tiledash.core.cell import Cell
from tiledash.core.geometry import Point, Size
from tiledash.terminal.api import Event, Resize


class FakeDisplay:
    """
    A Display that keeps the screen in a Canvas.

    Events are queued with push() and handed out by poll_event(). Every
    flush is recorded so tests can check what the renderer sent.
    """

    def __init__(self, size: Size = Size(80, 24)) -> None:
        self._size = size
        self._lock = threading.Lock()
        self._events: queue.Queue[Event] = queue.Queue()
        self.screen = Canvas(size)
        self.flushes: list[list[tuple[Point, Cell]]] = []
        self.clears = 0
        self.closed = False

    def push(self, *events: Event) -> None:
        """Queue events for poll_event()."""
        for event in events:
            self._events.put(event)

    def resize(self, size: Size) -> None:
        """Change the screen size and report it as an event."""
        with self._lock:
            self._size = size
            self.screen = Canvas(size)
        self.push(Resize(size))

    # Display capability

    def poll_event(self, timeout: float) -> Optional[Event]:
        try:
            return self._events.get(timeout=timeout)
        except queue.Empty:
            return None

    def size(self) -> Size:
        with self._lock:
            return self._size

    def clear(self) -> None:
        with self._lock:
            self.screen.clear()
            self.clears += 1

    def flush(self, changes: Sequence[tuple[Point, Cell]]) -> None:
        with self._lock:
            changes = list(changes)
            for point, cell in changes:
                self.screen[point.x, point.y] = cell
            self.flushes.append(changes)

    def close(self) -> None:
        self.closed = True

    # Inspection

    @property
    def last_flush(self) -> list[tuple[Point, Cell]]:
        with self._lock:
            return self.flushes[-1] if self.flushes else []

    def text(self) -> str:
        """The screen content as plain text, one line per row."""
        with self._lock:
            return self.screen.text()

    def line(self, y: int) -> str:
        return self.text().split("\n")[y]
