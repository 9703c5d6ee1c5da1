"""Error taxonomy shared by every layer of the engine.

Recoverable vs. fatal is decided by the layer that catches the error:

- ConfigError / NotFoundError: raised synchronously by Container.update(),
  the tree is left unchanged.
- SizeError: a split or leaf is too small; the layout degrades to a
  "resize needed" placeholder for that part of the tree only.
- UnsupportedEventError: a widget declined a keyboard or mouse event.
- EventError: a widget failed while handling an event.
- RenderError: a widget failed to draw; the pass is aborted, nothing flushed.
- DisplayError: the terminal backend failed; fatal to the run loop.
"""

from __future__ import annotations


class TiledashError(Exception):
    """Base class for all errors raised by tiledash."""


class ConfigError(TiledashError, ValueError):
    """Invalid container or widget configuration."""


class NotFoundError(ConfigError, KeyError):
    """No container node has the requested id."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message.
        return str(self.args[0]) if self.args else ""


class SizeError(TiledashError):
    """An area is too small for the requested operation."""


class CanvasError(TiledashError, IndexError):
    """A point falls outside of the canvas area."""


class UnsupportedEventError(TiledashError):
    """A widget doesn't support the delivered event type."""


class EventError(TiledashError):
    """A widget failed while handling a keyboard or mouse event."""

    def __init__(self, node_id: str, cause: BaseException) -> None:
        super().__init__(f"widget in container {node_id!r} failed to handle event: {cause}")
        self.node_id = node_id
        self.cause = cause


class RenderError(TiledashError):
    """A widget failed to draw, the whole render pass was aborted."""

    def __init__(self, node_id: str, cause: BaseException) -> None:
        super().__init__(f"widget in container {node_id!r} failed to draw: {cause}")
        self.node_id = node_id
        self.cause = cause


class DisplayError(TiledashError):
    """The terminal backend reported a failure."""
