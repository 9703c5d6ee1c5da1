"""Composition of the container tree into a canvas and diffing it onto the display."""

from __future__ import annotations

import logging
from typing import Optional

from tiledash.container.container import Container
from tiledash.container.node import Node
from tiledash.core.canvas import Canvas, diff
from tiledash.core.draw import border, resize_needed
from tiledash.errors import RenderError
from tiledash.terminal.api import Display
from tiledash.widgets.base import Meta

logger = logging.getLogger(__name__)


class Renderer:
    """
    Draws the container tree onto the display.

    Every pass composes a fresh canvas of the display's size: borders,
    placeholders for parts of the tree that need a bigger terminal, and
    each widget drawn on a canvas of exactly its area. Only the cells that
    changed since the last flushed frame are sent to the display; the
    first frame and the first frame after a size change clear the display
    and send every cell.
    """

    def __init__(self, display: Display, container: Container) -> None:
        self._display = display
        self._container = container
        self._last: Optional[Canvas] = None

    @property
    def last_frame(self) -> Optional[Canvas]:
        """The canvas flushed by the last successful pass."""
        return self._last

    def render(self) -> int:
        """
        Run one render pass. Returns the number of cells flushed.

        Raises:
            RenderError: a widget failed to draw, nothing was flushed.
        """
        size = self._display.size()
        # Widget size needs can change between passes, so lay out every time.
        self._container.relayout(size)

        cvs = Canvas(size)
        for node in self._container.nodes():
            self._draw_node(cvs, node)

        full = self._last is None or self._last.size != size
        changes = diff(self._last, cvs)
        if full:
            logger.debug("full redraw at size %s", size)
            self._display.clear()
        if changes:
            self._display.flush(changes)
        self._last = cvs
        return len(changes)

    def invalidate(self) -> None:
        """Forget the last frame so that the next pass redraws everything."""
        self._last = None

    def _draw_node(self, cvs: Canvas, node: Node) -> None:
        focused = self._container.is_focused(node)
        if node.has_border and node.area.width >= 2 and node.area.height >= 2:
            color = node.focused_color if focused and node.focused_color is not None else node.border_color
            border(
                cvs, node.area,
                line_style=node.border,
                title=node.border_title,
                title_align=node.border_title_align,
                fg=color,
            )

        if node.resize_needed:
            region = node.inner if not node.inner.empty else node.area
            if not region.empty:
                sub = cvs.sub_canvas(region)
                resize_needed(sub)
                sub.copy_to(cvs)
            return

        if not node.is_leaf or node.widget is None or node.widget_area.empty:
            return
        sub = cvs.sub_canvas(node.widget_area)
        try:
            node.widget.draw(sub, Meta(focused=focused, id=node.name))
        except Exception as exc:
            logger.debug("container %s failed to draw: %s", node.label, exc)
            raise RenderError(node.label, exc) from exc
        sub.copy_to(cvs)
