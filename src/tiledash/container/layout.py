"""Top-down area assignment for the container tree."""

from __future__ import annotations

import logging

from tiledash.container.node import Node
from tiledash.core.align import align_rect
from tiledash.core.geometry import Rect, cap_size, exclude_border, shrink, with_ratio
from tiledash.errors import SizeError

logger = logging.getLogger(__name__)


def _empty_at(area: Rect) -> Rect:
    return Rect(area.min, area.min)


def layout(nodes: dict[int, Node], index: int, area: Rect) -> None:
    """
    Assign area to the node and divide it among its descendants.

    Margin and then border are taken from the node's area. Splits divide
    what remains between their children; a split that cannot be divided is
    marked resize_needed and its subtree gets empty areas, so that its
    siblings still render.
    """
    node = nodes[index]
    margin = node.margin
    node.area = shrink(area, margin.top, margin.right, margin.bottom, margin.left)
    node.inner = exclude_border(node.area) if node.has_border else node.area
    node.resize_needed = False
    node.widget_area = _empty_at(node.inner)

    if node.children is not None:
        primary, secondary = node.children
        try:
            first, second = node.policy.split(node.inner, node.orientation)
        except SizeError as exc:
            logger.debug("container %s needs resize: %s", node.label, exc)
            node.resize_needed = True
            first = second = _empty_at(node.inner)
        layout(nodes, primary, first)
        layout(nodes, secondary, second)
        return

    _place_widget(node)


def _place_widget(node: Node) -> None:
    """Compute the widget area of a leaf, or mark it resize_needed."""
    padding = node.padding
    usable = shrink(node.inner, padding.top, padding.right, padding.bottom, padding.left)
    if node.widget is None:
        node.widget_area = usable
        return

    opts = node.widget.options()
    minimum = opts.minimum_size
    if usable.empty or usable.width < minimum.width or usable.height < minimum.height:
        if not node.area.empty:
            logger.debug("container %s needs resize, widget needs %s, got %s", node.label, minimum, usable.size)
        node.widget_area = _empty_at(usable)
        node.resize_needed = True
        return

    area = with_ratio(cap_size(usable, opts.maximum_size), opts.ratio)
    if area.empty or area.width < minimum.width or area.height < minimum.height:
        node.widget_area = _empty_at(usable)
        node.resize_needed = True
        return
    node.widget_area = align_rect(usable, area.size, node.h_align, node.v_align)
