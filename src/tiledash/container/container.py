"""Container - the split tree that lays out widgets and owns keyboard focus."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from tiledash.container.focus import FocusBinding, FocusTracker
from tiledash.container.layout import layout
from tiledash.container.node import Node, leaves, preorder
from tiledash.container.options import KeyBindings, KeyHandler, Option, Stage
from tiledash.core.geometry import Point, Rect, Size
from tiledash.errors import NotFoundError
from tiledash.terminal.api import Display, KeyEvent

logger = logging.getLogger(__name__)


class Container:
    """
    A tree of regions covering the whole display.

    Every node is either a split into two children or a leaf holding at
    most one widget. Nodes live in an arena keyed by index; parents refer to
    children by index and the focused leaf is an index as well.

    Example:
        root = Container(
            display,
            ID("root"),
            SplitVertical(
                Left(PlaceWidget(gauge)),
                Right(Border(LineStyle.LIGHT), PlaceWidget(text)),
                SplitPercent(30),
            ),
        )
        root.update("root", Clear(), PlaceWidget(other))
    """

    def __init__(self, display: Display, *options: Option) -> None:
        self._display = display
        self._root = 0
        self._nodes: dict[int, Node] = {self._root: Node(self._root)}
        self._next_index = 1
        self._bindings = KeyBindings()
        self._focus = FocusTracker()
        self._size: Optional[Size] = None
        self._configure(self._root, options)
        self.relayout(display.size())

    # Configuration

    def update(self, node_id: str, *options: Option) -> None:
        """
        Re-specify the node with the given id and the subtree under it.

        Raises:
            NotFoundError: no node has the id.
            ConfigError: the options are invalid or conflict, the tree is
                left unchanged.
        """
        index = self.node(node_id).index
        self._configure(index, options)
        self.relayout()
        logger.debug("container %s updated with %d option(s)", node_id, len(options))

    def _configure(self, index: int, options: tuple[Option, ...]) -> None:
        stage = Stage(self._nodes, self._root, self._next_index, self._bindings)
        stage.apply(index, options)
        stage.validate()
        # Commit.
        self._nodes = stage.nodes
        self._next_index = stage.next_index
        self._bindings = stage.bindings
        if stage.requested_focus is not None:
            self._focus.settle(self._nodes, self._root, stage.requested_focus)

    # Layout

    def relayout(self, size: Optional[Size] = None) -> None:
        """Recompute the areas of all nodes, for size or the last known size."""
        if size is None:
            size = self._size if self._size is not None else self._display.size()
        if size != self._size:
            logger.debug("container layout for size %s", size)
        self._size = size
        layout(self._nodes, self._root, Rect.from_size(size))
        self._focus.settle(self._nodes, self._root)

    @property
    def size(self) -> Optional[Size]:
        """Size of the last layout."""
        return self._size

    # Tree access

    @property
    def root(self) -> Node:
        return self._nodes[self._root]

    def node(self, node_id: str) -> Node:
        """Find a node by its id."""
        for node in preorder(self._nodes, self._root):
            if node.name == node_id:
                return node
        raise NotFoundError(f"no container with id {node_id!r}")

    def nodes(self) -> Iterator[Node]:
        """All nodes in pre-order."""
        return preorder(self._nodes, self._root)

    def leaves(self) -> Iterator[Node]:
        """All leaves in pre-order."""
        return leaves(self._nodes, self._root)

    def is_attached(self, node: Node) -> bool:
        """Whether node and its widget are still part of the tree, updates replace nodes."""
        current = self._nodes.get(node.index)
        return current is not None and current.widget is node.widget

    def leaf_at(self, point: Point) -> Optional[Node]:
        """The first leaf in pre-order whose area contains point."""
        for node in self.leaves():
            if node.area.contains(point):
                return node
        return None

    # Focus

    @property
    def focused(self) -> Optional[Node]:
        """The focused leaf, None before the first layout or without focusable leaves."""
        index = self._focus.focused
        return self._nodes.get(index) if index is not None else None

    def is_focused(self, node: Node) -> bool:
        return self._focus.focused == node.index

    def focus(self, node_id: str) -> None:
        """Focus the node with the given id, for a split its first focusable leaf."""
        self._focus.settle(self._nodes, self._root, self.node(node_id).index)

    def focus_leaf(self, node: Node) -> None:
        """Focus a leaf obtained from this container."""
        self._focus.settle(self._nodes, self._root, node.index)

    def focus_binding(self, event: KeyEvent) -> Optional[FocusBinding]:
        """The focus move bound to the key of event, if any."""
        for key, binding in self._bindings.focus.items():
            if event.matches(key):
                return binding
        return None

    def move_focus(self, binding: FocusBinding) -> bool:
        """Apply a focus move, False when it doesn't apply to the focused leaf."""
        return self._focus.move(self._nodes, self._root, binding)

    def global_key_handler(self, event: KeyEvent) -> Optional[KeyHandler]:
        for key, handler in self._bindings.global_keys.items():
            if event.matches(key):
                return handler
        return None
