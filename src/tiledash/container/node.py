"""Container tree nodes - split policies and the node record kept in the arena."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from tiledash.core.align import Horizontal, Vertical
from tiledash.core.color import Color
from tiledash.core.draw import LineStyle
from tiledash.core.geometry import Orientation, Rect, split_fixed, split_percent
from tiledash.errors import ConfigError
from tiledash.widgets.base import Widget

# Focus group of leaves that don't declare any.
DEFAULT_FOCUS_GROUP = 0


class SplitPolicy:
    """How a split divides its area between the primary and secondary child."""

    def validate(self) -> None:
        raise NotImplementedError

    def split(self, area: Rect, orientation: Orientation) -> tuple[Rect, Rect]:
        raise NotImplementedError


@dataclass(frozen=True)
class SplitPercent(SplitPolicy):
    """The primary child gets percent of the cells, rounded half up."""
    percent: int

    def validate(self) -> None:
        if not 0 < self.percent < 100:
            raise ConfigError(f"invalid split percentage {self.percent}, must be in range 1..99")

    def split(self, area: Rect, orientation: Orientation) -> tuple[Rect, Rect]:
        return split_percent(area, orientation, self.percent)


@dataclass(frozen=True)
class SplitFixed(SplitPolicy):
    """The primary child gets exactly cells, as long as one remains for the secondary."""
    cells: int

    def validate(self) -> None:
        if self.cells < 1:
            raise ConfigError(f"invalid fixed split size {self.cells}, must be a positive number of cells")

    def split(self, area: Rect, orientation: Orientation) -> tuple[Rect, Rect]:
        return split_fixed(area, orientation, self.cells)


@dataclass(frozen=True)
class SplitFixedFromEnd(SplitFixed):
    """The secondary child gets exactly cells, as long as one remains for the primary."""

    def split(self, area: Rect, orientation: Orientation) -> tuple[Rect, Rect]:
        return split_fixed(area, orientation, self.cells, from_end=True)


@dataclass(frozen=True)
class Sides:
    """Cells reserved on each side of an area."""
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


_EMPTY = Rect()


@dataclass
class Node:
    """
    One node of the container tree.

    A node is a split when it has children and a leaf otherwise. Nodes only
    reference their children, by index into the container's arena.
    The last block of fields is computed by the layout.
    """
    index: int
    name: str = ""

    # Split
    orientation: Optional[Orientation] = None
    policy: SplitPolicy = field(default_factory=lambda: SplitPercent(50))
    children: Optional[tuple[int, int]] = None

    # Leaf
    widget: Optional[Widget] = None
    h_align: Horizontal = Horizontal.LEFT
    v_align: Vertical = Vertical.TOP
    padding: Sides = Sides()

    # Decoration
    border: LineStyle = LineStyle.NONE
    border_title: str = ""
    border_title_align: Horizontal = Horizontal.LEFT
    border_color: Optional[Color] = None
    focused_color: Optional[Color] = None
    margin: Sides = Sides()

    # Focus
    focus_groups: tuple[int, ...] = ()
    focus_skip: bool = False

    # Layout results
    area: Rect = _EMPTY
    inner: Rect = _EMPTY
    widget_area: Rect = _EMPTY
    resize_needed: bool = False

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def has_border(self) -> bool:
        return self.border != LineStyle.NONE

    @property
    def groups(self) -> tuple[int, ...]:
        """Focus groups this node belongs to."""
        return self.focus_groups or (DEFAULT_FOCUS_GROUP,)

    @property
    def label(self) -> str:
        """Human readable identification for errors and logs."""
        return self.name or f"<node {self.index}>"


def preorder(nodes: dict[int, Node], root: int) -> Iterator[Node]:
    """Walk the tree rooted at root, parents before children, primary child first."""
    stack = [root]
    while stack:
        node = nodes[stack.pop()]
        yield node
        if node.children is not None:
            primary, secondary = node.children
            stack.append(secondary)
            stack.append(primary)


def leaves(nodes: dict[int, Node], root: int) -> Iterator[Node]:
    """Leaves of the tree rooted at root in pre-order."""
    return (node for node in preorder(nodes, root) if node.is_leaf)
