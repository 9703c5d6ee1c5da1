"""Keyboard focus tracking across the leaves of a container tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from tiledash.container.node import Node, leaves

logger = logging.getLogger(__name__)


class FocusMove(Enum):
    """Focus changes that can be bound to keys."""
    NEXT = auto()
    PREVIOUS = auto()
    GROUP_NEXT = auto()
    GROUP_PREVIOUS = auto()
    NEXT_GROUP = auto()
    PREVIOUS_GROUP = auto()


@dataclass(frozen=True)
class FocusBinding:
    """A focus move bound to a key, groups restrict GROUP_NEXT and GROUP_PREVIOUS."""
    move: FocusMove
    groups: tuple[int, ...] = ()


def focusable(node: Node) -> bool:
    """Whether Tab style cycling stops at the node."""
    return node.is_leaf and node.widget is not None and not node.focus_skip


class FocusTracker:
    """
    Tracks which leaf of the tree is focused.

    The focused leaf is kept as an index into the node arena. Before the
    first layout and in trees without focusable leaves nothing is focused.
    """

    def __init__(self) -> None:
        self.focused: Optional[int] = None

    def settle(self, nodes: dict[int, Node], root: int, requested: Optional[int] = None) -> None:
        """
        Make the focus valid for the current tree.

        A requested node gets the focus, for a split that is its first
        focusable leaf. A focused node that no longer exists as a leaf
        falls back to the first focusable leaf of the tree.
        """
        if requested is not None and requested in nodes:
            node = nodes[requested]
            if node.is_leaf:
                self._set(node.index)
                return
            target = self.first(nodes, requested)
            if target is not None:
                self._set(target)
                return
        current = nodes.get(self.focused) if self.focused is not None else None
        if current is None or not current.is_leaf:
            self._set(self.first(nodes, root))

    @staticmethod
    def first(nodes: dict[int, Node], root: int) -> Optional[int]:
        for node in leaves(nodes, root):
            if focusable(node):
                return node.index
        return None

    def _set(self, index: Optional[int]) -> None:
        if index != self.focused:
            logger.debug("focus moved from %s to %s", self.focused, index)
        self.focused = index

    def move(self, nodes: dict[int, Node], root: int, binding: FocusBinding) -> bool:
        """
        Apply a bound focus move.

        Returns False when the move doesn't apply, which only happens for
        group moves while the focused leaf isn't a member of the bound groups.
        """
        order = list(leaves(nodes, root))
        if binding.move in (FocusMove.NEXT, FocusMove.PREVIOUS):
            step = 1 if binding.move == FocusMove.NEXT else -1
            self._set(self._cycle(order, [n for n in order if focusable(n)], step))
            return True

        if binding.move in (FocusMove.GROUP_NEXT, FocusMove.GROUP_PREVIOUS):
            current = nodes.get(self.focused) if self.focused is not None else None
            if current is None:
                return False
            group = next((g for g in binding.groups if g in current.groups), None)
            if group is None:
                return False
            step = 1 if binding.move == FocusMove.GROUP_NEXT else -1
            members = [n for n in order if n.widget is not None and group in n.groups]
            self._set(self._cycle(order, members, step))
            return True

        step = 1 if binding.move == FocusMove.NEXT_GROUP else -1
        self._set(self._jump_group(order, step))
        return True

    def _cycle(self, order: list[Node], candidates: list[Node], step: int) -> Optional[int]:
        """The candidate after (or before) the focused leaf in pre-order, wrapping around."""
        if not candidates:
            return self.focused
        positions = {node.index: i for i, node in enumerate(order)}
        if self.focused not in positions:
            return candidates[0].index if step > 0 else candidates[-1].index
        here = positions[self.focused]
        if step > 0:
            after = [n for n in candidates if positions[n.index] > here]
            return (after[0] if after else candidates[0]).index
        before = [n for n in candidates if positions[n.index] < here]
        return (before[-1] if before else candidates[-1]).index

    def _jump_group(self, order: list[Node], step: int) -> Optional[int]:
        """First leaf of the next (or previous) focus group, groups ordered by id."""
        holders = [n for n in order if n.widget is not None]
        groups = sorted({g for n in holders for g in n.groups})
        if not groups:
            return self.focused
        current = next((n for n in order if n.index == self.focused), None)
        if current is None:
            target = groups[0] if step > 0 else groups[-1]
        else:
            here = min(current.groups)
            if step > 0:
                target = next((g for g in groups if g > here), groups[0])
            else:
                target = next((g for g in reversed(groups) if g < here), groups[-1])
        return next(n.index for n in holders if target in n.groups)
