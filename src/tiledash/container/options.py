"""
Options that configure nodes of the container tree.

Options are applied to a staged copy of the tree, which the container
commits only after every option was applied and the result validated.
Applying an option either mutates the staged node or raises ConfigError.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from tiledash.container.focus import FocusBinding, FocusMove
from tiledash.container.node import Node, Sides, SplitPercent, SplitPolicy, preorder
from tiledash.core.align import Horizontal, Vertical
from tiledash.core.color import Color
from tiledash.core.draw import LineStyle
from tiledash.core.geometry import Orientation
from tiledash.errors import ConfigError
from tiledash.terminal.api import Key, KeyBinding, KeyEvent
from tiledash.widgets.base import Widget

KeyHandler = Callable[[KeyEvent], None]


@dataclass
class KeyBindings:
    """Keys the container handles itself, configured on the root."""
    focus: dict[KeyBinding, FocusBinding] = dataclasses.field(default_factory=dict)
    global_keys: dict[KeyBinding, KeyHandler] = dataclasses.field(default_factory=dict)

    def copy(self) -> "KeyBindings":
        return KeyBindings(dict(self.focus), dict(self.global_keys))


class Stage:
    """A working copy of the container tree that options are applied to."""

    def __init__(self, nodes: dict[int, Node], root: int, next_index: int, bindings: KeyBindings) -> None:
        self.nodes = {index: dataclasses.replace(node) for index, node in nodes.items()}
        self.root = root
        self.next_index = next_index
        self.bindings = bindings.copy()
        self.requested_focus: Optional[int] = None
        self._bound: set[KeyBinding] = set()

    def new_node(self) -> Node:
        node = Node(self.next_index)
        self.nodes[node.index] = node
        self.next_index += 1
        return node

    def remove_children(self, node: Node) -> None:
        """Drop every descendant of node, leaving it a leaf."""
        if node.children is not None:
            for child in node.children:
                for descendant in list(preorder(self.nodes, child)):
                    del self.nodes[descendant.index]
        node.children = None
        node.orientation = None

    def bind(self, key: KeyBinding, binding: Union[FocusBinding, KeyHandler]) -> None:
        if not isinstance(key, Key) and not (isinstance(key, str) and len(key) == 1):
            raise ConfigError(f"invalid key binding {key!r}, must be a Key or a single character")
        if key in self._bound:
            raise ConfigError(f"key {key} is bound more than once")
        self._bound.add(key)
        self.bindings.focus.pop(key, None)
        self.bindings.global_keys.pop(key, None)
        if isinstance(binding, FocusBinding):
            self.bindings.focus[key] = binding
        else:
            self.bindings.global_keys[key] = binding

    def apply(self, index: int, options: Iterable["Option"]) -> None:
        """Apply options to the node, Clear() first regardless of its position."""
        node = self.nodes[index]
        options = tuple(options)
        for opt in options:
            if not isinstance(opt, Option):
                raise ConfigError(f"invalid container option {opt!r}")

        content = [opt for opt in options if isinstance(opt, (PlaceWidget, _Split))]
        if len(content) > 1:
            raise ConfigError(
                f"node {node.label} can hold either one widget or one split, got {len(content)} of them"
            )
        for opt in options:
            if isinstance(opt, Clear):
                opt.apply(self, node)
        if content and isinstance(content[0], PlaceWidget) and not node.is_leaf:
            raise ConfigError(f"cannot place a widget into node {node.label}, it is split, use Clear() first")
        if content and isinstance(content[0], _Split) and node.widget is not None:
            raise ConfigError(f"cannot split node {node.label}, it holds a widget, use Clear() first")

        for opt in options:
            if not isinstance(opt, Clear):
                opt.apply(self, node)

    def validate(self) -> None:
        seen: dict[str, int] = {}
        for node in preorder(self.nodes, self.root):
            if not node.name:
                continue
            if node.name in seen:
                raise ConfigError(f"duplicate container id {node.name!r}")
            seen[node.name] = node.index


class Option:
    """Base of all container options."""

    def apply(self, stage: Stage, node: Node) -> None:
        raise NotImplementedError


class _RootOption(Option):
    def apply(self, stage: Stage, node: Node) -> None:
        if node.index != stage.root:
            raise ConfigError(f"{type(self).__name__} can only be set on the root container")


# Identification and content


@dataclass(frozen=True)
class ID(Option):
    """Name the node, so that it can be updated later."""
    name: str

    def apply(self, stage: Stage, node: Node) -> None:
        if not self.name:
            raise ConfigError("container id cannot be empty")
        node.name = self.name


@dataclass(frozen=True)
class Clear(Option):
    """Remove the widget and children, applied before the other options of the update."""

    def apply(self, stage: Stage, node: Node) -> None:
        stage.remove_children(node)
        node.widget = None


@dataclass(frozen=True)
class PlaceWidget(Option):
    """Put a widget into a leaf, replacing any previous one."""
    widget: Widget

    def apply(self, stage: Stage, node: Node) -> None:
        if not isinstance(self.widget, Widget):
            raise ConfigError(f"{self.widget!r} doesn't implement the widget capability")
        node.widget = self.widget


class _Child:
    """Options for one side of a split."""

    def __init__(self, *options: Option) -> None:
        self.options = options

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.options!r}"


class Top(_Child):
    pass


class Bottom(_Child):
    pass


class Left(_Child):
    pass


class Right(_Child):
    pass


class _Split(Option):
    orientation: Orientation
    sides: tuple[type, type]

    def __init__(self, first: _Child, second: _Child, policy: SplitPolicy = SplitPercent(50)) -> None:
        self.first = first
        self.second = second
        self.policy = policy

    def apply(self, stage: Stage, node: Node) -> None:
        name = type(self).__name__
        if not isinstance(self.first, self.sides[0]) or not isinstance(self.second, self.sides[1]):
            raise ConfigError(f"{name} expects {self.sides[0].__name__}() and {self.sides[1].__name__}()")
        if not isinstance(self.policy, SplitPolicy):
            raise ConfigError(f"invalid split policy {self.policy!r}")
        self.policy.validate()
        stage.remove_children(node)
        primary, secondary = stage.new_node(), stage.new_node()
        node.orientation = self.orientation
        node.policy = self.policy
        node.children = (primary.index, secondary.index)
        stage.apply(primary.index, self.first.options)
        stage.apply(secondary.index, self.second.options)


class SplitHorizontal(_Split):
    """Split the node into a top and a bottom part."""
    orientation = Orientation.HORIZONTAL
    sides = (Top, Bottom)


class SplitVertical(_Split):
    """Split the node into a left and a right part."""
    orientation = Orientation.VERTICAL
    sides = (Left, Right)


# Decoration


@dataclass(frozen=True)
class Border(Option):
    line_style: LineStyle = LineStyle.LIGHT

    def apply(self, stage: Stage, node: Node) -> None:
        node.border = self.line_style


@dataclass(frozen=True)
class BorderTitle(Option):
    text: str

    def apply(self, stage: Stage, node: Node) -> None:
        node.border_title = self.text


@dataclass(frozen=True)
class BorderTitleAlignLeft(Option):
    def apply(self, stage: Stage, node: Node) -> None:
        node.border_title_align = Horizontal.LEFT


@dataclass(frozen=True)
class BorderTitleAlignCenter(Option):
    def apply(self, stage: Stage, node: Node) -> None:
        node.border_title_align = Horizontal.CENTER


@dataclass(frozen=True)
class BorderTitleAlignRight(Option):
    def apply(self, stage: Stage, node: Node) -> None:
        node.border_title_align = Horizontal.RIGHT


@dataclass(frozen=True)
class BorderColor(Option):
    color: Optional[Color]

    def apply(self, stage: Stage, node: Node) -> None:
        node.border_color = self.color


@dataclass(frozen=True)
class FocusedColor(Option):
    """Border color used while the node is focused."""
    color: Optional[Color]

    def apply(self, stage: Stage, node: Node) -> None:
        node.focused_color = self.color


# Placement


@dataclass(frozen=True)
class AlignHorizontal(Option):
    align: Horizontal

    def apply(self, stage: Stage, node: Node) -> None:
        node.h_align = self.align


@dataclass(frozen=True)
class AlignVertical(Option):
    align: Vertical

    def apply(self, stage: Stage, node: Node) -> None:
        node.v_align = self.align


@dataclass(frozen=True)
class _Spacing(Option):
    cells: int

    # Node attribute and side, set by subclasses.
    target = ""
    side = ""

    def apply(self, stage: Stage, node: Node) -> None:
        if self.cells < 0:
            raise ConfigError(f"invalid {type(self).__name__}({self.cells}), must be zero or positive")
        current: Sides = getattr(node, self.target)
        setattr(node, self.target, dataclasses.replace(current, **{self.side: self.cells}))


class PaddingTop(_Spacing):
    target, side = "padding", "top"


class PaddingRight(_Spacing):
    target, side = "padding", "right"


class PaddingBottom(_Spacing):
    target, side = "padding", "bottom"


class PaddingLeft(_Spacing):
    target, side = "padding", "left"


class MarginTop(_Spacing):
    target, side = "margin", "top"


class MarginRight(_Spacing):
    target, side = "margin", "right"


class MarginBottom(_Spacing):
    target, side = "margin", "bottom"


class MarginLeft(_Spacing):
    target, side = "margin", "left"


# Focus


@dataclass(frozen=True)
class Focused(Option):
    """Focus this node once the update is committed."""

    def apply(self, stage: Stage, node: Node) -> None:
        stage.requested_focus = node.index


class KeyFocusGroups(Option):
    """Make the node a member of the focus groups."""

    def __init__(self, *groups: int) -> None:
        self.groups = groups

    def apply(self, stage: Stage, node: Node) -> None:
        for group in self.groups:
            if not isinstance(group, int) or group < 0:
                raise ConfigError(f"invalid focus group {group!r}, must be zero or a positive integer")
        node.focus_groups = tuple(dict.fromkeys(self.groups))


@dataclass(frozen=True)
class KeyFocusSkip(Option):
    """Leave the node out of KeyFocusNext and KeyFocusPrevious cycling."""

    def apply(self, stage: Stage, node: Node) -> None:
        node.focus_skip = True


# Root only key bindings


@dataclass(frozen=True)
class KeyFocusNext(_RootOption):
    """Key that moves focus to the next focusable leaf."""
    key: KeyBinding

    def apply(self, stage: Stage, node: Node) -> None:
        super().apply(stage, node)
        stage.bind(self.key, FocusBinding(FocusMove.NEXT))


@dataclass(frozen=True)
class KeyFocusPrevious(_RootOption):
    """Key that moves focus to the previous focusable leaf."""
    key: KeyBinding

    def apply(self, stage: Stage, node: Node) -> None:
        super().apply(stage, node)
        stage.bind(self.key, FocusBinding(FocusMove.PREVIOUS))


class _GroupsOption(_RootOption):
    move: FocusMove

    def __init__(self, key: KeyBinding, *groups: int) -> None:
        self.key = key
        self.groups = groups

    def apply(self, stage: Stage, node: Node) -> None:
        super().apply(stage, node)
        if not self.groups:
            raise ConfigError(f"{type(self).__name__} needs at least one focus group")
        for group in self.groups:
            if not isinstance(group, int) or group < 0:
                raise ConfigError(f"invalid focus group {group!r}, must be zero or a positive integer")
        stage.bind(self.key, FocusBinding(self.move, tuple(self.groups)))


class KeyFocusGroupsNext(_GroupsOption):
    """Key that moves focus to the next leaf within the focused leaf's group."""
    move = FocusMove.GROUP_NEXT


class KeyFocusGroupsPrevious(_GroupsOption):
    """Key that moves focus to the previous leaf within the focused leaf's group."""
    move = FocusMove.GROUP_PREVIOUS


@dataclass(frozen=True)
class KeyFocusNextGroup(_RootOption):
    """Key that moves focus to the first leaf of the next focus group."""
    key: KeyBinding

    def apply(self, stage: Stage, node: Node) -> None:
        super().apply(stage, node)
        stage.bind(self.key, FocusBinding(FocusMove.NEXT_GROUP))


@dataclass(frozen=True)
class KeyFocusPreviousGroup(_RootOption):
    """Key that moves focus to the first leaf of the previous focus group."""
    key: KeyBinding

    def apply(self, stage: Stage, node: Node) -> None:
        super().apply(stage, node)
        stage.bind(self.key, FocusBinding(FocusMove.PREVIOUS_GROUP))


@dataclass(frozen=True)
class GlobalKey(_RootOption):
    """Run handler whenever key is pressed, before focus handling and widgets."""
    key: KeyBinding
    handler: KeyHandler

    def apply(self, stage: Stage, node: Node) -> None:
        super().apply(stage, node)
        if not callable(self.handler):
            raise ConfigError(f"handler for key {self.key} isn't callable")
        stage.bind(self.key, self.handler)
