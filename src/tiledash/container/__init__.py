"""The container split tree, its options and focus handling."""

from tiledash.container.container import Container
from tiledash.container.focus import FocusBinding, FocusMove
from tiledash.container.node import Node, SplitFixed, SplitFixedFromEnd, SplitPercent, SplitPolicy
from tiledash.container.options import (
    ID,
    AlignHorizontal,
    AlignVertical,
    Border,
    BorderColor,
    BorderTitle,
    BorderTitleAlignCenter,
    BorderTitleAlignLeft,
    BorderTitleAlignRight,
    Bottom,
    Clear,
    Focused,
    FocusedColor,
    GlobalKey,
    KeyFocusGroups,
    KeyFocusGroupsNext,
    KeyFocusGroupsPrevious,
    KeyFocusNext,
    KeyFocusNextGroup,
    KeyFocusPrevious,
    KeyFocusPreviousGroup,
    KeyFocusSkip,
    Left,
    MarginBottom,
    MarginLeft,
    MarginRight,
    MarginTop,
    Option,
    PaddingBottom,
    PaddingLeft,
    PaddingRight,
    PaddingTop,
    PlaceWidget,
    Right,
    SplitHorizontal,
    SplitVertical,
    Top,
)

__all__ = [
    "Container",
    "Node",
    "Option",
    # Structure
    "ID",
    "Clear",
    "PlaceWidget",
    "SplitHorizontal",
    "SplitVertical",
    "Top",
    "Bottom",
    "Left",
    "Right",
    "SplitPolicy",
    "SplitPercent",
    "SplitFixed",
    "SplitFixedFromEnd",
    # Decoration
    "Border",
    "BorderTitle",
    "BorderTitleAlignLeft",
    "BorderTitleAlignCenter",
    "BorderTitleAlignRight",
    "BorderColor",
    "FocusedColor",
    # Placement
    "AlignHorizontal",
    "AlignVertical",
    "PaddingTop",
    "PaddingRight",
    "PaddingBottom",
    "PaddingLeft",
    "MarginTop",
    "MarginRight",
    "MarginBottom",
    "MarginLeft",
    # Focus
    "Focused",
    "KeyFocusGroups",
    "KeyFocusSkip",
    "KeyFocusNext",
    "KeyFocusPrevious",
    "KeyFocusGroupsNext",
    "KeyFocusGroupsPrevious",
    "KeyFocusNextGroup",
    "KeyFocusPreviousGroup",
    "GlobalKey",
    "FocusBinding",
    "FocusMove",
]
