"""Tests for keyboard focus."""

from tiledash.container import (
    ID,
    Bottom,
    Container,
    Focused,
    FocusBinding,
    FocusMove,
    KeyFocusGroups,
    KeyFocusSkip,
    Left,
    PlaceWidget,
    Right,
    SplitHorizontal,
    SplitVertical,
    Top,
)
from tiledash.terminal.fake import FakeDisplay
from tiledash.widgets import Mirror

NEXT = FocusBinding(FocusMove.NEXT)
PREVIOUS = FocusBinding(FocusMove.PREVIOUS)


def four(display: FakeDisplay, *extra) -> Container:
    """Leaves a, b, c, d in pre-order."""
    return Container(
        display,
        SplitVertical(
            Left(SplitHorizontal(Top(ID("a"), PlaceWidget(Mirror())), Bottom(ID("b"), PlaceWidget(Mirror())))),
            Right(SplitHorizontal(Top(ID("c"), PlaceWidget(Mirror())), Bottom(ID("d"), PlaceWidget(Mirror())))),
        ),
        *extra,
    )


def focused(container: Container) -> str:
    return container.focused.name


class TestFocus:
    """Tests for focus tracking."""

    def test_first_focusable_leaf_focused(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            SplitVertical(Left(ID("empty")), Right(ID("widget"), PlaceWidget(Mirror()))),
        )
        assert focused(container) == "widget"

    def test_nothing_to_focus(self, display: FakeDisplay) -> None:
        container = Container(display, SplitVertical(Left(), Right()))
        assert container.focused is None

    def test_focused_option(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            SplitVertical(Left(ID("l"), PlaceWidget(Mirror())), Right(ID("r"), Focused(), PlaceWidget(Mirror()))),
        )
        assert focused(container) == "r"

    def test_focus_by_id(self, display: FakeDisplay) -> None:
        container = four(display)
        container.focus("c")
        assert focused(container) == "c"
        assert container.is_focused(container.node("c"))

    def test_cycle_wraps(self, display: FakeDisplay) -> None:
        container = four(display)
        order = []
        for _ in range(5):
            container.move_focus(NEXT)
            order.append(focused(container))
        assert order == ["b", "c", "d", "a", "b"]
        container.move_focus(PREVIOUS)
        container.move_focus(PREVIOUS)
        assert focused(container) == "d"

    def test_skip(self, display: FakeDisplay) -> None:
        container = four(display)
        container.update("b", KeyFocusSkip())
        container.move_focus(NEXT)
        assert focused(container) == "c"

    def test_focus_survives_removal(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            ID("root"),
            SplitVertical(Left(ID("l"), PlaceWidget(Mirror())), Right(ID("r"), Focused(), PlaceWidget(Mirror()))),
        )
        container.update("root", SplitVertical(Left(ID("x"), PlaceWidget(Mirror())), Right()))
        assert focused(container) == "x"

    def test_groups(self, display: FakeDisplay) -> None:
        container = four(display)
        container.update("a", KeyFocusGroups(1))
        container.update("c", KeyFocusGroups(1, 2))
        container.update("d", KeyFocusGroups(2))
        within = FocusBinding(FocusMove.GROUP_NEXT, (1,))
        assert container.move_focus(within)
        assert focused(container) == "c"
        assert container.move_focus(within)
        assert focused(container) == "a"

        container.focus("b")
        assert not container.move_focus(within)
        assert focused(container) == "b"

    def test_group_moves_ignore_skip(self, display: FakeDisplay) -> None:
        container = four(display)
        container.update("a", KeyFocusGroups(1))
        container.update("d", KeyFocusGroups(1), KeyFocusSkip())
        assert container.move_focus(FocusBinding(FocusMove.GROUP_PREVIOUS, (1,)))
        assert focused(container) == "d"

    def test_jump_between_groups(self, display: FakeDisplay) -> None:
        container = four(display)
        container.update("c", KeyFocusGroups(3))
        container.update("d", KeyFocusGroups(5))
        # a and b belong to the default group 0.
        container.move_focus(FocusBinding(FocusMove.NEXT_GROUP))
        assert focused(container) == "c"
        container.move_focus(FocusBinding(FocusMove.NEXT_GROUP))
        assert focused(container) == "d"
        container.move_focus(FocusBinding(FocusMove.NEXT_GROUP))
        assert focused(container) == "a"
        container.move_focus(FocusBinding(FocusMove.PREVIOUS_GROUP))
        assert focused(container) == "d"
