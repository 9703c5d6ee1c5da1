"""Tests for the container tree: options, layout and updates."""

import pytest

from conftest import key

from tiledash.container import (
    ID,
    AlignHorizontal,
    AlignVertical,
    Border,
    BorderTitle,
    Bottom,
    Clear,
    Container,
    GlobalKey,
    KeyFocusGroups,
    KeyFocusNext,
    Left,
    MarginLeft,
    MarginTop,
    PaddingLeft,
    PlaceWidget,
    Right,
    SplitFixed,
    SplitFixedFromEnd,
    SplitHorizontal,
    SplitPercent,
    SplitVertical,
    Top,
)
from tiledash.core.align import Horizontal, Vertical
from tiledash.core.geometry import Point, Rect, Size
from tiledash.errors import ConfigError, NotFoundError
from tiledash.terminal.api import Key
from tiledash.terminal.fake import FakeDisplay
from tiledash.widgets import Mirror, WidgetOptions


def fixed(width: int, height: int) -> Mirror:
    size = Size(width, height)
    return Mirror(WidgetOptions(minimum_size=size, maximum_size=size))


class TestLayout:
    """Tests for area assignment."""

    def test_single_leaf(self, display: FakeDisplay) -> None:
        container = Container(display, PlaceWidget(Mirror()))
        assert container.root.widget_area == Rect.of(0, 0, 40, 12)
        assert not container.root.resize_needed

    def test_border_and_split(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            Border(),
            SplitVertical(Left(ID("left")), Right(ID("right")), SplitPercent(25)),
        )
        assert container.root.inner == Rect.of(1, 1, 39, 11)
        assert container.node("left").area == Rect.of(1, 1, 11, 11)
        assert container.node("right").area == Rect.of(11, 1, 39, 11)

    def test_fixed_splits(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            SplitHorizontal(
                Top(ID("top")),
                Bottom(SplitVertical(Left(ID("a")), Right(ID("b")), SplitFixedFromEnd(5))),
                SplitFixed(3),
            ),
        )
        assert container.node("top").area == Rect.of(0, 0, 40, 3)
        assert container.node("a").area == Rect.of(0, 3, 35, 12)
        assert container.node("b").area == Rect.of(35, 3, 40, 12)

    def test_margin_and_padding(self, display: FakeDisplay) -> None:
        container = Container(display, MarginTop(2), MarginLeft(3), PaddingLeft(1), PlaceWidget(Mirror()))
        root = container.root
        assert root.area == Rect.of(3, 2, 40, 12)
        assert root.widget_area == Rect.of(4, 2, 40, 12)

    def test_alignment_of_capped_widget(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            AlignHorizontal(Horizontal.CENTER),
            AlignVertical(Vertical.BOTTOM),
            PlaceWidget(fixed(10, 4)),
        )
        assert container.root.widget_area == Rect.of(15, 8, 25, 12)

    def test_ratio(self, display: FakeDisplay) -> None:
        container = Container(display, PlaceWidget(Mirror(WidgetOptions(ratio=Size(1, 1)))))
        assert container.root.widget_area == Rect.of(0, 0, 12, 12)

    def test_too_small_for_widget(self, make_display) -> None:
        container = Container(make_display(2, 2), PlaceWidget(Mirror()))
        assert container.root.resize_needed
        assert container.root.widget_area.empty

    def test_too_small_to_split_keeps_siblings(self, make_display) -> None:
        container = Container(
            make_display(10, 4),
            SplitVertical(
                Left(ID("narrow"), SplitVertical(Left(ID("x")), Right(ID("y")))),
                Right(ID("wide"), PlaceWidget(Mirror())),
                SplitFixed(1),
            ),
        )
        assert container.node("narrow").resize_needed
        assert container.node("x").area.empty
        assert not container.node("wide").resize_needed
        assert container.node("wide").widget_area == Rect.of(1, 0, 10, 4)

    def test_relayout_on_new_size(self, display: FakeDisplay) -> None:
        container = Container(display, PlaceWidget(Mirror()))
        container.relayout(Size(20, 5))
        assert container.size == Size(20, 5)
        assert container.root.widget_area == Rect.of(0, 0, 20, 5)

    def test_leaf_at_prefers_first_leaf(self, display: FakeDisplay) -> None:
        container = Container(
            display,
            SplitVertical(Left(ID("left")), Right(ID("right"))),
        )
        assert container.leaf_at(Point(5, 5)).name == "left"
        assert container.leaf_at(Point(25, 5)).name == "right"
        assert container.leaf_at(Point(40, 5)) is None


class TestOptions:
    """Tests for option validation and conflicts."""

    def test_widget_and_split_conflict(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, PlaceWidget(Mirror()), SplitVertical(Left(), Right()))

    def test_invalid_percentage(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, SplitVertical(Left(), Right(), SplitPercent(100)))

    def test_invalid_fixed(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, SplitHorizontal(Top(), Bottom(), SplitFixed(0)))

    def test_wrong_sides(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, SplitVertical(Top(), Bottom()))

    def test_duplicate_ids(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, SplitVertical(Left(ID("same")), Right(ID("same"))))

    def test_not_an_option(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, "border")

    def test_not_a_widget(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, PlaceWidget(object()))

    def test_negative_padding(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, PaddingLeft(-1))

    def test_negative_focus_group(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, KeyFocusGroups(-1))

    def test_key_bound_twice(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, KeyFocusNext(Key.TAB), GlobalKey(Key.TAB, print))

    def test_root_only_options(self, display: FakeDisplay) -> None:
        with pytest.raises(ConfigError):
            Container(display, SplitVertical(Left(KeyFocusNext(Key.TAB)), Right()))


class TestUpdate:
    """Tests for Container.update()."""

    def test_replace_widget(self, display: FakeDisplay) -> None:
        first, second = Mirror(), Mirror()
        container = Container(display, ID("root"), PlaceWidget(first))
        container.update("root", PlaceWidget(second))
        assert container.root.widget is second

    def test_split_after_clear(self, display: FakeDisplay) -> None:
        container = Container(display, ID("root"), PlaceWidget(Mirror()))
        with pytest.raises(ConfigError):
            container.update("root", SplitVertical(Left(), Right()))
        container.update("root", SplitVertical(Left(ID("l")), Right(ID("r"))), Clear())
        assert container.root.widget is None
        assert container.node("l").area == Rect.of(0, 0, 20, 12)

    def test_failed_update_leaves_tree_unchanged(self, display: FakeDisplay) -> None:
        container = Container(display, ID("root"), SplitVertical(Left(ID("l")), Right(ID("r"))))
        with pytest.raises(ConfigError):
            container.update("root", SplitHorizontal(Top(ID("t")), Bottom(ID("t"))))
        assert container.node("l").area == Rect.of(0, 0, 20, 12)
        with pytest.raises(NotFoundError):
            container.node("t")

    def test_unknown_id(self, display: FakeDisplay) -> None:
        container = Container(display)
        with pytest.raises(NotFoundError, match="no container with id 'missing'"):
            container.update("missing", Border())

    def test_update_merges_options(self, display: FakeDisplay) -> None:
        container = Container(display, ID("root"), Border(), PlaceWidget(Mirror()))
        container.update("root", BorderTitle("hello"))
        assert container.root.has_border
        assert container.root.border_title == "hello"

    def test_resplit_drops_old_subtree(self, display: FakeDisplay) -> None:
        container = Container(display, ID("root"), SplitVertical(Left(ID("old")), Right()))
        container.update("root", SplitHorizontal(Top(ID("new")), Bottom()))
        with pytest.raises(NotFoundError):
            container.node("old")
        assert len(list(container.nodes())) == 3

    def test_later_update_rebinds_key(self, display: FakeDisplay) -> None:
        calls = []
        container = Container(display, ID("root"), GlobalKey('q', lambda e: calls.append("first")))
        container.update("root", GlobalKey('q', lambda e: calls.append("second")))
        container.global_key_handler(key('q'))(key('q'))
        assert calls == ["second"]
