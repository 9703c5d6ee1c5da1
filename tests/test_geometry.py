"""Tests for geometry helpers and alignment."""

import pytest

from tiledash.core.align import Horizontal, Vertical, align_rect, align_text
from tiledash.core.geometry import (
    Orientation,
    Point,
    Rect,
    Size,
    cap_size,
    exclude_border,
    shrink,
    split_fixed,
    split_percent,
    with_ratio,
)
from tiledash.errors import SizeError


class TestRect:
    """Tests for Rect."""

    def test_half_open(self) -> None:
        r = Rect.of(0, 0, 3, 2)
        assert r.size == Size(3, 2)
        assert r.contains(Point(2, 1))
        assert not r.contains(Point(3, 1))
        assert not r.contains(Point(2, 2))

    def test_inverted_rect_rejected(self) -> None:
        with pytest.raises(ValueError):
            Rect.of(3, 0, 1, 1)

    def test_empty(self) -> None:
        assert Rect.of(2, 2, 2, 5).empty
        assert not Rect.of(0, 0, 1, 1).empty

    def test_inside(self) -> None:
        outer = Rect.of(0, 0, 10, 10)
        assert Rect.of(2, 2, 10, 10).inside(outer)
        assert not Rect.of(2, 2, 11, 10).inside(outer)

    def test_points_row_by_row(self) -> None:
        assert list(Rect.of(1, 1, 3, 2).points()) == [Point(1, 1), Point(2, 1)]

    def test_str(self) -> None:
        assert str(Size(7, 3)) == "(7,3)"
        assert str(Point(1, 2)) == "(1,2)"


class TestSplits:
    """Tests for splitting areas into two."""

    def test_percent_rounds_half_up(self) -> None:
        top, bottom = split_percent(Rect.of(0, 0, 10, 5), Orientation.HORIZONTAL, 50)
        assert top == Rect.of(0, 0, 10, 3)
        assert bottom == Rect.of(0, 3, 10, 5)

    def test_percent_vertical(self) -> None:
        left, right = split_percent(Rect.of(0, 0, 10, 4), Orientation.VERTICAL, 30)
        assert left.width == 3
        assert right == Rect.of(3, 0, 10, 4)

    def test_percent_keeps_one_cell_each(self) -> None:
        left, right = split_percent(Rect.of(0, 0, 3, 1), Orientation.VERTICAL, 99)
        assert left.width == 2
        assert right.width == 1
        left, right = split_percent(Rect.of(0, 0, 3, 1), Orientation.VERTICAL, 1)
        assert left.width == 1
        assert right.width == 2

    @pytest.mark.parametrize("percent", [0, 100, -5])
    def test_percent_out_of_range(self, percent: int) -> None:
        with pytest.raises(ValueError):
            split_percent(Rect.of(0, 0, 10, 10), Orientation.VERTICAL, percent)

    def test_too_small_to_split(self) -> None:
        with pytest.raises(SizeError):
            split_percent(Rect.of(0, 0, 1, 10), Orientation.VERTICAL, 50)
        with pytest.raises(SizeError):
            split_fixed(Rect.of(0, 0, 10, 1), Orientation.HORIZONTAL, 1)

    def test_split_tiles_area(self) -> None:
        area = Rect.of(2, 3, 17, 11)
        for percent in range(1, 100):
            first, second = split_percent(area, Orientation.VERTICAL, percent)
            assert first.width + second.width == area.width
            assert first.max.x == second.min.x

    def test_fixed(self) -> None:
        top, bottom = split_fixed(Rect.of(0, 0, 10, 10), Orientation.HORIZONTAL, 3)
        assert top.height == 3
        assert bottom.height == 7

    def test_fixed_from_end(self) -> None:
        left, right = split_fixed(Rect.of(0, 0, 10, 10), Orientation.VERTICAL, 4, from_end=True)
        assert left.width == 6
        assert right.width == 4

    def test_fixed_clamped(self) -> None:
        top, bottom = split_fixed(Rect.of(0, 0, 10, 5), Orientation.HORIZONTAL, 20)
        assert top.height == 4
        assert bottom.height == 1

    def test_fixed_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            split_fixed(Rect.of(0, 0, 10, 5), Orientation.HORIZONTAL, 0)


class TestAreaHelpers:
    """Tests for border, margin, ratio and size helpers."""

    def test_exclude_border(self) -> None:
        assert exclude_border(Rect.of(0, 0, 5, 4)) == Rect.of(1, 1, 4, 3)

    def test_exclude_border_too_small(self) -> None:
        assert exclude_border(Rect.of(2, 2, 4, 4)).empty

    def test_shrink(self) -> None:
        assert shrink(Rect.of(0, 0, 10, 10), top=1, right=2, bottom=3, left=4) == Rect.of(4, 1, 8, 7)

    def test_shrink_everything(self) -> None:
        assert shrink(Rect.of(0, 0, 4, 4), left=2, right=2).empty

    def test_with_ratio(self) -> None:
        assert with_ratio(Rect.of(0, 0, 10, 10), Size(2, 1)) == Rect.of(0, 0, 10, 5)
        assert with_ratio(Rect.of(0, 0, 10, 4), Size(1, 1)) == Rect.of(0, 0, 4, 4)
        assert with_ratio(Rect.of(0, 0, 10, 4), Size()) == Rect.of(0, 0, 10, 4)

    def test_cap_size(self) -> None:
        assert cap_size(Rect.of(1, 1, 11, 11), Size(4, 0)) == Rect.of(1, 1, 5, 11)


class TestAlign:
    """Tests for alignment."""

    def test_align_rect(self) -> None:
        area = Rect.of(0, 0, 10, 5)
        assert align_rect(area, Size(4, 1), Horizontal.RIGHT, Vertical.BOTTOM) == Rect.of(6, 4, 10, 5)
        assert align_rect(area, Size(4, 1), Horizontal.CENTER, Vertical.MIDDLE) == Rect.of(3, 2, 7, 3)

    def test_align_rect_too_big(self) -> None:
        with pytest.raises(ValueError):
            align_rect(Rect.of(0, 0, 2, 2), Size(3, 1))

    def test_align_text(self) -> None:
        area = Rect.of(0, 0, 10, 3)
        assert align_text(area, "abcd", Horizontal.CENTER, Vertical.MIDDLE) == Point(3, 1)
        assert align_text(area, "a" * 20, Horizontal.RIGHT) == Point(0, 0)
