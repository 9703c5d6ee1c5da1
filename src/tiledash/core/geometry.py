"""Geometry - points, sizes and rectangles plus the pure helpers the layout uses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tiledash.errors import SizeError


@dataclass(frozen=True, slots=True)
class Point:
    """A cell coordinate, x grows to the right and y grows down."""
    x: int = 0
    y: int = 0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True, slots=True)
class Size:
    """Width and height in cells. A zero on an axis means "unbounded" for maximum sizes."""
    width: int = 0
    height: int = 0

    def __str__(self) -> str:
        return f"({self.width},{self.height})"


@dataclass(frozen=True, slots=True)
class Rect:
    """
    A half-open rectangle, min is inclusive and max is exclusive.

    Invariant: min.x <= max.x and min.y <= max.y.
    """
    min: Point = Point()
    max: Point = Point()

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise ValueError(f"invalid rectangle, min {self.min} must not exceed max {self.max}")

    @classmethod
    def of(cls, x0: int, y0: int, x1: int, y1: int) -> "Rect":
        """Rectangle from two corners, like image.Rect."""
        return cls(Point(x0, y0), Point(x1, y1))

    @classmethod
    def from_size(cls, size: Size, origin: Point = Point()) -> "Rect":
        if size.width < 0 or size.height < 0:
            raise ValueError(f"size cannot be negative, got {size}")
        return cls(origin, Point(origin.x + size.width, origin.y + size.height))

    @property
    def width(self) -> int:
        return self.max.x - self.min.x

    @property
    def height(self) -> int:
        return self.max.y - self.min.y

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, point: Point) -> bool:
        """Check if the point falls inside the rectangle."""
        return (
            self.min.x <= point.x < self.max.x
            and self.min.y <= point.y < self.max.y
        )

    def inside(self, other: "Rect") -> bool:
        """Check if this rectangle fits completely inside of other."""
        if self.empty:
            return True
        return (
            other.min.x <= self.min.x and self.max.x <= other.max.x
            and other.min.y <= self.min.y and self.max.y <= other.max.y
        )

    def translate(self, offset: Point) -> "Rect":
        return Rect(self.min + offset, self.max + offset)

    def points(self):
        """Iterate over all points, row by row."""
        for y in range(self.min.y, self.max.y):
            for x in range(self.min.x, self.max.x):
                yield Point(x, y)


class Orientation(Enum):
    """Axis along which a split divides its area."""
    HORIZONTAL = "horizontal"  # Top and bottom
    VERTICAL = "vertical"      # Left and right


def exclude_border(area: Rect) -> Rect:
    """
    Return the area inside a 1-cell border drawn around area.

    Areas too small to hold anything inside their border collapse to an
    empty rectangle at the top left corner.
    """
    if area.width < 3 or area.height < 3:
        return Rect(area.min, area.min)
    return Rect(
        Point(area.min.x + 1, area.min.y + 1),
        Point(area.max.x - 1, area.max.y - 1),
    )


def shrink(area: Rect, top: int = 0, right: int = 0, bottom: int = 0, left: int = 0) -> Rect:
    """
    Remove the given number of cells from each side of area.

    When the removed cells exceed the area, an empty rectangle is returned.
    """
    if min(top, right, bottom, left) < 0:
        raise ValueError("cannot shrink by a negative number of cells")
    x0 = area.min.x + left
    y0 = area.min.y + top
    x1 = area.max.x - right
    y1 = area.max.y - bottom
    if x0 >= x1 or y0 >= y1:
        return Rect(area.min, area.min)
    return Rect.of(x0, y0, x1, y1)


def _axis_length(area: Rect, orientation: Orientation) -> int:
    if orientation == Orientation.HORIZONTAL:
        return area.height
    return area.width


def _cut(area: Rect, orientation: Orientation, primary: int) -> tuple[Rect, Rect]:
    if orientation == Orientation.HORIZONTAL:
        cut = area.min.y + primary
        return (
            Rect(area.min, Point(area.max.x, cut)),
            Rect(Point(area.min.x, cut), area.max),
        )
    cut = area.min.x + primary
    return (
        Rect(area.min, Point(cut, area.max.y)),
        Rect(Point(cut, area.min.y), area.max),
    )


def split_percent(area: Rect, orientation: Orientation, percent: int) -> tuple[Rect, Rect]:
    """
    Split area into two, the first one getting percent of the cells.

    The primary share is rounded half up and clamped so that each side keeps
    at least one cell. The two results always tile area exactly.

    Raises:
        ValueError: percent is outside of 1..99.
        SizeError: the axis has fewer than two cells.
    """
    if not 0 < percent < 100:
        raise ValueError(f"invalid split percentage {percent}, must be in range 1..99")
    length = _axis_length(area, orientation)
    if length < 2:
        raise SizeError(f"cannot split {length} cell(s) into two non-empty parts")
    primary = (length * percent * 2 + 100) // 200
    primary = max(1, min(primary, length - 1))
    return _cut(area, orientation, primary)


def split_fixed(
    area: Rect,
    orientation: Orientation,
    cells: int,
    from_end: bool = False,
) -> tuple[Rect, Rect]:
    """
    Split area reserving exactly cells for one side.

    The primary (first) side gets the cells unless from_end is set, in which
    case the secondary side does. The reservation is clamped so that the
    other side keeps at least one cell.

    Raises:
        ValueError: cells is smaller than one.
        SizeError: the axis has fewer than two cells.
    """
    if cells < 1:
        raise ValueError(f"invalid fixed split size {cells}, must be a positive number of cells")
    length = _axis_length(area, orientation)
    if length < 2:
        raise SizeError(f"cannot split {length} cell(s) into two non-empty parts")
    reserved = min(cells, length - 1)
    primary = length - reserved if from_end else reserved
    return _cut(area, orientation, primary)


def with_ratio(area: Rect, ratio: Size) -> Rect:
    """
    Return the largest rectangle anchored at area.min with the given aspect ratio.

    A zero ratio returns area unchanged.
    """
    if ratio == Size():
        return area
    if ratio.width <= 0 or ratio.height <= 0:
        raise ValueError(f"invalid ratio {ratio}, both axes must be positive")
    width = area.width
    height = area.height
    if width * ratio.height > height * ratio.width:
        width = height * ratio.width // ratio.height
    else:
        height = width * ratio.height // ratio.width
    return Rect.from_size(Size(width, height), area.min)


def cap_size(area: Rect, maximum: Size) -> Rect:
    """Limit area to maximum, a zero axis of maximum means unbounded."""
    width = area.width if maximum.width <= 0 else min(area.width, maximum.width)
    height = area.height if maximum.height <= 0 else min(area.height, maximum.height)
    return Rect.from_size(Size(width, height), area.min)
