"""Colors of terminal cells and their conversion between color modes."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

RGB = tuple[int, int, int]


class ColorMode(Enum):
    """How many colors the terminal can show."""
    STANDARD_16 = "16"
    EXTENDED_256 = "256"
    TRUE_COLOR = "rgb"


# How terminals commonly render the 16 system colors, used to approximate
# other colors when only those are available.
SYSTEM_PALETTE: tuple[RGB, ...] = (
    (0, 0, 0), (170, 0, 0), (0, 170, 0), (170, 85, 0),
    (0, 0, 170), (170, 0, 170), (0, 170, 170), (170, 170, 170),
    (85, 85, 85), (255, 85, 85), (85, 255, 85), (255, 255, 85),
    (85, 85, 255), (255, 85, 255), (85, 255, 255), (255, 255, 255),
)

# Channel levels of the 6x6x6 cube at palette indexes 16-231.
CUBE_LEVELS = (0, 95, 135, 175, 215, 255)

# First index of the 24 step gray ramp closing the 256 color palette.
GRAY_START = 232


def _distance(a: RGB, b: RGB) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def palette_rgb(index: int) -> RGB:
    """RGB value of a 256 color palette index."""
    if index < 16:
        return SYSTEM_PALETTE[index]
    if index < GRAY_START:
        r, rest = divmod(index - 16, 36)
        g, b = divmod(rest, 6)
        return CUBE_LEVELS[r], CUBE_LEVELS[g], CUBE_LEVELS[b]
    level = 8 + 10 * (index - GRAY_START)
    return level, level, level


def nearest_256(rgb: RGB) -> int:
    """
    Palette index closest to rgb, either from the color cube or the gray ramp.

    The system colors are left out, terminals tend to theme them.
    """
    r, g, b = (min(range(6), key=lambda i: abs(CUBE_LEVELS[i] - c)) for c in rgb)
    cube = 16 + 36 * r + 6 * g + b
    gray = GRAY_START + min(23, max(0, round((sum(rgb) / 3 - 8) / 10)))
    if _distance(rgb, palette_rgb(gray)) < _distance(rgb, palette_rgb(cube)):
        return gray
    return cube


def nearest_16(rgb: RGB) -> int:
    """Index of the system color closest to rgb."""
    return min(range(16), key=lambda i: _distance(rgb, SYSTEM_PALETTE[i]))


@dataclass(frozen=True)
class Color:
    """
    A color of a terminal cell.

    The value is a palette index in the 16 and 256 color modes and an RGB
    triple in true color mode. The terminal's own default color isn't a
    Color, cells use None for it.
    """
    mode: ColorMode
    value: Union[int, RGB]

    BLACK: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    MAGENTA: ClassVar["Color"]
    CYAN: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    BRIGHT_BLACK: ClassVar["Color"]
    BRIGHT_RED: ClassVar["Color"]
    BRIGHT_GREEN: ClassVar["Color"]
    BRIGHT_YELLOW: ClassVar["Color"]
    BRIGHT_BLUE: ClassVar["Color"]
    BRIGHT_MAGENTA: ClassVar["Color"]
    BRIGHT_CYAN: ClassVar["Color"]
    BRIGHT_WHITE: ClassVar["Color"]

    @classmethod
    def from_256(cls, index: int) -> "Color":
        if not 0 <= index <= 255:
            raise ValueError(f"invalid 256 color palette index {index}, must be 0-255")
        return cls(ColorMode.EXTENDED_256, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"invalid RGB color ({r}, {g}, {b}), channels must be 0-255")
        return cls(ColorMode.TRUE_COLOR, (r, g, b))

    def rgb(self) -> RGB:
        """The color as an RGB triple."""
        if isinstance(self.value, tuple):
            return self.value
        return palette_rgb(self.value)

    def downgrade(self, mode: ColorMode) -> "Color":
        """
        Return the closest color the terminal can show in mode.

        Colors already within the mode are returned as they are.
        """
        order = [ColorMode.STANDARD_16, ColorMode.EXTENDED_256, ColorMode.TRUE_COLOR]
        if order.index(self.mode) <= order.index(mode):
            return self
        if mode == ColorMode.EXTENDED_256:
            return Color.from_256(nearest_256(self.rgb()))
        return Color(ColorMode.STANDARD_16, nearest_16(self.rgb()))

    def to_sgr_fg(self) -> str:
        """SGR parameters selecting this color as the foreground."""
        return self._sgr(3)

    def to_sgr_bg(self) -> str:
        """SGR parameters selecting this color as the background."""
        return self._sgr(4)

    def _sgr(self, layer: int) -> str:
        # layer is 3 for the foreground and 4 for the background.
        if isinstance(self.value, tuple):
            r, g, b = self.value
            return f"{layer}8;2;{r};{g};{b}"
        if self.mode == ColorMode.EXTENDED_256:
            return f"{layer}8;5;{self.value}"
        if self.value < 8:
            return f"{layer}{self.value}"
        # Bright colors: 90-97 and 100-107.
        return f"{layer + 6}{self.value - 8}"


_SYSTEM_NAMES = (
    "BLACK", "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE",
    "BRIGHT_BLACK", "BRIGHT_RED", "BRIGHT_GREEN", "BRIGHT_YELLOW",
    "BRIGHT_BLUE", "BRIGHT_MAGENTA", "BRIGHT_CYAN", "BRIGHT_WHITE",
)
for _index, _name in enumerate(_SYSTEM_NAMES):
    setattr(Color, _name, Color(ColorMode.STANDARD_16, _index))
