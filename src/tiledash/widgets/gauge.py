"""Gauge - a horizontal progress bar."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from tiledash.core.align import Horizontal, Vertical, align_text
from tiledash.core.canvas import Canvas
from tiledash.core.color import Color
from tiledash.core.draw import LineStyle, OverrunMode, border, rectangle, resize_needed, trim_text, vertical_line
from tiledash.core.geometry import Point, Rect, Size, exclude_border
from tiledash.core.runewidth import rune_width
from tiledash.widgets.base import BaseWidget, Meta, WidgetOptions


class ProgressType(Enum):
    PERCENT = auto()
    ABSOLUTE = auto()


@dataclass
class GaugeOptions:
    """
    Appearance of a Gauge.

    Attributes:
        height: Height of the gauge in cells, zero fills the whole canvas.
        char: Character the progress is drawn with.
        color: Background color of the progress.
        filled_text_color: Color of text over the progress.
        empty_text_color: Color of text over the rest of the gauge.
        hide_text_progress: Don't display the progress as text.
        text_label: Extra label displayed after the progress text.
        h_text_align: Horizontal alignment of the text.
        v_text_align: Vertical alignment of the text.
        border: Border line style, NONE for no border.
        border_title: Title displayed in the border.
        border_title_align: Alignment of the border title.
        border_color: Color of the border and its title.
        threshold: Position of the threshold line, zero hides it.
        threshold_line_style: Line style of the threshold line.
        threshold_color: Color of the threshold line.
    """
    height: int = 0
    char: str = ' '
    color: Optional[Color] = Color.GREEN
    filled_text_color: Optional[Color] = Color.BLACK
    empty_text_color: Optional[Color] = None
    hide_text_progress: bool = False
    text_label: str = ""
    h_text_align: Horizontal = Horizontal.CENTER
    v_text_align: Vertical = Vertical.MIDDLE
    border: LineStyle = LineStyle.NONE
    border_title: str = ""
    border_title_align: Horizontal = Horizontal.LEFT
    border_color: Optional[Color] = None
    threshold: int = 0
    threshold_line_style: LineStyle = LineStyle.LIGHT
    threshold_color: Optional[Color] = None

    def validate(self) -> None:
        if self.height < 0:
            raise ValueError(f"invalid height {self.height}, must be zero or positive")
        if len(self.char) != 1 or rune_width(self.char) != 1:
            raise ValueError(f"invalid gauge character {self.char!r}, must be a single half-width character")
        if self.threshold < 0:
            raise ValueError(f"invalid threshold {self.threshold}, must be zero or positive")
        if self.threshold_line_style == LineStyle.NONE:
            raise ValueError("the threshold line style cannot be NONE")


class Gauge(BaseWidget):
    """
    Displays progress of an operation as a partially filled bar.

    Progress is set with either percent() or absolute(); both may also
    update the appearance through keyword arguments matching GaugeOptions.
    Invalid progress raises ValueError and keeps the previous state.

    Example:
        gauge = Gauge(border=LineStyle.LIGHT, border_title="Download")
        gauge.absolute(7, 10)
    """

    def __init__(self, **options) -> None:
        super().__init__()
        opts = GaugeOptions(**options)
        opts.validate()
        self._opts = opts
        self._type = ProgressType.PERCENT
        self._current = 0
        self._total = 100

    def percent(self, p: int, **options) -> None:
        """Set the progress as a percentage, 0 <= p <= 100."""
        if not 0 <= p <= 100:
            raise ValueError(f"invalid percentage, p({p}) must be 0 <= p <= 100")
        with self._lock:
            self._set_options(options)
            self._type = ProgressType.PERCENT
            self._current = p
            self._total = 100

    def absolute(self, done: int, total: int, **options) -> None:
        """Set the progress as done out of total units."""
        if done < 0 or total < 1 or done > total:
            raise ValueError(
                f"invalid progress, done({done}) must be <= total({total}), done must be zero or positive "
                "and total must be a non-zero positive number"
            )
        with self._lock:
            self._set_options(options)
            self._type = ProgressType.ABSOLUTE
            self._current = done
            self._total = total

    def _set_options(self, options: dict) -> None:
        if not options:
            return
        opts = dataclasses.replace(self._opts, **options)
        opts.validate()
        self._opts = opts

    # Geometry

    def _has_border(self) -> bool:
        return self._opts.border != LineStyle.NONE

    def _usable(self, cvs: Canvas) -> Rect:
        return exclude_border(cvs.area) if self._has_border() else cvs.area

    def _width(self, area: Rect, units: int) -> int:
        """Number of cells representing units out of the total."""
        return area.width * units // self._total

    def _minimum_size(self) -> Size:
        # One cell for the gauge itself.
        extra = 2 if self._has_border() else 0
        return Size(1 + extra, 1 + extra)

    def _maximum_size(self) -> Size:
        if self._opts.height == 0:
            return Size()
        extra = 2 if self._has_border() else 0
        return Size(0, self._opts.height + extra)

    # Text

    def _progress_text(self) -> str:
        if self._opts.hide_text_progress:
            return ""
        if self._type == ProgressType.PERCENT:
            return f"{self._current}%"
        return f"{self._current}/{self._total}"

    def _gauge_text(self) -> str:
        text = self._progress_text()
        if self._opts.text_label:
            label = f"({self._opts.text_label})"
            text = f"{text} {label}" if text else label
        return text

    # Drawing

    def draw(self, cvs: Canvas, meta: Meta) -> None:
        with self._lock:
            minimum = self._minimum_size()
            if cvs.width < minimum.width or cvs.height < minimum.height:
                resize_needed(cvs)
                return

            opts = self._opts
            if self._has_border():
                border(
                    cvs, cvs.area,
                    line_style=opts.border,
                    title=opts.border_title,
                    title_align=opts.border_title_align,
                    fg=opts.border_color,
                )

            usable = self._usable(cvs)
            progress = Rect.of(
                usable.min.x, usable.min.y,
                usable.min.x + self._width(usable, self._current), usable.max.y,
            )
            if progress.width > 0:
                rectangle(cvs, progress, opts.char, bg=opts.color)
            if 0 < opts.threshold < self._total:
                x = usable.min.x + self._width(usable, opts.threshold)
                vertical_line(cvs, x, 0, cvs.height - 1, opts.threshold_line_style, fg=opts.threshold_color)
            self._draw_text(cvs, usable, progress)

    def _draw_text(self, cvs: Canvas, usable: Rect, progress: Rect) -> None:
        text = self._gauge_text()
        if not text:
            return
        opts = self._opts
        trimmed = trim_text(text, usable.width, OverrunMode.THREE_DOT)
        cur = align_text(usable, trimmed, opts.h_text_align, opts.v_text_align)

        for r in trimmed:
            if not usable.contains(cur):
                break
            nxt = Point(cur.x + 1, cur.y)
            if rune_width(r) == 2 and usable.contains(nxt) and progress.contains(cur) and not progress.contains(nxt):
                # A full-width rune straddling the progress edge, extend the
                # progress under its second half.
                rectangle(cvs, Rect.of(nxt.x, usable.min.y, nxt.x + 1, usable.max.y), opts.char, bg=opts.color)
            fg = opts.filled_text_color if progress.contains(cur) else opts.empty_text_color
            cur = Point(cur.x + cvs.set_cell(cur, r, fg=fg), cur.y)

    def options(self) -> WidgetOptions:
        with self._lock:
            return WidgetOptions(
                minimum_size=self._minimum_size(),
                maximum_size=self._maximum_size(),
            )
