"""Demo dashboards launched by the CLI."""

from __future__ import annotations

import getpass
import math
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from tiledash.container import (
    ID,
    AlignHorizontal,
    Border,
    BorderTitle,
    Bottom,
    Container,
    Focused,
    FocusedColor,
    KeyFocusGroups,
    KeyFocusGroupsNext,
    KeyFocusGroupsPrevious,
    KeyFocusNext,
    KeyFocusPrevious,
    KeyFocusSkip,
    Left,
    PaddingLeft,
    PaddingRight,
    PlaceWidget,
    Right,
    SplitFixed,
    SplitHorizontal,
    SplitPercent,
    SplitVertical,
    Top,
)
from tiledash.core.align import Horizontal
from tiledash.core.color import Color
from tiledash.core.draw import LineStyle
from tiledash.terminal.api import Display, Key, KeyBinding
from tiledash.widgets import Button, Gauge, HeatMap, Mirror, Text, TextInput


@dataclass
class Demo:
    """
    A ready to run dashboard.

    Attributes:
        container: The laid out widgets.
        quit_key: Key that ends the demo.
        background: Updates the widgets until the event passed to it is set,
            run on its own thread.
    """
    container: Container
    quit_key: KeyBinding = 'q'
    background: Optional[Callable[[threading.Event], None]] = None


DemoBuilder = Callable[[Display, threading.Event], Demo]


def gauge_demo(display: Display, stop: threading.Event) -> Demo:
    """Gauges in different styles, all showing the same progress."""
    percent = Gauge(border=LineStyle.LIGHT, border_title="Percentage progress")
    absolute = Gauge(
        border=LineStyle.LIGHT,
        border_title="Absolute progress",
        color=Color.BLUE,
        filled_text_color=Color.BLACK,
        empty_text_color=Color.YELLOW,
    )
    threshold = Gauge(
        border=LineStyle.LIGHT,
        border_title="With a threshold and a label",
        text_label="of the budget",
        threshold=80,
        threshold_color=Color.RED,
        color=Color.MAGENTA,
    )
    plain = Gauge(height=1, hide_text_progress=True, char='░', color=None)

    container = Container(
        display,
        Border(LineStyle.LIGHT),
        BorderTitle("PRESS Q TO QUIT"),
        SplitHorizontal(
            Top(SplitHorizontal(Top(PlaceWidget(percent)), Bottom(PlaceWidget(absolute)))),
            Bottom(SplitHorizontal(Top(PlaceWidget(threshold)), Bottom(PlaceWidget(plain)))),
        ),
    )

    def progress(stop: threading.Event) -> None:
        done = 0
        while not stop.wait(0.1):
            done = (done + 1) % 101
            percent.percent(done)
            absolute.absolute(done, 100)
            threshold.percent(done)
            plain.percent(done)

    return Demo(container, background=progress)


def heatmap_demo(display: Display, stop: threading.Event) -> Demo:
    """A heat map of a moving wave."""
    columns, rows = 12, 8
    heatmap = HeatMap()
    container = Container(
        display,
        Border(LineStyle.LIGHT),
        BorderTitle("PRESS Q TO QUIT"),
        PlaceWidget(heatmap),
    )
    x_labels = [str(x) for x in range(columns)]
    y_labels = [f"r{y}" for y in range(rows)]

    def waves(stop: threading.Event) -> None:
        phase = 0.0
        while True:
            values = [
                [math.sin(phase + x / 2) * math.cos(phase / 2 + y / 3) for x in range(columns)]
                for y in range(rows)
            ]
            heatmap.values(values, x_labels, y_labels)
            if stop.wait(0.2):
                return
            phase += 0.3

    return Demo(container, background=waves)


def mirror_demo(display: Display, stop: threading.Event) -> Demo:
    """Four widgets echoing the events they receive, Tab moves focus."""
    def mirror(title: str) -> tuple:
        return (Border(LineStyle.ROUND), BorderTitle(title), FocusedColor(Color.CYAN), PlaceWidget(Mirror()))

    container = Container(
        display,
        ID("root"),
        KeyFocusNext(Key.TAB),
        KeyFocusPrevious(Key.BACKTAB),
        SplitVertical(
            Left(SplitHorizontal(Top(*mirror("one")), Bottom(*mirror("two")))),
            Right(SplitHorizontal(Top(*mirror("three")), Bottom(*mirror("four")))),
        ),
    )
    return Demo(container)


def _form_button(text: str, callback: Callable[[], None], key: str) -> Button:
    return Button(
        text,
        callback,
        key=Key.ENTER,
        global_keys=(key.lower(), key.upper()),
        padding=0,
        fill_color=Color.BLACK,
        focused_fill_color=Color.from_256(117),
        pressed_fill_color=Color.from_256(220),
        text_color=Color.WHITE,
    )


class _Form:
    """The user account form and what happens after submitting it."""

    def __init__(self, container_ref: list, stop: threading.Event) -> None:
        username = getpass.getuser()
        label_color = Color.from_256(33)
        self._container_ref = container_ref
        self._stop = stop
        self.inputs = {
            "Username": TextInput(label="Username: ", label_color=label_color, default_text=username, width=20,
                                  exclusive_keyboard_on_focus=True),
            "UID": TextInput(label="UID:      ", label_color=label_color, default_text="1000", width=20,
                             accept=str.isdigit, exclusive_keyboard_on_focus=True),
            "GID": TextInput(label="GID:      ", label_color=label_color, default_text="1000", width=20,
                             accept=str.isdigit, exclusive_keyboard_on_focus=True),
            "Home": TextInput(label="Home:     ", label_color=label_color, default_text=f"/home/{username}",
                              width=20, exclusive_keyboard_on_focus=True),
        }
        self.submit = _form_button("<Submit>", self._submitted, 's')
        self.cancel = _form_button("<Cancel>", stop.set, 'c')

    def layout(self) -> tuple:
        user, uid, gid, home = self.inputs.values()
        return (
            KeyFocusNext(Key.TAB),
            KeyFocusPrevious(Key.BACKTAB),
            KeyFocusGroupsNext(Key.DOWN, 1),
            KeyFocusGroupsPrevious(Key.UP, 1),
            KeyFocusGroupsNext(Key.RIGHT, 2),
            KeyFocusGroupsPrevious(Key.LEFT, 2),
            SplitHorizontal(
                Top(
                    Border(LineStyle.LIGHT),
                    BorderTitle("New user (click a field to edit it, Esc quits)"),
                    SplitHorizontal(
                        Top(SplitHorizontal(
                            Top(Focused(), KeyFocusGroups(1), PlaceWidget(user)),
                            Bottom(KeyFocusGroups(1), KeyFocusSkip(), PlaceWidget(uid)),
                        )),
                        Bottom(SplitHorizontal(
                            Top(KeyFocusGroups(1), KeyFocusSkip(), PlaceWidget(gid)),
                            Bottom(KeyFocusGroups(1), KeyFocusSkip(), PlaceWidget(home)),
                        )),
                    ),
                ),
                Bottom(SplitHorizontal(
                    Top(SplitVertical(
                        Left(KeyFocusGroups(1, 2), PlaceWidget(self.submit),
                             AlignHorizontal(Horizontal.RIGHT), PaddingRight(5)),
                        Right(KeyFocusGroups(1, 2), PlaceWidget(self.cancel),
                              AlignHorizontal(Horizontal.LEFT), PaddingLeft(5)),
                    )),
                    Bottom(KeyFocusSkip()),
                    SplitFixed(3),
                )),
                SplitFixed(6),
            ),
        )

    def _submitted(self) -> None:
        summary = Text()
        summary.write("Submitted data:\n\n", bold=True)
        for name, field in self.inputs.items():
            summary.write(f"{name}: {field.read()}\n")
        ok = _form_button("<OK>", self._stop.set, 'o')
        self._container_ref[0].update(
            "root",
            SplitHorizontal(
                Top(SplitVertical(Left(), Right(PlaceWidget(summary)), SplitPercent(33))),
                Bottom(Focused(), PlaceWidget(ok), AlignHorizontal(Horizontal.CENTER)),
                SplitFixed(7),
            ),
        )


def form_demo(display: Display, stop: threading.Event) -> Demo:
    """A form with text inputs and buttons, replaced by a summary once submitted."""
    ref: list = []
    form = _Form(ref, stop)
    container = Container(display, ID("root"))
    ref.append(container)
    container.update("root", *form.layout())
    return Demo(container, quit_key=Key.ESCAPE)


DEMOS: dict[str, DemoBuilder] = {
    "gauge": gauge_demo,
    "form": form_demo,
    "heatmap": heatmap_demo,
    "mirror": mirror_demo,
}
