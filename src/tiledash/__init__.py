"""
tiledash: terminal dashboards out of tiled widgets

Compose the screen from widgets placed into a tree of splits, route
keyboard and mouse input to them and keep the terminal up to date with
minimal redraws.

Quick Start:
    >>> import threading
    >>> from tiledash import AnsiDisplay, Container, PlaceWidget, run
    >>> from tiledash.widgets import Gauge
    >>> gauge = Gauge()
    >>> stop = threading.Event()
    >>> with AnsiDisplay() as display:
    ...     run(display, Container(display, PlaceWidget(gauge)), cancel=stop)

Features:
    - Split tree layout with fixed and proportional splits, borders, padding and alignment
    - Keyboard focus with Tab cycling, focus groups and global keys
    - Mouse routing by hit testing
    - Diff based rendering, only changed cells reach the terminal
    - Widgets: Gauge, Text, Button, TextInput, HeatMap
"""

__version__ = "0.1.0"

# Core types
from tiledash.core.align import Horizontal, Vertical
from tiledash.core.canvas import Canvas
from tiledash.core.cell import Cell
from tiledash.core.color import Color, ColorMode
from tiledash.core.draw import LineStyle
from tiledash.core.geometry import Point, Rect, Size

# Terminal
from tiledash.terminal.ansi import AnsiDisplay
from tiledash.terminal.api import Button, Display, Key, KeyEvent, MouseEvent
from tiledash.terminal.fake import FakeDisplay

# Layout
from tiledash.container import (
    ID,
    Border,
    BorderTitle,
    Bottom,
    Clear,
    Container,
    Focused,
    Left,
    PlaceWidget,
    Right,
    SplitFixed,
    SplitFixedFromEnd,
    SplitHorizontal,
    SplitPercent,
    SplitVertical,
    Top,
)

# Engine
from tiledash.engine import Controller, RunConfig, run

# Errors
from tiledash.errors import (
    ConfigError,
    DisplayError,
    EventError,
    NotFoundError,
    RenderError,
    TiledashError,
)

__all__ = [
    # Version
    "__version__",
    # Core types
    "Canvas",
    "Cell",
    "Color",
    "ColorMode",
    "Horizontal",
    "LineStyle",
    "Point",
    "Rect",
    "Size",
    "Vertical",
    # Terminal
    "AnsiDisplay",
    "Button",
    "Display",
    "FakeDisplay",
    "Key",
    "KeyEvent",
    "MouseEvent",
    # Layout
    "Container",
    "ID",
    "Border",
    "BorderTitle",
    "Clear",
    "Focused",
    "PlaceWidget",
    "SplitHorizontal",
    "SplitVertical",
    "Top",
    "Bottom",
    "Left",
    "Right",
    "SplitPercent",
    "SplitFixed",
    "SplitFixedFromEnd",
    # Engine
    "Controller",
    "RunConfig",
    "run",
    # Errors
    "TiledashError",
    "ConfigError",
    "NotFoundError",
    "EventError",
    "RenderError",
    "DisplayError",
]
