"""Widgets that can be placed into containers."""

from tiledash.widgets.base import BaseWidget, EventMeta, KeyScope, Meta, MouseScope, Widget, WidgetOptions
from tiledash.widgets.button import Button
from tiledash.widgets.gauge import Gauge, GaugeOptions
from tiledash.widgets.heatmap import HeatMap
from tiledash.widgets.mirror import Mirror
from tiledash.widgets.text import Text
from tiledash.widgets.textinput import TextInput

__all__ = [
    "Widget",
    "BaseWidget",
    "WidgetOptions",
    "KeyScope",
    "MouseScope",
    "Meta",
    "EventMeta",
    "Button",
    "Gauge",
    "GaugeOptions",
    "HeatMap",
    "Mirror",
    "Text",
    "TextInput",
]
