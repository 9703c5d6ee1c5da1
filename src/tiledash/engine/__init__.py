"""The engine: event routing, rendering and the run loop."""

from tiledash.engine.distributor import EventDistributor
from tiledash.engine.loop import Controller, RunConfig, run
from tiledash.engine.renderer import Renderer

__all__ = ["Controller", "EventDistributor", "Renderer", "RunConfig", "run"]
