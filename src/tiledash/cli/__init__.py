"""Command line interface running the demo dashboards."""

from tiledash.cli.app import create_app
from tiledash.cli.main import main

__all__ = ["create_app", "main"]
