"""Typer CLI application with command groups."""

import logging
import threading
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from tiledash.cli.demos import DEMOS, DemoBuilder
from tiledash.core.color import ColorMode
from tiledash.engine.loop import DEFAULT_REDRAW_INTERVAL, RunConfig, run
from tiledash.errors import TiledashError
from tiledash.terminal.ansi import AnsiDisplay
from tiledash.terminal.api import Key, KeyEvent

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = Path("tiledash.log")


class FileRichHandler(RichHandler):
    """RichHandler writing to a log file it opens and closes itself."""

    def __init__(self, path: Path) -> None:
        self._stream = path.open("a", encoding="utf-8")
        super().__init__(
            console=Console(file=self._stream, force_terminal=False, width=120),
            rich_tracebacks=True,
            show_path=False,
        )

    def close(self) -> None:
        self.acquire()
        try:
            self._stream.close()
        finally:
            self.release()
        super().close()


def configure_logging(verbose: bool, log_file: Optional[Path]) -> None:
    """
    Send log records to a file, the terminal belongs to the dashboard.

    Nothing is logged unless verbose or a log file is given.
    """
    if not verbose and log_file is None:
        return
    handler = FileRichHandler(log_file if log_file is not None else DEFAULT_LOG_FILE)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def run_demo(build: DemoBuilder, color_mode: ColorMode, redraw_interval: float) -> None:
    """Take over the terminal and run the demo until its quit key is pressed."""
    stop = threading.Event()
    with AnsiDisplay(color_mode=color_mode) as display:
        demo = build(display, stop)

        def quit_on_key(event: KeyEvent) -> None:
            if event.matches(demo.quit_key) or event.matches(Key.CTRL_C):
                stop.set()

        updater = None
        if demo.background is not None:
            updater = threading.Thread(target=demo.background, args=(stop,), name="tiledash-demo", daemon=True)
            updater.start()
        try:
            run(
                display,
                demo.container,
                cancel=stop,
                config=RunConfig(redraw_interval=redraw_interval, keyboard_subscriber=quit_on_key),
            )
        finally:
            stop.set()
            if updater is not None:
                updater.join(timeout=1.0)


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="tiledash",
        help="Terminal dashboards built from nested containers and widgets.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    demo_app = typer.Typer(help="Run a demo dashboard.", no_args_is_help=True)
    app.add_typer(demo_app, name="demo")

    @app.callback()
    def main_options(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug messages")] = False,
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write log messages to this file")] = None,
    ) -> None:
        """Terminal dashboards built from nested containers and widgets."""
        configure_logging(verbose, log_file)

    def register(name: str, build: DemoBuilder) -> None:
        @demo_app.command(name=name, help=build.__doc__)
        def command(
            redraw_interval: Annotated[float, typer.Option(
                "--redraw-interval", "-r", min=0.01, help="Seconds between redraws",
            )] = DEFAULT_REDRAW_INTERVAL,
            color_mode: Annotated[ColorMode, typer.Option(
                "--color-mode", "-c", help="Colors the terminal supports",
            )] = ColorMode.EXTENDED_256,
        ) -> None:
            logger.info("starting the %s demo", name)
            try:
                run_demo(build, color_mode, redraw_interval)
            except TiledashError as exc:
                logger.exception("the %s demo failed", name)
                console.print(f"[red]Error:[/] {exc}")
                raise typer.Exit(1)
            logger.info("the %s demo finished", name)

    for name, build in DEMOS.items():
        register(name, build)

    @app.command()
    def demos() -> None:
        """List the available demos."""
        console.print("[bold cyan]Demos[/]")
        for name, build in DEMOS.items():
            console.print(f"  [green]{name:<8}[/] {build.__doc__}")

    return app
