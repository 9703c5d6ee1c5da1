"""Tests for the command line interface and the demo dashboards."""

import logging
import threading
from pathlib import Path
from typing import Iterator

import pytest
from typer.testing import CliRunner

from conftest import key
from tiledash.cli.app import FileRichHandler, configure_logging, create_app
from tiledash.cli.demos import DEMOS
from tiledash.core.geometry import Size
from tiledash.engine import Controller
from tiledash.terminal.api import Key
from tiledash.terminal.fake import FakeDisplay
from tiledash.widgets import TextInput

runner = CliRunner()


@pytest.fixture
def root_logging() -> Iterator[None]:
    """Restore the root logger after a test configured it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCommands:
    """Tests for the typer application."""

    def test_help(self) -> None:
        result = runner.invoke(create_app(), ["--help"])
        assert result.exit_code == 0
        assert "demo" in result.output

    def test_lists_demos(self) -> None:
        result = runner.invoke(create_app(), ["demos"])
        assert result.exit_code == 0
        for name in ("gauge", "form", "heatmap", "mirror"):
            assert name in result.output

    def test_demo_help(self) -> None:
        result = runner.invoke(create_app(), ["demo", "gauge", "--help"])
        assert result.exit_code == 0
        assert "--redraw-interval" in result.output

    def test_invalid_color_mode(self) -> None:
        result = runner.invoke(create_app(), ["demo", "gauge", "--color-mode", "8"])
        assert result.exit_code != 0

    def test_log_file(self, tmp_path: Path, root_logging) -> None:
        log_file = tmp_path / "demo.log"
        configure_logging(verbose=True, log_file=log_file)
        logging.getLogger("tiledash.test").debug("hello from the test")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello from the test" in log_file.read_text()

    def test_log_handler_closes_its_file(self, tmp_path: Path, root_logging) -> None:
        configure_logging(verbose=False, log_file=tmp_path / "demo.log")
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, FileRichHandler)]
        assert len(handlers) == 1
        stream = handlers[0].console.file
        assert not stream.closed
        handlers[0].close()
        assert stream.closed


class TestDemos:
    """The demos build and draw on an in-memory display."""

    @pytest.mark.parametrize("name", sorted(DEMOS))
    def test_builds_and_draws(self, name: str) -> None:
        display = FakeDisplay(Size(80, 24))
        stop = threading.Event()
        demo = DEMOS[name](display, stop)
        Controller(display, demo.container)
        assert display.flushes
        assert not stop.is_set()

    def test_background_updates_stop(self) -> None:
        display = FakeDisplay(Size(80, 24))
        stop = threading.Event()
        demo = DEMOS["gauge"](display, stop)
        worker = threading.Thread(target=demo.background, args=(stop,))
        worker.start()
        stop.set()
        worker.join(timeout=2)
        assert not worker.is_alive()

    def test_form_submit(self) -> None:
        display = FakeDisplay(Size(80, 24))
        stop = threading.Event()
        demo = DEMOS["form"](display, stop)
        assert demo.quit_key == Key.ESCAPE
        assert isinstance(demo.container.focused.widget, TextInput)

        controller = Controller(display, demo.container)
        # A focused text input keeps the keyboard to itself.
        controller.handle_event(key('x'))
        assert demo.container.focused.widget.read().endswith("x")

        submit = next(leaf for leaf in demo.container.leaves() if getattr(leaf.widget, "text", None) == "<Submit>")
        demo.container.focus_leaf(submit)
        controller.handle_event(key(Key.ENTER))
        controller.redraw()
        assert "Submitted data:" in display.text()

        controller.handle_event(key('o'))
        assert stop.is_set()
