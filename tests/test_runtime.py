"""Tests for terminal control, the event loop, config, and logging."""

from __future__ import annotations

import json
import logging
import tempfile
import termios
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from dotviewer.graph import GraphHandle
from dotviewer.runtime import TerminalController, configure_logging, load_config, load_settings, run_main_loop
from dotviewer.search.engine import DEFAULT_CHUNK_SIZE
from dotviewer.session import Session


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []

    @contextmanager
    def raw_mode(self):
        yield

    def write(self, frame: str) -> None:
        self.frames.append(frame)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("dotviewer.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "dotviewer.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("dotviewer.runtime.terminal.os.write") as write_mock, mock.patch(
            "dotviewer.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("dotviewer.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


class RuntimeLoopTests(unittest.TestCase):
    def _session(self) -> Session:
        return Session(GraphHandle.from_edges("G", ["a", "b"], [("a", "b")]))

    def test_loop_renders_dispatches_and_stops_on_quit(self) -> None:
        session = self._session()
        terminal = _FakeTerminal()
        renders: list[str | None] = []

        def render(current: Session, width: int, height: int) -> str:
            renders.append(current.view.current_id())
            return "frame"

        with mock.patch("dotviewer.runtime.loop.read_key", side_effect=["j", "q"]):
            run_main_loop(session, terminal, 0, render)

        self.assertTrue(session.quit)
        self.assertEqual(renders, ["a", "b"])
        self.assertEqual(terminal.frames, ["frame", "frame"])

    def test_loop_survives_errors_and_stops_on_eof(self) -> None:
        session = self._session()
        with mock.patch("dotviewer.runtime.loop.read_key", side_effect=["c", "z", ""]):
            run_main_loop(session, _FakeTerminal(), 0, lambda *_args: "")
        self.assertTrue(session.quit)
        self.assertFalse(session.result.ok)

    def test_ctrl_c_quits(self) -> None:
        session = self._session()
        with mock.patch("dotviewer.runtime.loop.read_key", side_effect=["CTRL_C"]):
            run_main_loop(session, _FakeTerminal(), 0, lambda *_args: "")
        self.assertTrue(session.quit)


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_or_malformed_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            self.assertEqual(load_config(path), {})
            path.write_text("{not json", encoding="utf-8")
            settings = load_settings(path)
        self.assertEqual(settings.export_dir, Path("exports"))
        self.assertEqual(settings.xdot_command, "xdot")
        self.assertEqual(settings.search_workers, 4)
        self.assertEqual(settings.search_chunk_size, DEFAULT_CHUNK_SIZE)

    def test_values_are_read_and_wrong_types_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(
                json.dumps(
                    {
                        "export_dir": "/tmp/out",
                        "xdot_command": "xdot --verbose",
                        "search_workers": True,
                        "search_chunk_size": 64,
                        "style": "",
                    }
                ),
                encoding="utf-8",
            )
            settings = load_settings(path)
        self.assertEqual(settings.export_dir, Path("/tmp/out"))
        self.assertEqual(settings.xdot_command, "xdot --verbose")
        self.assertEqual(settings.search_workers, 4)
        self.assertEqual(settings.search_chunk_size, 64)
        self.assertEqual(settings.style, "monokai")

    def test_non_object_config_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("[1, 2]", encoding="utf-8")
            self.assertEqual(load_config(path), {})


class LoggingTests(unittest.TestCase):
    def test_configure_logging_writes_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "logs" / "dotviewer.log"
            self.assertEqual(configure_logging(target), target)
            session = Session(GraphHandle.from_edges("G", ["a"]))
            session.handle_key("z")
            logger = logging.getLogger("dotviewer")
            for handler in logger.handlers:
                handler.flush()
            text = target.read_text(encoding="utf-8")
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
        self.assertIn("KeyUnhandled", text)


if __name__ == "__main__":
    unittest.main()
