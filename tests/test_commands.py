from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dotviewer.errors import IOFailure
from dotviewer.graph import GraphHandle
from dotviewer.session.commands import parse_command
from dotviewer.session.export import CURRENT_EXPORT, export_filename, launch_viewer, write_graph


class ParseCommandTests(unittest.TestCase):
    def test_known_command_with_argument(self) -> None:
        command = parse_command("  neighbors   3 ")
        self.assertEqual((command.name, command.word, command.argument), ("neighbors", "neighbors", "3"))

    def test_unknown_and_empty(self) -> None:
        self.assertIsNone(parse_command("nope x").name)
        self.assertEqual(parse_command("").word, "")

    def test_argument_keeps_inner_spaces(self) -> None:
        self.assertEqual(parse_command("goto node with spaces").argument, "node with spaces")


class ExportTests(unittest.TestCase):
    def test_export_filename_strips_whitespace_and_separators(self) -> None:
        self.assertEqual(export_filename("G - prefix"), "G-prefix")
        self.assertEqual(export_filename("a/b"), "a_b")
        self.assertEqual(export_filename("   "), "graph")

    def test_write_graph_writes_target_and_current(self) -> None:
        graph = GraphHandle.from_edges("G", ["a", "b"], [("a", "b")])
        with tempfile.TemporaryDirectory() as tmp:
            export_dir = Path(tmp) / "out"
            target = write_graph(export_dir, "G - a", graph)
            self.assertEqual(target, export_dir / "G-a.dot")
            text = target.read_text(encoding="utf-8")
            self.assertEqual(text, (export_dir / CURRENT_EXPORT).read_text(encoding="utf-8"))
        self.assertIn("a -> b;", text)

    def test_write_failure_is_io_failure(self) -> None:
        graph = GraphHandle.from_edges("G", ["a"])
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with self.assertRaises(IOFailure):
                write_graph(blocker / "sub", "G", graph)

    def test_launch_viewer_detaches_process(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            export_dir = Path(tmp)
            (export_dir / CURRENT_EXPORT).write_text("digraph {}\n", encoding="utf-8")
            with mock.patch("dotviewer.session.export.subprocess.Popen") as popen_mock:
                launch_viewer(export_dir, "xdot -n")
        popen_mock.assert_called_once()
        self.assertEqual(popen_mock.call_args.args[0], ["xdot", "-n", str(export_dir / CURRENT_EXPORT)])
        self.assertEqual(popen_mock.call_args.kwargs["stdout"], subprocess.DEVNULL)
        self.assertTrue(popen_mock.call_args.kwargs["start_new_session"])

    def test_launch_viewer_missing_binary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            export_dir = Path(tmp)
            (export_dir / CURRENT_EXPORT).write_text("digraph {}\n", encoding="utf-8")
            with mock.patch("dotviewer.session.export.subprocess.Popen", side_effect=FileNotFoundError("xdot")):
                with self.assertRaises(IOFailure):
                    launch_viewer(export_dir)


if __name__ == "__main__":
    unittest.main()
