"""Command-line front door for dotviewer.

Parses CLI options, loads settings and the graph, then hands a session to the
interactive loop.
"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from .errors import ParseFailure
from .render import render_frame
from .runtime import TerminalController, configure_logging, load_settings, run_main_loop
from .session import Session

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotviewer",
        description="Explore a Graphviz DOT graph interactively in the terminal.",
    )
    parser.add_argument("path", help="Path to a .dot file.")
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Threads used for search matching (default: config or 4; 1 disables the pool).",
    )
    parser.add_argument("--export-dir", default=None, help="Directory for exported .dot files.")
    parser.add_argument("--log-file", default=None, help="Write logs here instead of the user log directory.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the explorer on one DOT file."""
    args = build_parser().parse_args(argv)
    settings = load_settings()

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not sys.stdin.isatty():
        raise SystemExit("dotviewer needs an interactive terminal on stdin.")

    log_path = configure_logging(Path(args.log_file) if args.log_file else None)
    workers = args.workers if args.workers is not None else settings.search_workers
    export_dir = Path(args.export_dir) if args.export_dir else settings.export_dir

    executor = ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
    try:
        try:
            session = Session.from_path(
                path,
                export_dir=export_dir,
                viewer_command=settings.xdot_command,
                executor=executor,
                chunk_size=settings.search_chunk_size,
            )
        except ParseFailure as exc:
            raise SystemExit(str(exc)) from exc
        logger.info("loaded %s (%d nodes), logging to %s", path, len(session.view.graph), log_path)

        stdin_fd = sys.stdin.fileno()
        terminal = TerminalController(stdin_fd, sys.stdout.fileno())
        run_main_loop(session, terminal, stdin_fd, partial(render_frame, style=settings.style))
    finally:
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)


if __name__ == "__main__":
    main()
