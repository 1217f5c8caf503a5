"""Main interactive event loop for the terminal UI.

Draw, read one key, hand it to the session, repeat until the session's quit
flag is set. Feature logic lives in the session and the renderer.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..input import read_key
from .terminal import TerminalController

if TYPE_CHECKING:
    from ..session import Session

Renderer = Callable[["Session", int, int], str]


def run_main_loop(
    session: Session,
    terminal: TerminalController,
    stdin_fd: int,
    render: Renderer,
) -> None:
    """Run the interactive loop until a handler sets ``session.quit``.

    A frame is drawn before every key read; ``read_key`` blocks, so idle
    terminals cost nothing.
    """
    with terminal.raw_mode():
        while not session.quit:
            term = shutil.get_terminal_size((80, 24))
            terminal.write(render(session, term.columns, term.lines))
            try:
                key = read_key(stdin_fd)
            except KeyboardInterrupt:
                continue
            # Without a timeout an empty token means stdin reached EOF.
            if key in {"", "CTRL_C"}:
                session.quit = True
                continue
            session.handle_key(key)
