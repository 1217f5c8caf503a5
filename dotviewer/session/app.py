"""Session state: tab stack, mode, input buffer, and the last result.

Everything the renderer reads lives on :class:`Session`. Mutation happens
only inside :meth:`Session.handle_key` (see :mod:`dotviewer.session.keys`).
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from pathlib import Path

from ..errors import CommandError, DotViewerError
from ..graph import GraphHandle, parse
from ..model import AutocompleteTrie, InputBuffer, NavigableList, TabStack
from ..render.help import HELP_ROWS
from ..search.engine import DEFAULT_CHUNK_SIZE
from ..view import View
from .commands import COMMAND_NAMES, COMMANDS_WITH_ARGUMENT, parse_command
from .export import launch_viewer, write_graph
from .modes import COMMAND, NORMAL, Mode, Popup, PopupMode, Search, SearchMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Display-ready result of the last handled key."""

    ok: bool = True
    message: str = ""

    @classmethod
    def failure(cls, error: DotViewerError) -> Outcome:
        return cls(ok=False, message=str(error))


class Session:
    """Interactive exploration session over one parsed graph."""

    def __init__(
        self,
        graph: GraphHandle,
        *,
        title: str | None = None,
        export_dir: Path = Path("exports"),
        viewer_command: str = "xdot",
        executor: Executor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.quit = False
        self.mode: Mode = NORMAL
        self.result = Outcome()
        root = View(title or graph.graph_id, graph, executor=executor, chunk_size=chunk_size)
        self.tabs: TabStack[View] = TabStack([root])
        self.input = InputBuffer()
        self.command_trie = AutocompleteTrie(COMMAND_NAMES)
        self.help: NavigableList[tuple[str, str, str]] = NavigableList(HELP_ROWS)
        self.export_dir = export_dir
        self.viewer_command = viewer_command
        self.lookback: str | None = None

    @classmethod
    def from_path(cls, path: str | Path, **kwargs) -> Session:
        """Parse the DOT file at ``path`` and open it as the root tab."""
        return cls(parse(path), **kwargs)

    @property
    def view(self) -> View:
        return self.tabs.selected()

    def handle_key(self, key: str) -> Outcome:
        """Consume one key token, mutate state, and return the recorded result."""
        from .keys import handle_key

        return handle_key(self, key)

    # mode transitions

    def set_normal_mode(self) -> None:
        self.mode = NORMAL

    def set_command_mode(self) -> None:
        self.input.clear()
        self.mode = COMMAND

    def set_search_mode(self, smode: SearchMode) -> None:
        self.input.clear()
        self.mode = Search(smode)
        self.view.clear_search()

    def set_popup_mode(self, pmode: PopupMode) -> None:
        self.mode = Popup(pmode)

    # search

    def update_search(self) -> None:
        if not isinstance(self.mode, Search):
            return
        self.view.update_search(self.mode.smode.kind, self.input.key)

    def autocomplete_search(self) -> None:
        if not isinstance(self.mode, Search):
            return
        view = self.view
        completion = view.autocomplete(self.input.key)
        if completion is None:
            return
        view.update_search(self.mode.smode.kind, completion)
        self.input.set(completion)

    # commands

    def autocomplete_command(self) -> None:
        command = parse_command(self.input.key)
        if command.name is None:
            completion = self.command_trie.autocomplete(command.word)
            if completion:
                self.input.set(completion)
            return
        if command.name not in COMMANDS_WITH_ARGUMENT:
            return
        if command.argument is None:
            self.input.set(f"{command.name} ")
            return
        if command.name in {"filter", "goto"}:
            completion = self.view.search.complete_prefix(command.argument)
            if completion:
                self.input.set(f"{command.name} {completion}")

    def exec(self) -> str:
        """Run the typed command; returns a status message."""
        command = parse_command(self.input.key)
        self.set_normal_mode()

        if command.name is None:
            raise CommandError(f"No such command {command.word or self.input.key!r}")
        if command.name in COMMANDS_WITH_ARGUMENT:
            if command.argument is None:
                raise CommandError(f"No argument supplied for {command.name}")
            return self._exec_with_argument(command.name, command.argument)
        if command.name == "subgraph":
            self.set_popup_mode(PopupMode.TREE)
            return ""
        if command.name == "help":
            self.set_popup_mode(PopupMode.HELP)
            return ""
        if command.name == "export":
            return self.export()
        if command.name == "xdot":
            return self.xdot()
        raise CommandError(f"No such command {command.word!r}")

    def _exec_with_argument(self, name: str, argument: str) -> str:
        if name == "filter":
            return self.filter(argument)
        if name == "neighbors":
            try:
                depth = int(argument)
            except ValueError as exc:
                raise CommandError(f"Invalid depth {argument!r}") from exc
            return self.neighbors(depth)
        if name == "goto":
            self.view.goto(argument)
            return ""
        raise CommandError(f"No such command {name!r}")

    # tab-producing and exporting actions

    def filter(self, prefix: str) -> str:
        self.tabs.open(self.view.filter(prefix))
        return ""

    def subgraph(self) -> str:
        self.tabs.open(self.view.subgraph())
        self.set_normal_mode()
        return ""

    def neighbors(self, depth: int) -> str:
        view = self.view
        graph = view.neighbors(depth)
        target = write_graph(self.export_dir, f"{view.current_id()}-{depth}", graph)
        return f"successfully exported to {target}"

    def export(self) -> str:
        view = self.view
        target = write_graph(self.export_dir, view.title, view.graph)
        return f"successfully exported to {target}"

    def xdot(self) -> str:
        launch_viewer(self.export_dir, self.viewer_command)
        return "launched xdot"
