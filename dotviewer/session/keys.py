"""Key routing: one key token in, one handler chosen by the active mode.

Each mode owns a handler function that builds its binding table over the
live session and returns the status message of the action it ran. Keys
with no binding raise :class:`KeyUnhandled`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..errors import DotViewerError, KeyUnhandled
from ..input import KeyComboBinding, KeyComboRegistry
from .modes import MODE_TYPES, Command, Normal, Popup, PopupMode, Search, SearchMode

if TYPE_CHECKING:
    from .app import Outcome, Session

logger = logging.getLogger(__name__)


def _is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def handle_normal_key(session: Session, key: str, previous: str | None) -> str:
    """Handle one Normal-mode key; movement applies to the focused list."""
    view = session.view

    def quit_action() -> str:
        session.quit = True
        return ""

    def fuzzy_action() -> str:
        session.set_search_mode(SearchMode.FUZZY)
        return ""

    def regex_action() -> str:
        session.set_search_mode(SearchMode.REGEX)
        return ""

    def command_action() -> str:
        session.set_command_mode()
        return ""

    def close_action() -> str:
        session.tabs.close()
        return ""

    def next_match_action() -> str:
        view.matches.next()
        view.goto_match()
        return ""

    def previous_match_action() -> str:
        view.matches.previous()
        view.goto_match()
        return ""

    def first_action() -> str:
        # Only the second of two consecutive presses jumps.
        if previous == "g":
            view.first()
        return ""

    def last_action() -> str:
        view.last()
        return ""

    def moving(action: Callable[[], None]) -> Callable[[], str]:
        def run() -> str:
            action()
            return ""

        return run

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("q",), quit_action),
        KeyComboBinding(("/",), fuzzy_action),
        KeyComboBinding(("r",), regex_action),
        KeyComboBinding((":",), command_action),
        KeyComboBinding(("c",), close_action),
        KeyComboBinding(("n",), next_match_action),
        KeyComboBinding(("N",), previous_match_action),
        KeyComboBinding(("h", "LEFT"), moving(view.left)),
        KeyComboBinding(("l", "RIGHT"), moving(view.right)),
        KeyComboBinding(("j", "DOWN"), moving(view.down)),
        KeyComboBinding(("k", "UP"), moving(view.up)),
        KeyComboBinding(("g",), first_action),
        KeyComboBinding(("G",), last_action),
        KeyComboBinding(("ENTER",), moving(view.enter)),
        KeyComboBinding(("TAB",), moving(session.tabs.next)),
        KeyComboBinding(("BACKTAB",), moving(session.tabs.previous)),
    )
    handled = bindings.dispatch(key)
    if handled is None:
        raise KeyUnhandled(key)
    return handled


def handle_command_key(session: Session, key: str, previous: str | None) -> str:
    """Edit the command line; Enter runs it."""
    buffer = session.input

    def cancel_action() -> str:
        session.set_normal_mode()
        return ""

    def backspace_action() -> str:
        buffer.delete()
        return ""

    def complete_action() -> str:
        session.autocomplete_command()
        return ""

    def cursor(action: Callable[[], None]) -> Callable[[], str]:
        def run() -> str:
            action()
            return ""

        return run

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("ENTER",), session.exec),
        KeyComboBinding(("ESC",), cancel_action),
        KeyComboBinding(("BACKSPACE",), backspace_action),
        KeyComboBinding(("TAB",), complete_action),
        KeyComboBinding(("LEFT",), cursor(buffer.back)),
        KeyComboBinding(("RIGHT",), cursor(buffer.front)),
    )
    handled = bindings.dispatch(key)
    if handled is not None:
        return handled
    if _is_printable(key):
        buffer.insert(key)
        return ""
    raise KeyUnhandled(key)


def handle_search_key(session: Session, key: str, previous: str | None) -> str:
    """Edit the live search key, refreshing matches after every change."""
    buffer = session.input

    def leave_action() -> str:
        session.set_normal_mode()
        return ""

    def backspace_action() -> str:
        if buffer.delete():
            session.update_search()
        return ""

    def complete_action() -> str:
        session.autocomplete_search()
        return ""

    def cursor(action: Callable[[], None]) -> Callable[[], str]:
        def run() -> str:
            action()
            return ""

        return run

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("ENTER", "ESC"), leave_action),
        KeyComboBinding(("BACKSPACE",), backspace_action),
        KeyComboBinding(("TAB",), complete_action),
        KeyComboBinding(("LEFT",), cursor(buffer.back)),
        KeyComboBinding(("RIGHT",), cursor(buffer.front)),
    )
    handled = bindings.dispatch(key)
    if handled is not None:
        return handled
    if _is_printable(key):
        buffer.insert(key)
        session.update_search()
        return ""
    raise KeyUnhandled(key)


def handle_popup_key(session: Session, key: str, previous: str | None) -> str:
    """Navigate the subgraph tree or the help table."""
    mode = session.mode
    if not isinstance(mode, Popup):
        raise KeyUnhandled(key)

    def quit_action() -> str:
        session.quit = True
        return ""

    def close_action() -> str:
        session.set_normal_mode()
        return ""

    def step(action: Callable[[], object]) -> Callable[[], str]:
        def run() -> str:
            action()
            return ""

        return run

    registry = KeyComboRegistry().register_bindings(
        KeyComboBinding(("q",), quit_action),
    )
    if mode.pmode is PopupMode.TREE:
        tree = session.view.subtree
        registry.register_bindings(
            KeyComboBinding(("h", "LEFT"), step(tree.left)),
            KeyComboBinding(("j", "DOWN"), step(tree.down)),
            KeyComboBinding(("k", "UP"), step(tree.up)),
            KeyComboBinding(("l", "RIGHT"), step(tree.right)),
            KeyComboBinding(("ENTER",), session.subgraph),
            KeyComboBinding(("ESC",), close_action),
        )
    else:
        rows = session.help
        registry.register_bindings(
            KeyComboBinding(("j", "DOWN"), step(rows.next)),
            KeyComboBinding(("k", "UP"), step(rows.previous)),
            KeyComboBinding(("ESC", "ENTER"), close_action),
        )
    handled = registry.dispatch(key)
    if handled is None:
        raise KeyUnhandled(key)
    return handled


ModeHandler = Callable[["Session", str, "str | None"], str]

MODE_HANDLERS: dict[type, ModeHandler] = {
    Normal: handle_normal_key,
    Command: handle_command_key,
    Search: handle_search_key,
    Popup: handle_popup_key,
}

assert set(MODE_HANDLERS) == set(MODE_TYPES), "every mode needs a key handler"


def handle_key(session: Session, key: str) -> Outcome:
    """Route ``key`` to the active mode's handler and record the outcome.

    Recoverable errors become a failed :class:`Outcome`; a failure while in
    Command or Search mode also drops back to Normal.
    """
    from .app import Outcome

    logger.info("key %r in %s", key, type(session.mode).__name__)
    previous = session.lookback
    session.lookback = key
    handler = MODE_HANDLERS[type(session.mode)]
    try:
        message = handler(session, key, previous)
    except KeyUnhandled as exc:
        logger.warning("%s", exc)
        session.result = Outcome.failure(exc)
        return session.result
    except DotViewerError as exc:
        logger.warning("%s", exc)
        if isinstance(session.mode, (Command, Search)):
            session.set_normal_mode()
        session.result = Outcome.failure(exc)
        return session.result
    session.result = Outcome(ok=True, message=message)
    return session.result
