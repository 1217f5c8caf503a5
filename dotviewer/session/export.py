"""Graph export to DOT files and external viewer launch.

Both side effects are fire-and-forget: the session only reports whether they
started successfully.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

from ..errors import IOFailure
from ..graph import GraphHandle

logger = logging.getLogger(__name__)

CURRENT_EXPORT = "current.dot"


def export_filename(name: str) -> str:
    """Turn a title or node id into a safe file stem."""
    stem = "".join(ch for ch in name if not ch.isspace())
    for sep in {os.sep, os.altsep or os.sep}:
        stem = stem.replace(sep, "_")
    return stem or "graph"


def write_graph(export_dir: Path, filename: str, graph: GraphHandle) -> Path:
    """Write ``graph`` to ``<filename>.dot`` and refresh ``current.dot``."""
    target = export_dir / f"{export_filename(filename)}.dot"
    try:
        export_dir.mkdir(parents=True, exist_ok=True)
        for path in (target, export_dir / CURRENT_EXPORT):
            with path.open("w", encoding="utf-8") as sink:
                graph.serialize_whole(sink)
    except OSError as exc:
        raise IOFailure(f"cannot write {target}: {exc}") from exc
    logger.info("exported %d nodes to %s", len(graph), target)
    return target


def launch_viewer(export_dir: Path, command: str = "xdot") -> None:
    """Spawn ``command`` on the last exported graph with output discarded."""
    current = export_dir / CURRENT_EXPORT
    if not current.exists():
        raise IOFailure(f"nothing exported yet ({current} missing)")
    argv = [*shlex.split(command), str(current)]
    try:
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except (OSError, ValueError) as exc:
        raise IOFailure(f"cannot launch {argv[0]}: {exc}") from exc
    logger.info("launched %s", " ".join(argv))
