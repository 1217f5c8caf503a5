"""DOT parsing through ``pydot`` into :class:`GraphHandle` snapshots."""

from __future__ import annotations

from pathlib import Path

import networkx as nx
import pydot

from ..errors import ParseFailure
from .handle import GraphHandle
from .types import SubgraphNode

_DEFAULT_STATEMENTS = frozenset({"node", "edge", "graph"})


def unquote(raw: str) -> str:
    """Strip DOT double quotes and unescape embedded quotes."""
    text = raw.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1].replace('\\"', '"')
    return text


def _endpoint(raw: object) -> str | None:
    """Return the node id for an edge endpoint, dropping ports; ``None`` for subgraph endpoints."""
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if text.startswith('"'):
        closing = text.find('"', 1)
        while closing > 0 and text[closing - 1] == "\\":
            closing = text.find('"', closing + 1)
        if closing > 0:
            return unquote(text[: closing + 1])
        return unquote(text)
    return text.split(":", 1)[0]


def _attributes(raw: dict[str, object]) -> dict[str, str]:
    return {key: unquote(str(value)) for key, value in raw.items()}


def _build(dot: pydot.Dot, fallback_id: str) -> GraphHandle:
    graph = nx.MultiDiGraph()

    def visit(container, name: str) -> SubgraphNode:
        members: dict[str, None] = {}
        for node in container.get_nodes():
            raw_name = node.get_name()
            if raw_name in _DEFAULT_STATEMENTS:
                continue
            node_id = unquote(raw_name)
            attrs = _attributes(node.get_attributes())
            if node_id in graph:
                graph.nodes[node_id].update(attrs)
            else:
                graph.add_node(node_id, **attrs)
            members.setdefault(node_id, None)

        children = tuple(visit(sub, unquote(sub.get_name())) for sub in container.get_subgraphs())

        for edge in container.get_edges():
            src = _endpoint(edge.get_source())
            dst = _endpoint(edge.get_destination())
            if src is None or dst is None:
                continue
            for node_id in (src, dst):
                if node_id not in graph:
                    graph.add_node(node_id)
                members.setdefault(node_id, None)
            graph.add_edge(src, dst, **_attributes(edge.get_attributes()))

        return SubgraphNode(name=name, nodes=tuple(members), children=children)

    graph_id = unquote(dot.get_name() or "") or fallback_id
    tree = visit(dot, graph_id)
    return GraphHandle(graph_id, graph, tree)


def parse_string(text: str, fallback_id: str = "DAG") -> GraphHandle:
    """Parse DOT source text; raise :class:`ParseFailure` when it is not a graph."""
    try:
        graphs = pydot.graph_from_dot_data(text)
    except Exception as exc:
        raise ParseFailure(str(exc) or "invalid DOT source") from exc
    if not graphs:
        raise ParseFailure("no graph found in DOT source")
    return _build(graphs[0], fallback_id)


def parse(path: str | Path) -> GraphHandle:
    """Read and parse the DOT file at ``path``."""
    target = Path(path)
    try:
        text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseFailure(f"cannot read {target}: {exc}") from exc
    return parse_string(text, fallback_id=target.stem or "DAG")
