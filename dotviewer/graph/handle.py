"""Read-only graph handle over a ``networkx`` multigraph.

Every derivation (prefix filter, cluster extraction, bounded neighbourhood)
builds a new handle; the source handle is never mutated.
"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable
from typing import TextIO

import networkx as nx

from ..errors import NoMatch, NotFound
from .types import SubgraphNode

_PLAIN_ID_RE = re.compile(r"^(?:[A-Za-z_\u0080-\uffff][A-Za-z0-9_\u0080-\uffff]*|-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?))$")
_INDENT = "    "
_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})


def quote_id(value: object) -> str:
    """Render ``value`` as a DOT ID, quoting only when required."""
    text = str(value)
    if _PLAIN_ID_RE.match(text) and text.lower() not in _KEYWORDS:
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_attrs(attrs: dict[str, object]) -> str:
    if not attrs:
        return ""
    body = ", ".join(f"{quote_id(key)}={quote_id(value)}" for key, value in sorted(attrs.items()))
    return f" [{body}]"


class GraphHandle:
    """Immutable snapshot of a directed graph plus its cluster hierarchy."""

    def __init__(
        self,
        graph_id: str,
        graph: nx.MultiDiGraph,
        tree: SubgraphNode | None = None,
    ) -> None:
        self.graph_id = graph_id
        self._graph = graph
        self.tree = tree if tree is not None else SubgraphNode(graph_id, tuple(graph.nodes))

    @classmethod
    def from_edges(
        cls,
        graph_id: str,
        nodes: Iterable[str],
        edges: Iterable[tuple[str, str]] = (),
    ) -> GraphHandle:
        """Build a cluster-free handle from plain node ids and edges."""
        graph = nx.MultiDiGraph()
        graph.add_nodes_from(nodes)
        graph.add_edges_from(edges)
        return cls(graph_id, graph)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def is_empty(self) -> bool:
        return self._graph.number_of_nodes() == 0

    def node_ids(self) -> list[str]:
        return list(self._graph.nodes)

    def subgraph_tree(self) -> SubgraphNode:
        return self.tree

    def node_attributes(self, node_id: str) -> dict[str, object]:
        self._require(node_id)
        return dict(self._graph.nodes[node_id])

    def _require(self, node_id: str) -> None:
        if node_id not in self._graph:
            raise NotFound(f"no such node {node_id!r}")

    def predecessors(self, node_id: str) -> list[str]:
        self._require(node_id)
        return list(self._graph.predecessors(node_id))

    def successors(self, node_id: str) -> list[str]:
        self._require(node_id)
        return list(self._graph.successors(node_id))

    def _derive(self, keep: Iterable[str], graph_id: str, tree: SubgraphNode | None = None) -> GraphHandle:
        keep_set = set(keep)
        sub = self._graph.subgraph(keep_set).copy()
        base = tree if tree is not None else self.tree
        restricted = base.restricted(keep_set)
        return GraphHandle(graph_id, sub, restricted)

    def filter(self, prefix: str) -> GraphHandle | None:
        """Keep nodes whose id starts with ``prefix``; ``None`` when none do."""
        keep = [node_id for node_id in self._graph.nodes if node_id.startswith(prefix)]
        if not keep:
            return None
        return self._derive(keep, self.graph_id)

    def subgraph(self, name: str) -> GraphHandle | None:
        """Extract cluster ``name`` with its nested clusters; ``None`` when empty."""
        cluster = self.tree.find(name)
        if cluster is None:
            raise NoMatch(f"no such subgraph {name!r}")
        members = cluster.all_nodes()
        if not members:
            return None
        return self._derive(members, name, tree=cluster)

    def bounded_neighbors(self, node_id: str, depth: int) -> GraphHandle:
        """Nodes within ``depth`` hops of ``node_id`` along edges in either direction."""
        self._require(node_id)
        if depth < 0:
            raise NoMatch(f"negative neighbor depth {depth}")
        keep: set[str] = {node_id}
        for step in (self._graph.successors, self._graph.predecessors):
            frontier: deque[tuple[str, int]] = deque([(node_id, 0)])
            visited = {node_id}
            while frontier:
                current, dist = frontier.popleft()
                if dist >= depth:
                    continue
                for neighbor in step(current):
                    if neighbor in visited:
                        continue
                    visited.add(neighbor)
                    frontier.append((neighbor, dist + 1))
            keep |= visited
        return self._derive(keep, self.graph_id)

    def serialize_node(self, node_id: str) -> str:
        """Return the one-line DOT statement for ``node_id`` (id plus attributes)."""
        self._require(node_id)
        return f"{quote_id(node_id)}{_format_attrs(self._graph.nodes[node_id])}"

    def edge_list(self) -> list[tuple[str, str, dict[str, object]]]:
        return [(src, dst, dict(data)) for src, dst, data in self._graph.edges(data=True)]

    def serialize_whole(self, sink: TextIO) -> None:
        """Write the graph as DOT text, nesting nodes inside their clusters."""
        placed: set[str] = set()
        sink.write(f"digraph {quote_id(self.graph_id)} {{\n")

        def write_cluster(cluster: SubgraphNode, depth: int) -> None:
            indent = _INDENT * depth
            sink.write(f"{indent}subgraph {quote_id(cluster.name)} {{\n")
            write_members(cluster, depth + 1)
            sink.write(f"{indent}}}\n")

        def write_members(cluster: SubgraphNode, depth: int) -> None:
            indent = _INDENT * depth
            for child in cluster.children:
                write_cluster(child, depth)
            for node_id in cluster.nodes:
                if node_id in placed or node_id not in self._graph:
                    continue
                placed.add(node_id)
                sink.write(f"{indent}{self.serialize_node(node_id)};\n")

        write_members(self.tree, 1)
        for node_id in self._graph.nodes:
            if node_id not in placed:
                placed.add(node_id)
                sink.write(f"{_INDENT}{self.serialize_node(node_id)};\n")
        for src, dst, data in self._graph.edges(data=True):
            sink.write(f"{_INDENT}{quote_id(src)} -> {quote_id(dst)}{_format_attrs(data)};\n")
        sink.write("}\n")
