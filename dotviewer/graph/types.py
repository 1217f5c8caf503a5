"""Cluster hierarchy datatypes for parsed DOT graphs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class SubgraphNode:
    """One graph or subgraph: its name, directly declared nodes, and children."""

    name: str
    nodes: tuple[str, ...] = ()
    children: tuple[SubgraphNode, ...] = ()

    def walk(self) -> Iterator[SubgraphNode]:
        """Yield this subgraph and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def all_nodes(self) -> list[str]:
        """Return member node ids of the whole subtree, first occurrence order."""
        seen: dict[str, None] = {}
        for subgraph in self.walk():
            for node_id in subgraph.nodes:
                seen.setdefault(node_id, None)
        return list(seen)

    def find(self, name: str) -> SubgraphNode | None:
        for subgraph in self.walk():
            if subgraph.name == name:
                return subgraph
        return None

    def restricted(self, keep: set[str]) -> SubgraphNode:
        """Return a copy holding only ``keep`` nodes, pruning emptied children."""
        children = []
        for child in self.children:
            pruned = child.restricted(keep)
            if pruned.nodes or pruned.children:
                children.append(pruned)
        return SubgraphNode(
            name=self.name,
            nodes=tuple(node_id for node_id in self.nodes if node_id in keep),
            children=tuple(children),
        )
