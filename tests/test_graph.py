"""Tests for the DOT adapter and the immutable graph handle."""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path

from dotviewer.errors import NoMatch, NotFound, ParseFailure
from dotviewer.graph import GraphHandle, SubgraphNode, parse, parse_string, quote_id

SAMPLE_DOT = """
digraph G {
    subgraph cluster_a {
        a1;
        a2 [label="two"];
    }
    a1 -> a2;
    a2 -> b;
    "quoted id" -> b;
}
"""


def _chain() -> GraphHandle:
    return GraphHandle.from_edges(
        "chain",
        ["a", "b", "c", "d", "e"],
        [("a", "b"), ("b", "c"), ("c", "d"), ("d", "e")],
    )


class ParseTests(unittest.TestCase):
    def test_parse_string_collects_nodes_edges_and_clusters(self) -> None:
        graph = parse_string(SAMPLE_DOT)

        self.assertEqual(graph.graph_id, "G")
        self.assertEqual(set(graph.node_ids()), {"a1", "a2", "b", "quoted id"})
        self.assertEqual(graph.successors("a2"), ["b"])
        self.assertEqual(sorted(graph.predecessors("b")), ["a2", "quoted id"])
        self.assertEqual(graph.node_attributes("a2"), {"label": "two"})
        cluster = graph.tree.find("cluster_a")
        assert cluster is not None
        self.assertEqual(cluster.nodes, ("a1", "a2"))

    def test_parse_string_rejects_garbage(self) -> None:
        with self.assertRaises(ParseFailure):
            parse_string("digraph {")

    def test_parse_missing_file_is_parse_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ParseFailure):
                parse(Path(tmp) / "missing.dot")

    def test_parse_reads_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sample.dot"
            path.write_text(SAMPLE_DOT, encoding="utf-8")
            graph = parse(path)
        self.assertIn("a1", graph)
        self.assertEqual(len(graph), 4)


class GraphHandleTests(unittest.TestCase):
    def test_unknown_node_adjacency_raises_not_found(self) -> None:
        graph = _chain()
        with self.assertRaises(NotFound):
            graph.successors("zz")
        with self.assertRaises(NotFound):
            graph.serialize_node("zz")

    def test_filter_returns_new_handle_or_none(self) -> None:
        graph = GraphHandle.from_edges("g", ["foo", "bar", "baz"], [("foo", "bar"), ("bar", "baz")])
        filtered = graph.filter("ba")
        assert filtered is not None
        self.assertEqual(filtered.node_ids(), ["bar", "baz"])
        self.assertEqual(filtered.successors("bar"), ["baz"])
        self.assertEqual(len(graph), 3)
        self.assertIsNone(graph.filter("qux"))

    def test_bounded_neighbors_follows_both_directions(self) -> None:
        graph = _chain()
        self.assertEqual(set(graph.bounded_neighbors("c", 1).node_ids()), {"b", "c", "d"})
        self.assertEqual(set(graph.bounded_neighbors("c", 2).node_ids()), {"a", "b", "c", "d", "e"})
        self.assertEqual(graph.bounded_neighbors("c", 0).node_ids(), ["c"])

    def test_subgraph_extracts_nested_clusters(self) -> None:
        inner = SubgraphNode("cluster_inner", ("c",))
        outer = SubgraphNode("cluster_outer", ("b",), (inner,))
        root = SubgraphNode("chain", ("a", "d", "e"), (outer,))
        graph = GraphHandle("chain", _chain()._graph, root)

        extracted = graph.subgraph("cluster_outer")
        assert extracted is not None
        self.assertEqual(set(extracted.node_ids()), {"b", "c"})
        self.assertEqual(extracted.graph_id, "cluster_outer")
        self.assertIsNotNone(extracted.tree.find("cluster_inner"))
        with self.assertRaises(NoMatch):
            graph.subgraph("cluster_missing")

    def test_serialize_node_includes_sorted_attributes(self) -> None:
        graph = parse_string('digraph { "x y" [shape=box, label="hello world"]; }')
        self.assertEqual(graph.serialize_node("x y"), '"x y" [label="hello world", shape=box]')

    def test_serialize_whole_writes_clusters_and_edges(self) -> None:
        graph = parse_string(SAMPLE_DOT)
        sink = io.StringIO()
        graph.serialize_whole(sink)
        text = sink.getvalue()

        self.assertTrue(text.startswith("digraph G {\n"))
        self.assertIn("subgraph cluster_a {", text)
        self.assertIn('"quoted id" -> b;', text)
        self.assertTrue(text.endswith("}\n"))
        reparsed = parse_string(text)
        self.assertEqual(set(reparsed.node_ids()), set(graph.node_ids()))

    def test_quote_id(self) -> None:
        self.assertEqual(quote_id("plain_id"), "plain_id")
        self.assertEqual(quote_id("-1.5"), "-1.5")
        self.assertEqual(quote_id("has space"), '"has space"')
        self.assertEqual(quote_id('say "hi"'), '"say \\"hi\\""')
        self.assertEqual(quote_id("node"), '"node"')


if __name__ == "__main__":
    unittest.main()
