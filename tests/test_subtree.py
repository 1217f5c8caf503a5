from __future__ import annotations

import unittest

from dotviewer.graph import SubgraphNode
from dotviewer.model import SubgraphTree


def _tree() -> SubgraphTree:
    leaf = SubgraphNode("cluster_leaf", ("c",))
    left = SubgraphNode("cluster_left", ("b",), (leaf,))
    right = SubgraphNode("cluster_right", ("d",))
    return SubgraphTree(SubgraphNode("G", ("a",), (left, right)))


class SubgraphTreeTests(unittest.TestCase):
    def test_root_starts_expanded(self) -> None:
        tree = _tree()
        self.assertEqual([e.name for e in tree.entries], ["G", "cluster_left", "cluster_right"])
        self.assertEqual(tree.selected(), "G")

    def test_right_expands_then_descends(self) -> None:
        tree = _tree()
        tree.down()
        tree.right()
        self.assertEqual(tree.selected(), "cluster_left")
        self.assertIn("cluster_leaf", [e.name for e in tree.entries])
        tree.right()
        self.assertEqual(tree.selected(), "cluster_leaf")

    def test_left_moves_to_parent_then_collapses(self) -> None:
        tree = _tree()
        tree.down()
        tree.right()
        tree.right()
        tree.left()
        self.assertEqual(tree.selected(), "cluster_left")
        tree.left()
        self.assertEqual(tree.selected(), "cluster_left")
        self.assertNotIn("cluster_leaf", [e.name for e in tree.entries])

    def test_restricted_prunes_empty_clusters(self) -> None:
        root = _tree().root
        pruned = root.restricted({"a", "b"})
        self.assertIsNotNone(pruned.find("cluster_left"))
        self.assertIsNone(pruned.find("cluster_leaf"))
        self.assertIsNone(pruned.find("cluster_right"))
        self.assertEqual(root.all_nodes(), ["a", "b", "c", "d"])


if __name__ == "__main__":
    unittest.main()
