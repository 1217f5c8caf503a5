from __future__ import annotations

import unittest

from dotviewer.errors import NoMatch, NotFound
from dotviewer.graph import GraphHandle
from dotviewer.search import SearchKind
from dotviewer.view import Focus, View


def _view() -> View:
    graph = GraphHandle.from_edges(
        "G",
        ["a", "b", "c", "d"],
        [("a", "b"), ("a", "c"), ("b", "c"), ("c", "d")],
    )
    return View("G", graph)


class FocusTests(unittest.TestCase):
    def test_three_rotations_return_to_current(self) -> None:
        focus = Focus.CURRENT
        for _ in range(3):
            focus = focus.right()
        self.assertIs(focus, Focus.CURRENT)
        for _ in range(3):
            focus = focus.left()
        self.assertIs(focus, Focus.CURRENT)

    def test_ring_order(self) -> None:
        self.assertIs(Focus.CURRENT.right(), Focus.PREV)
        self.assertIs(Focus.PREV.right(), Focus.NEXT)
        self.assertIs(Focus.CURRENT.left(), Focus.NEXT)


class ViewTests(unittest.TestCase):
    def test_adjacency_follows_current_selection(self) -> None:
        view = _view()
        self.assertEqual(view.current_id(), "a")
        self.assertEqual(view.prevs.items, [])
        self.assertEqual(view.nexts.items, ["b", "c"])

        view.down()
        self.assertEqual(view.current_id(), "b")
        self.assertEqual(view.prevs.items, ["a"])
        self.assertEqual(view.nexts.items, ["c"])

    def test_movement_in_side_list_does_not_touch_current(self) -> None:
        view = _view()
        view.right()
        view.right()
        self.assertIs(view.focus, Focus.NEXT)
        view.down()
        self.assertEqual(view.nexts.selected(), "c")
        self.assertEqual(view.current_id(), "a")

    def test_enter_jumps_to_focused_neighbor(self) -> None:
        view = _view()
        view.left()
        view.last()
        view.enter()
        self.assertEqual(view.current_id(), "c")
        self.assertEqual(sorted(view.prevs.items), ["a", "b"])

    def test_enter_on_current_is_a_no_op(self) -> None:
        view = _view()
        view.enter()
        self.assertEqual(view.current_id(), "a")

    def test_enter_without_neighbor_is_not_found(self) -> None:
        view = _view()
        view.right()
        with self.assertRaises(NotFound):
            view.enter()

    def test_goto(self) -> None:
        view = _view()
        view.goto("d")
        self.assertEqual(view.current_id(), "d")
        self.assertEqual(view.prevs.items, ["c"])
        with self.assertRaises(NotFound):
            view.goto("zz")

    def test_filter_builds_new_view_and_leaves_parent_alone(self) -> None:
        view = _view()
        child = view.filter("c")
        self.assertEqual(child.title, "G - c")
        self.assertEqual(child.current.items, ["c"])

        with self.assertRaises(NoMatch):
            view.filter("zz")
        self.assertEqual(view.current.items, ["a", "b", "c", "d"])

    def test_subgraph_of_root_cluster(self) -> None:
        view = _view()
        child = view.subgraph()
        self.assertEqual(child.title, "G")
        self.assertEqual(child.current.items, ["a", "b", "c", "d"])

    def test_neighbors_of_current(self) -> None:
        view = _view()
        view.goto("c")
        graph = view.neighbors(1)
        self.assertEqual(set(graph.node_ids()), {"a", "b", "c", "d"})

    def test_search_jumps_to_first_match(self) -> None:
        view = _view()
        view.update_search(SearchKind.PREFIX, "c")
        self.assertEqual(view.current_id(), "c")
        self.assertEqual(view.progress_matches(), "[1 / 1 (0.000%)]")

    def test_empty_search_result_leaves_current(self) -> None:
        view = _view()
        view.goto("b")
        view.update_search(SearchKind.PREFIX, "zz")
        self.assertEqual(view.current_id(), "b")
        self.assertEqual(view.progress_matches(), "No Match...")

    def test_clear_search_drops_matches_and_adjacency(self) -> None:
        view = _view()
        view.update_search(SearchKind.FUZZY, "b")
        view.clear_search()
        self.assertEqual(view.matches.items, [])
        self.assertEqual(view.prevs.items, [])
        self.assertEqual(view.nexts.items, [])

    def test_progress_strings(self) -> None:
        view = _view()
        view.goto("b")
        self.assertEqual(view.progress_current(), "[2 / 4 (25.000%)]")
        empty = View("E", GraphHandle.from_edges("E", []))
        self.assertEqual(empty.progress_current(), "Empty")
        self.assertIsNone(empty.record())


if __name__ == "__main__":
    unittest.main()
