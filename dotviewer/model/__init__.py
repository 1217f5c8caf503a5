"""Plain state containers: navigable lists, tries, tabs, input, cluster tree."""

from .input import InputBuffer
from .navigable import NavigableList
from .subtree import SubgraphTree, SubtreeEntry
from .tabs import TabStack
from .trie import AutocompleteTrie, longest_common_prefix

__all__ = [
    "AutocompleteTrie",
    "InputBuffer",
    "NavigableList",
    "SubgraphTree",
    "SubtreeEntry",
    "TabStack",
    "longest_common_prefix",
]
