"""Live node search: pure matchers and the per-view incremental engine."""

from .engine import MATCHERS, SearchEngine, SearchKind
from .matchers import Match, fuzzy_indices, match_fuzzy, match_prefix, match_regex

__all__ = [
    "MATCHERS",
    "Match",
    "SearchEngine",
    "SearchKind",
    "fuzzy_indices",
    "match_fuzzy",
    "match_prefix",
    "match_regex",
]
