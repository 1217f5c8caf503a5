"""Graph adapter: DOT parsing plus read-only derivable graph snapshots."""

from .dot import parse, parse_string
from .handle import GraphHandle, quote_id
from .types import SubgraphNode

__all__ = ["GraphHandle", "SubgraphNode", "parse", "parse_string", "quote_id"]
