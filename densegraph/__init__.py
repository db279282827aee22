"""
DenseGraph

A minimal in-memory directed multigraph with positional node indices,
plus a small operation-script runner used by the dgraph CLI.
"""

from densegraph.models import AddNodeResult, GraphStatus, NodeEntry
from densegraph.graph import GraphStore

__all__ = ["GraphStore", "GraphStatus", "NodeEntry", "AddNodeResult"]
__version__ = "0.1.0"
