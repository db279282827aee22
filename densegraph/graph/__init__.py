"""
Graph module for DenseGraph.

This module provides the index-addressed GraphStore: an ordered list of
float-valued nodes with per-node ordered adjacency lists.
"""

from densegraph.graph.store import GraphStore

__all__ = [
    "GraphStore",
]
