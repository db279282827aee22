"""
Graph Store for DenseGraph

This module implements a dense, index-addressed directed multigraph where
each node carries one float value and owns an ordered list of outgoing
edge targets.

Design Decisions:
    - Two parallel owned lists: node values and per-node target lists
    - Node identity is positional only; removing a node renumbers every
      node after it and rewrites all target lists in one eager pass
    - Edges are not deduplicated; self-loops and parallel edges are allowed
    - Mutations report failures through GraphStatus and never raise

Graph Properties:
    - Directed: targets are stored on the source node
    - Indices are always the contiguous range [0, n)
    - Every stored target is < n
    - Not thread-safe; callers that share a store serialize access

Index Invalidation:
    Any index a caller holds is stale after remove_node is called with a
    smaller or equal index. Re-read indices from enumerate() instead.
"""

import logging
from typing import Iterator, Optional

import networkx as nx

from densegraph.models import AddNodeResult, GraphStatus, NodeEntry

logger = logging.getLogger(__name__)


class GraphStore:
    """
    An ordered collection of scalar-valued nodes and their adjacency lists.

    All access goes through four mutators (add_node, add_edge,
    remove_edge, remove_node) and the read-only enumerate().

    Usage:
        store = GraphStore()
        root, _ = store.add_node(1.23)
        child, status = store.add_node(4.56, parent=root)
        store.add_edge(root, child)
        for entry in store.enumerate():
            print(entry.index, entry.value, entry.targets)
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._values: list[float] = []
        self._adjacency: list[list[int]] = []

    @property
    def node_count(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._values)

    @property
    def edge_count(self) -> int:
        """Return the number of edges, counting parallel edges separately."""
        return sum(len(targets) for targets in self._adjacency)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[NodeEntry]:
        return self.enumerate()

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._values)

    def add_node(self, value: float, parent: Optional[int] = None) -> AddNodeResult:
        """
        Append a node, optionally linking it from an existing parent.

        The node is always appended and receives the pre-insertion node
        count as its index. If a parent is given it must already exist
        (0 <= parent < new index); a valid parent gets an edge to the new
        node.

        An invalid parent does NOT roll back the insertion: the result
        carries the new index with status INVALID_PARENT and no edge is
        created. Callers that want all-or-nothing behavior must check the
        status and call remove_node themselves.

        Args:
            value: Scalar value stored on the node
            parent: Index of an existing node, or None for no parent

        Returns:
            AddNodeResult with the new index and SUCCESS or INVALID_PARENT
        """
        new_index = len(self._values)
        self._values.append(float(value))
        self._adjacency.append([])

        if parent is None:
            logger.debug(f"Added node #{new_index} ({value})")
            return AddNodeResult(new_index, GraphStatus.SUCCESS)

        if 0 <= parent < new_index:
            self._adjacency[parent].append(new_index)
            logger.debug(f"Added node #{new_index} ({value}) under parent #{parent}")
            return AddNodeResult(new_index, GraphStatus.SUCCESS)

        logger.debug(f"Added node #{new_index} ({value}) but parent #{parent} is invalid")
        return AddNodeResult(new_index, GraphStatus.INVALID_PARENT)

    def add_edge(self, source: int, target: int) -> GraphStatus:
        """
        Append target to the adjacency list of source.

        No deduplication is done: self-loops and repeated targets are
        stored as given.

        Args:
            source: Index of the source node
            target: Index of the target node

        Returns:
            SUCCESS, or INVALID_EDGE if either endpoint is out of range
        """
        if not (self._in_range(source) and self._in_range(target)):
            logger.debug(f"Rejected edge ({source}, {target}): endpoint out of range")
            return GraphStatus.INVALID_EDGE

        self._adjacency[source].append(target)
        logger.debug(f"Added edge ({source}, {target})")
        return GraphStatus.SUCCESS

    def remove_edge(self, source: int, target: int) -> GraphStatus:
        """
        Remove the first occurrence of target from the list of source.

        Later copies of the same edge are left in place; removing all of
        them takes one call per copy.

        Args:
            source: Index of the source node
            target: Target index to remove

        Returns:
            SUCCESS, or INVALID_EDGE if source is out of range or the
            edge does not exist
        """
        if not self._in_range(source):
            logger.debug(f"Rejected edge removal ({source}, {target}): no such source")
            return GraphStatus.INVALID_EDGE

        targets = self._adjacency[source]
        try:
            targets.remove(target)
        except ValueError:
            logger.debug(f"Rejected edge removal ({source}, {target}): no such edge")
            return GraphStatus.INVALID_EDGE

        logger.debug(f"Removed edge ({source}, {target})")
        return GraphStatus.SUCCESS

    def remove_node(self, node: int) -> GraphStatus:
        """
        Remove a node together with every edge pointing to it.

        Every node after the removed one shifts down by one index. Each
        remaining adjacency list is rewritten in a single pass that drops
        all occurrences of the removed index and decrements every target
        above it.

        Args:
            node: Index of the node to remove

        Returns:
            SUCCESS, or INVALID_NODE if node is out of range (the store
            is left untouched)
        """
        if not self._in_range(node):
            logger.debug(f"Rejected node removal #{node}: out of range")
            return GraphStatus.INVALID_NODE

        del self._values[node]
        del self._adjacency[node]

        for i, targets in enumerate(self._adjacency):
            self._adjacency[i] = [
                target - 1 if target > node else target
                for target in targets
                if target != node
            ]

        logger.debug(f"Removed node #{node}, {len(self._values)} node(s) remain")
        return GraphStatus.SUCCESS

    def enumerate(self) -> Iterator[NodeEntry]:
        """
        Iterate over all nodes in index order.

        The store is copied when this method is called, so a pass is one
        consistent snapshot even if the store is mutated while the
        iterator is being consumed. Each call starts a new pass.

        Yields:
            NodeEntry for each node, with its targets in insertion order
        """
        values = list(self._values)
        adjacency = [tuple(targets) for targets in self._adjacency]
        return (
            NodeEntry(index=i, value=value, targets=targets)
            for i, (value, targets) in enumerate(zip(values, adjacency))
        )

    def value(self, index: int) -> Optional[float]:
        """
        Get the value of a node.

        Args:
            index: Node index

        Returns:
            The value, or None if index is out of range
        """
        if not self._in_range(index):
            return None
        return self._values[index]

    def targets(self, index: int) -> Optional[tuple[int, ...]]:
        """
        Get the outgoing targets of a node, in insertion order.

        Args:
            index: Node index

        Returns:
            A tuple copy of the targets, or None if index is out of range
        """
        if not self._in_range(index):
            return None
        return tuple(self._adjacency[index])

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Build a NetworkX copy of the current graph.

        Nodes are keyed by index and carry a ``value`` attribute. Each
        adjacency entry becomes its own parallel edge, added in list order,
        so edge keys follow insertion order per (source, target) pair.

        Returns:
            A new MultiDiGraph; later changes to the store do not affect it
        """
        entries = list(self.enumerate())
        graph = nx.MultiDiGraph()
        for entry in entries:
            graph.add_node(entry.index, value=entry.value)
        for entry in entries:
            for target in entry.targets:
                graph.add_edge(entry.index, target)
        return graph
