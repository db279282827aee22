"""
Core Data Models for DenseGraph

This module defines the canonical data structures used throughout the system:
- GraphStatus: Outcome of every mutating graph operation
- NodeEntry: Read-only snapshot of one node and its outgoing edges
- AddNodeResult: The (index, status) pair returned when a node is added

These models are designed to be:
- Immutable (using frozen dataclasses)
- Returned by value, never written through output arguments
- Clear in their semantic meaning
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GraphStatus(Enum):
    """
    Outcome of a graph mutation.

    Statuses are returned to the caller, never raised. Each failure
    variant belongs to a specific operation.

    States:
        SUCCESS: The operation was fully applied.

        INVALID_PARENT: add_node was given a parent that did not exist
               before the insertion. The node itself is still added.

        INVALID_NODE: remove_node was given an index outside [0, n).

        INVALID_EDGE: add_edge was given an out-of-range endpoint, or
               remove_edge found no such source or no such edge.
    """

    SUCCESS = "success"
    INVALID_PARENT = "invalid_parent"
    INVALID_NODE = "invalid_node"
    INVALID_EDGE = "invalid_edge"

    @property
    def ok(self) -> bool:
        """True only for SUCCESS."""
        return self is GraphStatus.SUCCESS


@dataclass(frozen=True)
class NodeEntry:
    """
    A point-in-time view of a single node.

    Produced by GraphStore.enumerate(). The targets tuple is a copy, so
    holding on to an entry never exposes the store's internal lists.

    Attributes:
        index: Position of the node at the time of the snapshot
        value: Scalar value carried by the node
        targets: Outgoing edge targets in insertion order (may repeat)

    Invariants:
        - index is non-negative
        - every target is non-negative
    """

    index: int
    value: float
    targets: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if self.index < 0:
            raise ValueError(f"index ({self.index}) must be >= 0")
        if any(target < 0 for target in self.targets):
            raise ValueError(f"targets {self.targets} must all be >= 0")

    @property
    def out_degree(self) -> int:
        """Number of outgoing edges, counting duplicates."""
        return len(self.targets)


@dataclass(frozen=True)
class AddNodeResult:
    """
    Result of GraphStore.add_node.

    The index is always meaningful: the node is appended even when the
    requested parent is invalid, in which case status is INVALID_PARENT.

    Attributes:
        index: Index assigned to the new node
        status: SUCCESS or INVALID_PARENT
    """

    index: int
    status: GraphStatus

    def __iter__(self):
        """Allow ``index, status = store.add_node(...)`` unpacking."""
        yield self.index
        yield self.status

    @property
    def ok(self) -> bool:
        """True if the parent edge (if any) was created."""
        return self.status.ok


def describe_status(status: GraphStatus, index: Optional[int] = None) -> str:
    """Return a short human-readable label for a status."""
    label = status.value.replace("_", " ")
    if index is not None:
        return f"{label} (node #{index})"
    return label
