"""
Operation Script Runner

Applies parsed Operations to a GraphStore and records what each one did.
Graph failures come back from the store as GraphStatus values and are
collected, never raised, so a script always runs to the end.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from densegraph.graph import GraphStore
from densegraph.models import GraphStatus, NodeEntry
from densegraph.script.parser import OpKind, Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """
    Outcome of applying one Operation.

    Attributes:
        operation: The operation that was applied
        status: Status returned by the store (SUCCESS for print)
        index: New node index for add-node, None otherwise
        snapshot: Graph contents for print, None otherwise
    """

    operation: Operation
    status: GraphStatus
    index: Optional[int] = None
    snapshot: Optional[tuple[NodeEntry, ...]] = None

    @property
    def ok(self) -> bool:
        return self.status.ok


def apply_operation(store: GraphStore, operation: Operation) -> StepResult:
    """
    Apply a single operation to the store.

    Args:
        store: The graph to mutate
        operation: Parsed operation

    Returns:
        StepResult describing the outcome
    """
    kind = operation.kind
    args = operation.args

    if kind is OpKind.ADD_NODE:
        value, parent = args
        index, status = store.add_node(value, parent)
        return StepResult(operation, status, index=index)
    if kind is OpKind.ADD_EDGE:
        return StepResult(operation, store.add_edge(*args))
    if kind is OpKind.REMOVE_EDGE:
        return StepResult(operation, store.remove_edge(*args))
    if kind is OpKind.REMOVE_NODE:
        return StepResult(operation, store.remove_node(*args))

    return StepResult(operation, GraphStatus.SUCCESS, snapshot=tuple(store.enumerate()))


def run_script(store: GraphStore, operations: Iterable[Operation]) -> list[StepResult]:
    """
    Apply operations in order, continuing past failed statuses.

    Args:
        store: The graph to mutate
        operations: Operations to apply

    Returns:
        One StepResult per operation, in order
    """
    results = [apply_operation(store, operation) for operation in operations]

    failures = [r for r in results if not r.ok]
    logger.info(f"Ran {len(results)} operation(s), {len(failures)} failed")
    return results
