"""
Test fixtures for DenseGraph.

This module provides sample operation scripts and helper functions
for testing the graph store and the script runner.
"""

from densegraph.graph import GraphStore

# A tree with one extra cross edge and a self-loop
SMALL_TREE = '''
add-node 10
add-node 20 0
add-node 30 0
add-node 40 1
add-edge 3 2
add-edge 2 2
'''

# Every kind of operation, including comments and a print step
ALL_OPERATIONS = '''
# header comment
add-node 1.5
ADD-NODE 2.5 0   # trailing comment

add-edge 1 0
remove-edge 0 1
remove-node 0
print
'''

# Well-formed script where some operations fail on the graph
FAILING_OPERATIONS = '''
add-node 1.0
add-node 2.0 5
add-edge 0 9
remove-edge 0 1
remove-node 7
print
'''

UNKNOWN_KEYWORD = '''
add-node 1.0
connect 0 0
'''

BAD_INDEX = '''
add-node 1.0
add-edge 0 -1
'''

WRONG_ARITY = '''
add-node
'''


def adjacency(store: GraphStore) -> list[list[int]]:
    """Return every node's targets as plain lists, in index order."""
    return [list(entry.targets) for entry in store.enumerate()]


def values(store: GraphStore) -> list[float]:
    """Return every node's value, in index order."""
    return [entry.value for entry in store.enumerate()]


def assert_invariants(store: GraphStore) -> None:
    """Check that indices are contiguous and no target dangles."""
    entries = list(store.enumerate())
    assert [entry.index for entry in entries] == list(range(store.node_count))
    for entry in entries:
        for target in entry.targets:
            assert 0 <= target < store.node_count
