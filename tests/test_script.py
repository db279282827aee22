"""
Tests for the script module.

Tests operation script parsing and running scripts against a GraphStore.
"""

import logging

import pytest

from densegraph.graph import GraphStore
from densegraph.models import GraphStatus, NodeEntry
from densegraph.script import (
    DEMO_SCRIPT,
    OpKind,
    Operation,
    ScriptError,
    apply_operation,
    parse_line,
    parse_script,
    run_script,
)
from tests.fixtures import (
    ALL_OPERATIONS,
    BAD_INDEX,
    FAILING_OPERATIONS,
    UNKNOWN_KEYWORD,
    WRONG_ARITY,
    adjacency,
)


class TestParseLine:
    """Tests for single-line parsing."""

    def test_add_node_without_parent(self):
        """Test that a missing parent parses as None."""
        op = parse_line("add-node 1.23")

        assert op.kind == OpKind.ADD_NODE
        assert op.args == (1.23, None)

    def test_add_node_with_parent(self):
        op = parse_line("add-node -4.5 2", line_number=7)

        assert op.args == (-4.5, 2)
        assert op.line_number == 7

    def test_edge_operations(self):
        """Test that edge operations carry two indices."""
        assert parse_line("add-edge 0 1").args == (0, 1)
        assert parse_line("remove-edge 3 3").kind == OpKind.REMOVE_EDGE

    def test_remove_node_and_print(self):
        assert parse_line("remove-node 4").args == (4,)
        assert parse_line("print").args == ()

    def test_keywords_case_insensitive(self):
        assert parse_line("Add-Edge 1 2").kind == OpKind.ADD_EDGE

    @pytest.mark.parametrize("line", ["", "   ", "# comment", "   # indented comment"])
    def test_blank_and_comment_lines(self, line):
        """Test that lines without an operation parse to None."""
        assert parse_line(line) is None

    def test_trailing_comment_ignored(self):
        assert parse_line("remove-node 2  # drop it").args == (2,)

    def test_special_float_values(self):
        """Test that anything float() accepts is a valid value."""
        assert parse_line("add-node inf").args[0] == float("inf")
        assert parse_line("add-node 1e3").args[0] == 1000.0

    def test_unknown_keyword(self):
        with pytest.raises(ScriptError, match="unknown operation"):
            parse_line("connect 0 1")

    @pytest.mark.parametrize("line", ["add-edge 0 -1", "remove-node 1.5", "add-node 1 x"])
    def test_bad_index(self, line):
        """Test that indices must be non-negative integers."""
        with pytest.raises(ScriptError, match="non-negative integer"):
            parse_line(line)

    def test_bad_value(self):
        with pytest.raises(ScriptError, match="expected a number"):
            parse_line("add-node abc")

    @pytest.mark.parametrize(
        "line", ["add-node", "add-node 1 2 3", "add-edge 1", "remove-node", "print 1"]
    )
    def test_wrong_arity(self, line):
        with pytest.raises(ScriptError, match="argument"):
            parse_line(line)

    def test_error_is_value_error(self):
        """Test that ScriptError carries position info and is a ValueError."""
        with pytest.raises(ValueError) as exc_info:
            parse_line("nope", line_number=12)

        assert exc_info.value.line_number == 12
        assert exc_info.value.line == "nope"
        assert str(exc_info.value).startswith("line 12:")

    def test_operation_str(self):
        """Test that operations render back to script syntax."""
        assert str(parse_line("add-node 1.5")) == "add-node 1.5"
        assert str(parse_line("add-node 2.5 0")) == "add-node 2.5 0"
        assert str(parse_line("remove-edge 0 1")) == "remove-edge 0 1"


class TestParseScript:
    """Tests for whole-script parsing."""

    def test_skips_blank_and_comment_lines(self):
        ops = parse_script(ALL_OPERATIONS)

        assert [op.kind for op in ops] == [
            OpKind.ADD_NODE,
            OpKind.ADD_NODE,
            OpKind.ADD_EDGE,
            OpKind.REMOVE_EDGE,
            OpKind.REMOVE_NODE,
            OpKind.PRINT,
        ]

    def test_line_numbers_are_source_lines(self):
        ops = parse_script(ALL_OPERATIONS)

        assert [op.line_number for op in ops] == [3, 4, 6, 7, 8, 9]

    @pytest.mark.parametrize(
        "script, line_number",
        [(UNKNOWN_KEYWORD, 3), (BAD_INDEX, 3), (WRONG_ARITY, 2)],
    )
    def test_error_reports_line(self, script, line_number):
        """Test that the first malformed line is reported."""
        with pytest.raises(ScriptError) as exc_info:
            parse_script(script)

        assert exc_info.value.line_number == line_number

    def test_empty_script(self):
        assert parse_script("") == []


class TestRunScript:
    """Tests for applying operations to a store."""

    def test_apply_add_node_reports_index(self):
        store = GraphStore()

        result = apply_operation(store, Operation(OpKind.ADD_NODE, (2.0, None)))

        assert result.index == 0
        assert result.status == GraphStatus.SUCCESS
        assert result.snapshot is None

    def test_print_step_takes_snapshot(self):
        """Test that print captures the graph at that point."""
        store = GraphStore()
        store.add_node(1.0)

        result = apply_operation(store, Operation(OpKind.PRINT))
        store.add_node(2.0)

        assert result.ok
        assert result.snapshot == (NodeEntry(index=0, value=1.0),)

    def test_all_operations(self):
        store = GraphStore()

        results = run_script(store, parse_script(ALL_OPERATIONS))

        assert all(r.ok for r in results)
        assert [r.index for r in results[:2]] == [0, 1]
        assert results[-1].snapshot == (NodeEntry(index=0, value=2.5),)

    def test_failures_do_not_stop_the_script(self):
        """Test that failed statuses are collected and the run continues."""
        store = GraphStore()

        results = run_script(store, parse_script(FAILING_OPERATIONS))

        assert [r.status for r in results] == [
            GraphStatus.SUCCESS,
            GraphStatus.INVALID_PARENT,
            GraphStatus.INVALID_EDGE,
            GraphStatus.INVALID_EDGE,
            GraphStatus.INVALID_NODE,
            GraphStatus.SUCCESS,
        ]
        # The node with the invalid parent is still there
        assert results[1].index == 1
        assert store.node_count == 2
        assert store.edge_count == 0

    def test_demo_script(self):
        """Test the built-in demonstration scenario end to end."""
        store = GraphStore()

        results = run_script(store, parse_script(DEMO_SCRIPT))

        assert all(r.ok for r in results)
        snapshots = [r.snapshot for r in results if r.operation.kind == OpKind.PRINT]
        assert snapshots == [
            (NodeEntry(0, 1.23, (1, 1)), NodeEntry(1, 4.56, ())),
            (NodeEntry(0, 1.23, ()),),
        ]
        assert adjacency(store) == [[]]

    def test_run_logs_one_summary_line(self, caplog, monkeypatch):
        """Test that the runner logs a single summary instead of every failure."""
        monkeypatch.setattr(logging.getLogger("densegraph"), "propagate", True)
        store = GraphStore()

        with caplog.at_level(logging.INFO, logger="densegraph.script.runner"):
            run_script(store, parse_script(FAILING_OPERATIONS))

        messages = [r.getMessage() for r in caplog.records if r.name == "densegraph.script.runner"]
        assert messages == ["Ran 6 operation(s), 4 failed"]
