"""
Script module for DenseGraph.

This module provides parsing of line-oriented operation scripts and a
runner that applies them to a GraphStore.
"""

from densegraph.script.parser import (
    DEMO_SCRIPT,
    OpKind,
    Operation,
    ScriptError,
    parse_line,
    parse_script,
)
from densegraph.script.runner import StepResult, apply_operation, run_script

__all__ = [
    "DEMO_SCRIPT",
    "OpKind",
    "Operation",
    "ScriptError",
    "parse_line",
    "parse_script",
    "StepResult",
    "apply_operation",
    "run_script",
]
