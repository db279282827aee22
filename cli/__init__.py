"""
CLI module for DenseGraph.

The command-line interface providing the demo and run commands.
"""

from cli.main import app

__all__ = ["app"]
