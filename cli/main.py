"""
DenseGraph CLI

Command-line interface for driving a GraphStore with operation scripts
and printing the resulting graph.

Commands:
    dgraph demo           Run the built-in demonstration scenario
    dgraph run <script>   Run an operation script against a fresh graph

Usage:
    $ dgraph demo
    $ dgraph run ops.txt --strict
    $ dgraph --verbose run ops.txt
"""

import logging
from pathlib import Path
from typing import Iterable

import typer
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler
from rich.markup import escape
from rich import box

from densegraph import __version__
from densegraph.graph import GraphStore
from densegraph.models import GraphStatus, NodeEntry, describe_status
from densegraph.script import (
    DEMO_SCRIPT,
    OpKind,
    ScriptError,
    StepResult,
    parse_script,
    run_script,
)

# Initialize Typer app and Rich console
app = typer.Typer(
    name="dgraph",
    help="DenseGraph: an index-addressed in-memory directed graph",
    add_completion=False,
)
console = Console()

logger = logging.getLogger(__name__)


@app.command()
def demo() -> None:
    """
    Run the built-in demonstration scenario.

    Adds a root and a child, doubles the edge between them, then removes
    the extra edge and the child, printing the graph along the way.
    """
    operations = parse_script(DEMO_SCRIPT)
    store = GraphStore()

    console.print("\n[bold blue]▶ Demo scenario[/bold blue]\n")
    _print_steps(run_script(store, operations))


@app.command()
def run(
    script: Path = typer.Argument(
        ...,
        help="Path to the operation script",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        "-s",
        help="Exit with code 1 if any operation returns a failure status",
    ),
) -> None:
    """
    Run an operation script against a fresh graph.

    The whole script is parsed first; a malformed line aborts before any
    operation runs. Failed graph operations are reported and the script
    continues.
    """
    try:
        operations = parse_script(script.read_text(encoding="utf-8"))
    except (ScriptError, UnicodeDecodeError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(script.name)}: {escape(str(e))}")
        raise typer.Exit(1)

    logger.debug(f"Parsed {len(operations)} operation(s) from {script}")

    store = GraphStore()
    console.print(f"\n[bold blue]▶ Running:[/bold blue] {escape(str(script))}\n")
    results = run_script(store, operations)
    _print_steps(results)

    console.print("\n[bold]Final graph:[/bold]")
    _print_graph(store.enumerate())

    failures = [r for r in results if not r.ok]
    if failures:
        console.print(
            f"\n[yellow]⚠️  {len(failures)} of {len(results)} operation(s) failed[/yellow]"
        )
        if strict:
            raise typer.Exit(1)


# Helper functions for output formatting

_STATUS_COLORS = {
    GraphStatus.SUCCESS: "green",
    GraphStatus.INVALID_PARENT: "yellow",
    GraphStatus.INVALID_NODE: "red",
    GraphStatus.INVALID_EDGE: "red",
}


def _print_steps(results: list[StepResult]) -> None:
    """Print one line per step, and the graph at every print step."""
    for result in results:
        operation = result.operation
        if operation.kind is OpKind.PRINT:
            _print_graph(result.snapshot or ())
            continue

        color = _STATUS_COLORS[result.status]
        icon = "✓" if result.ok else "✗"
        label = describe_status(result.status, result.index)
        console.print(
            f"[{color}]{icon}[/{color}] {escape(str(operation))}  [{color}]{label}[/{color}]"
        )


def _print_graph(entries: Iterable[NodeEntry]) -> None:
    """Print nodes and their adjacency lists as a table."""
    console.print("[bold]Graph Nodes and Adjacency Lists:[/bold]")
    table = Table(box=box.ROUNDED)
    table.add_column("Node", justify="right", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Targets")

    count = 0
    for entry in entries:
        targets = " ".join(str(t) for t in entry.targets) or "[dim]-[/dim]"
        table.add_row(str(entry.index), f"{entry.value:g}", targets)
        count += 1

    if count == 0:
        console.print("[dim](empty graph)[/dim]")
        return
    console.print(table)


# Loggers the CLI routes through rich; the root logger is left alone
_LOGGER_NAMES = ("densegraph", "cli")


def _configure_logging(verbose: bool) -> None:
    """Route densegraph and cli logging through rich."""
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    for name in _LOGGER_NAMES:
        log = logging.getLogger(name)
        for existing in [h for h in log.handlers if isinstance(h, RichHandler)]:
            log.removeHandler(existing)
        log.addHandler(handler)
        log.setLevel(logging.DEBUG if verbose else logging.WARNING)
        log.propagate = False


# Version command
def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]DenseGraph[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every graph operation",
    ),
) -> None:
    """
    DenseGraph: an index-addressed in-memory directed graph.
    """
    _configure_logging(verbose)


if __name__ == "__main__":
    app()
