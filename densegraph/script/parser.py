"""
Operation Script Parser

This module turns line-oriented operation scripts into Operation records
that the runner applies to a GraphStore.

Script Format:
    One operation per line. Blank lines and anything after '#' are
    ignored, keywords are case-insensitive.

        add-node VALUE [PARENT]
        add-edge SOURCE TARGET
        remove-edge SOURCE TARGET
        remove-node NODE
        print

    VALUE is anything float() accepts. Indices are non-negative decimal
    integers.

Design Decisions:
    - Malformed lines raise ScriptError; a script is parsed completely
      before any of it runs, so a bad line never leaves a half-applied
      store behind
    - Operations that are well-formed but invalid for the graph (an
      out-of-range index, a missing edge) parse fine and are reported by
      the store as a GraphStatus when run
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

COMMENT_PREFIX = "#"

DEMO_SCRIPT = """\
# Build a root with one child, double the edge, then take it apart again.
add-node 1.23
add-node 4.56 0
add-edge 0 1
print
remove-edge 0 1
remove-node 1
print
"""


class ScriptError(ValueError):
    """Raised for a line that is not a valid operation."""

    def __init__(self, message: str, line_number: int = 0, line: str = "") -> None:
        self.line_number = line_number
        self.line = line
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class OpKind(Enum):
    """Operations a script can request, keyed by their script keyword."""

    ADD_NODE = "add-node"
    ADD_EDGE = "add-edge"
    REMOVE_EDGE = "remove-edge"
    REMOVE_NODE = "remove-node"
    PRINT = "print"


# Allowed argument counts per operation
_ARITY: dict[OpKind, tuple[int, ...]] = {
    OpKind.ADD_NODE: (1, 2),
    OpKind.ADD_EDGE: (2,),
    OpKind.REMOVE_EDGE: (2,),
    OpKind.REMOVE_NODE: (1,),
    OpKind.PRINT: (0,),
}


@dataclass(frozen=True)
class Operation:
    """
    A single parsed script line.

    Attributes:
        kind: Which operation to run
        args: Parsed arguments. For ADD_NODE this is (value, parent) with
              parent None when omitted; otherwise the integer indices in
              script order
        line_number: 1-indexed source line, 0 when built in code
    """

    kind: OpKind
    args: tuple[Union[float, int, None], ...] = ()
    line_number: int = 0

    def __str__(self) -> str:
        parts = [self.kind.value]
        parts.extend(str(arg) for arg in self.args if arg is not None)
        return " ".join(parts)


def _parse_index(token: str, line_number: int, line: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise ScriptError(
            f"expected a non-negative integer index, got {token!r}", line_number, line
        )
    return int(token)


def _parse_value(token: str, line_number: int, line: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise ScriptError(f"expected a number, got {token!r}", line_number, line)


def parse_line(line: str, line_number: int = 0) -> Optional[Operation]:
    """
    Parse a single script line.

    Args:
        line: Raw line text
        line_number: 1-indexed position in the script, used in errors

    Returns:
        The Operation, or None for a blank or comment-only line

    Raises:
        ScriptError: If the keyword is unknown or the arguments are wrong
    """
    content = line.split(COMMENT_PREFIX, 1)[0].strip()
    if not content:
        return None

    keyword, *tokens = content.split()
    try:
        kind = OpKind(keyword.lower())
    except ValueError:
        raise ScriptError(f"unknown operation {keyword!r}", line_number, line)

    if len(tokens) not in _ARITY[kind]:
        expected = " or ".join(str(n) for n in _ARITY[kind])
        raise ScriptError(
            f"{kind.value} takes {expected} argument(s), got {len(tokens)}",
            line_number,
            line,
        )

    if kind is OpKind.ADD_NODE:
        value = _parse_value(tokens[0], line_number, line)
        parent = _parse_index(tokens[1], line_number, line) if len(tokens) == 2 else None
        args: tuple[Union[float, int, None], ...] = (value, parent)
    else:
        args = tuple(_parse_index(token, line_number, line) for token in tokens)

    return Operation(kind=kind, args=args, line_number=line_number)


def parse_script(text: str) -> list[Operation]:
    """
    Parse a whole script.

    Args:
        text: Script source

    Returns:
        Operations in script order, blank and comment lines skipped

    Raises:
        ScriptError: On the first malformed line

    Example:
        >>> ops = parse_script("add-node 1.5\\nadd-node 2.5 0\\n")
        >>> [str(op) for op in ops]
        ['add-node 1.5', 'add-node 2.5 0']
    """
    operations = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        operation = parse_line(line, line_number)
        if operation is not None:
            operations.append(operation)
    return operations
