"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/cli/output.py
import argparse
import json
import sys
from typing import Optional, Sequence, TextIO

from mdtool.exceptions import DependencyError
from mdtool.vet.faults import Fault


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: Optional[TextIO] = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR stdout is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                component_name="rich-output",
                missing_packages=[("rich", "")],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install mdtool[rich]",
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except ValueError:
            # Closed streams raise on isatty()
            return False

    return False


def format_fault_line(fault: Fault, name: Optional[str] = None) -> str:
    """Format one fault as ``name:row:col offset=N reason=R "line"``.

    Parameters
    ----------
    fault : Fault
        Located fault
    name : str, optional
        File name; omitted for standard input

    Returns
    -------
    str
        Single report line

    """
    quoted = json.dumps(fault.line, ensure_ascii=False)
    location = f"{fault.row}:{fault.column}"
    if name:
        location = f"{name}:{location}"
    return f"{location} offset={fault.offset} reason={str(fault.reason)} {quoted}"


def print_faults_table(results: Sequence[tuple[Optional[str], Sequence[Fault]]]) -> None:
    """Print faults of every input as a Rich table.

    Parameters
    ----------
    results : sequence of (name, faults)
        Faults per input; ``name`` is None for standard input

    """
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    table = Table(title="Structural faults")
    table.add_column("File", style="cyan")
    table.add_column("Row", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Offset", justify="right")
    table.add_column("Reason", style="bold red")
    table.add_column("Line", overflow="fold")

    for name, faults in results:
        for fault in faults:
            table.add_row(
                escape(name or "<stdin>"),
                str(fault.row),
                str(fault.column),
                str(fault.offset),
                str(fault.reason),
                escape(fault.line),
            )

    Console().print(table)
