#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/cli/commands/vet.py
"""Vet command for the mdtool CLI.

Scans raw bytes for runaway code fences and malformed inline links and
prints one line per fault. The exit code is 11 when any input has a
fault.
"""

import argparse
import json
import sys
from typing import Optional, Sequence

from mdtool.cli.builder import (
    EXIT_ERROR,
    EXIT_FAULTS_FOUND,
    EXIT_SUCCESS,
    add_global_arguments,
    get_exit_code_for_exception,
)
from mdtool.cli.commands.shared import iter_input_arguments, read_input, setup_logging_from_args
from mdtool.cli.output import format_fault_line, print_faults_table, should_use_rich_output
from mdtool.exceptions import MdToolError
from mdtool.vet import Fault, vet


def _create_vet_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the vet command."""
    parser = argparse.ArgumentParser(
        prog="mdtool vet",
        description="Report runaway code fences and malformed inline links.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Markdown files to check (default: stdin, or '-')")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        dest="output_format",
        help="Report format (default: text)",
    )
    parser.add_argument("--rich", action="store_true", help="Show faults as a table (requires mdtool[rich])")
    parser.add_argument("--force-rich", action="store_true", help="Use the table even when stdout is not a TTY")
    add_global_arguments(parser)
    return parser


def _print_json(results: Sequence[tuple[Optional[str], Sequence[Fault]]]) -> None:
    records = []
    for name, faults in results:
        for fault in faults:
            records.append({"file": name, **fault.to_dict()})
    print(json.dumps(records, indent=2, ensure_ascii=False))


def handle_vet_command(args: list[str] | None = None) -> int:
    """Handle the vet command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'vet')

    Returns
    -------
    int
        Exit code: 0 when every input is clean, 11 when any fault was
        found, or the error code of the first input that failed to load

    """
    parser = _create_vet_parser()

    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_ERROR

    setup_logging_from_args(parsed)

    try:
        use_rich = parsed.output_format == "text" and should_use_rich_output(parsed, raise_on_missing=True)
    except MdToolError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    exit_code = EXIT_SUCCESS
    results: list[tuple[Optional[str], list[Fault]]] = []

    for argument in iter_input_arguments(parsed.files):
        try:
            name, raw = read_input(argument)
        except MdToolError as e:
            print(f"Error: {e}", file=sys.stderr)
            if exit_code == EXIT_SUCCESS:
                exit_code = get_exit_code_for_exception(e)
            continue
        results.append((name, vet(raw)))

    if parsed.output_format == "json":
        _print_json(results)
    elif use_rich:
        if any(faults for _, faults in results):
            print_faults_table(results)
    else:
        for name, faults in results:
            for fault in faults:
                print(format_fault_line(fault, name))

    if exit_code == EXIT_SUCCESS and any(faults for _, faults in results):
        exit_code = EXIT_FAULTS_FOUND

    return exit_code
