#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/cli/commands/fmt.py
"""Format command for the mdtool CLI.

Reformats Markdown into canonical form. Output goes to stdout by default;
``--write`` rewrites files in place and ``--check`` only reports the files
whose formatting would change.
"""

import argparse
import logging
import sys
from pathlib import Path

from mdtool.api import format_markdown
from mdtool.cli.builder import (
    EXIT_ERROR,
    EXIT_FAULTS_FOUND,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    DynamicCLIBuilder,
    add_global_arguments,
    get_exit_code_for_exception,
)
from mdtool.cli.commands.shared import (
    STDIN_ARGUMENT,
    iter_input_arguments,
    load_command_config,
    read_input,
    setup_logging_from_args,
)
from mdtool.exceptions import MdToolError
from mdtool.options.markdown import MarkdownParserOptions, MarkdownRendererOptions

logger = logging.getLogger(__name__)


def _create_fmt_parser(builder: DynamicCLIBuilder) -> argparse.ArgumentParser:
    """Create the argument parser for the fmt command."""
    parser = argparse.ArgumentParser(
        prog="mdtool fmt",
        description="Reformat Markdown files into canonical form.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Markdown files to format (default: stdin, or '-')")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-w", "--write", action="store_true", help="Rewrite files in place instead of printing")
    mode.add_argument(
        "--check",
        action="store_true",
        help=f"Only report files whose formatting would change (exit code {EXIT_FAULTS_FOUND})",
    )

    builder.add_options_class_arguments(parser, MarkdownRendererOptions, "formatting options")
    builder.add_options_class_arguments(parser, MarkdownParserOptions, "parsing options")
    add_global_arguments(parser)
    return parser


def handle_fmt_command(args: list[str] | None = None) -> int:
    """Handle the fmt command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'fmt')

    Returns
    -------
    int
        Exit code: 0 on success, 11 when ``--check`` finds files that
        would change, or the error code of the first failure

    """
    builder = DynamicCLIBuilder()
    parser = _create_fmt_parser(builder)

    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_ERROR

    setup_logging_from_args(parsed)

    if parsed.write and STDIN_ARGUMENT in list(iter_input_arguments(parsed.files)):
        print("Error: --write cannot be used with standard input", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        config = load_command_config(parsed, "fmt")
        renderer_options = builder.build_options(MarkdownRendererOptions, parsed, config)
        parser_options = builder.build_options(MarkdownParserOptions, parsed, config)
    except (argparse.ArgumentTypeError, MdToolError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    exit_code = EXIT_SUCCESS
    would_change: list[str] = []

    for argument in iter_input_arguments(parsed.files):
        try:
            name, raw = read_input(argument)
            original = raw.decode("utf-8", errors="replace")
            formatted = format_markdown(raw, parser_options=parser_options, renderer_options=renderer_options)
        except MdToolError as e:
            print(f"Error: {e}", file=sys.stderr)
            if exit_code == EXIT_SUCCESS:
                exit_code = get_exit_code_for_exception(e)
            continue

        display_name = name or "<stdin>"

        if parsed.check:
            if formatted != original:
                would_change.append(display_name)
            continue

        if parsed.write:
            if formatted == original:
                logger.debug(f"{display_name} already formatted")
                continue
            try:
                Path(display_name).write_text(formatted, encoding="utf-8")
            except OSError as e:
                print(f"Error: could not write {display_name}: {e}", file=sys.stderr)
                if exit_code == EXIT_SUCCESS:
                    exit_code = get_exit_code_for_exception(e)
                continue
            logger.info(f"Reformatted {display_name}")
            continue

        sys.stdout.write(formatted)

    if would_change:
        for display_name in would_change:
            print(f"would reformat {display_name}")
        if exit_code == EXIT_SUCCESS:
            exit_code = EXIT_FAULTS_FOUND

    return exit_code
