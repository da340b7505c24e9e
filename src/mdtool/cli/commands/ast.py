#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/cli/commands/ast.py
"""AST dump command for the mdtool CLI."""

import argparse
import sys

from mdtool.api import to_ast
from mdtool.ast import ast_to_json
from mdtool.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    DynamicCLIBuilder,
    add_global_arguments,
    get_exit_code_for_exception,
)
from mdtool.cli.commands.shared import load_command_config, read_input, setup_logging_from_args
from mdtool.exceptions import MdToolError
from mdtool.options.markdown import MarkdownParserOptions


def handle_ast_command(args: list[str] | None = None) -> int:
    """Handle the ast command: print the parsed node tree as JSON.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'ast')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    builder = DynamicCLIBuilder()
    parser = argparse.ArgumentParser(
        prog="mdtool ast",
        description="Parse a Markdown file and print its node tree as JSON.",
    )
    parser.add_argument("input", metavar="FILE", help="Markdown file (use '-' for stdin)")
    parser.add_argument("--indent", type=int, default=2, metavar="N", help="JSON indentation (default: 2)")
    builder.add_options_class_arguments(parser, MarkdownParserOptions, "parsing options")
    add_global_arguments(parser)

    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_ERROR

    setup_logging_from_args(parsed)

    try:
        config = load_command_config(parsed, "fmt")
        parser_options = builder.build_options(MarkdownParserOptions, parsed, config)
        _name, raw = read_input(parsed.input)
        document = to_ast(raw, parser_options=parser_options)
    except (argparse.ArgumentTypeError, MdToolError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    print(ast_to_json(document, indent=parsed.indent if parsed.indent > 0 else None))
    return EXIT_SUCCESS
