"""Command-line interface for the mdtool Markdown formatter and linter.

Commands
--------
fmt
    Reformat Markdown into canonical form
vet
    Report runaway code fences and malformed inline links
ast
    Dump the parsed node tree as JSON
version
    Show version information

Configuration
-------------
``fmt`` reads its defaults from the ``fmt`` table of a config file:
``--config PATH``, the file named by ``MDTOOL_CONFIG``, or the first of
``.mdtool.toml``, ``.mdtool.yaml``, ``.mdtool.yml``, ``.mdtool.json`` or a
``pyproject.toml`` with ``[tool.mdtool.fmt]`` found from the working
directory upwards. Command-line flags override config values.

Examples
--------
Format a file to stdout::

    $ mdtool fmt README.md

Rewrite files in place with a wider line::

    $ mdtool fmt --write --line-width 100 docs/*.md

Fail CI when a file is not formatted::

    $ mdtool fmt --check docs/*.md

Find runaway fences and broken links::

    $ mdtool vet --rich notes.md

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

from mdtool.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR, create_parser
from mdtool.cli.commands import dispatch_command


def main(args: list[str] | None = None) -> int:
    """Run the mdtool command line.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        create_parser().print_help(sys.stderr)
        return EXIT_VALIDATION_ERROR

    if args[0] in ("-h", "--help"):
        create_parser().print_help()
        return EXIT_SUCCESS

    if args[0] == "--version":
        return dispatch_command(["version"]) or EXIT_SUCCESS

    result = dispatch_command(args)
    if result is None:
        print(f"Error: unknown command {args[0]!r}", file=sys.stderr)
        create_parser().print_usage(sys.stderr)
        return EXIT_VALIDATION_ERROR

    return result


__all__ = ["main"]
