#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/cli/commands/__init__.py
"""CLI command handlers for mdtool.

Each command owns an argparse parser and a ``handle_<name>_command``
function returning an exit code.
"""

import logging

# Note: Command handlers are imported lazily in dispatch_command so that
# --help and version never import the parser stack

logger = logging.getLogger(__name__)


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Run the command named by ``args[0]``.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, starting with the command name

    Returns
    -------
    int or None
        Exit code if a command was handled, None if ``args[0]`` names no command

    """
    if not args:
        return None

    command, rest = args[0], args[1:]
    logger.debug(f"Dispatching command {command!r}")

    if command == "fmt":
        from mdtool.cli.commands.fmt import handle_fmt_command

        return handle_fmt_command(rest)

    if command == "vet":
        from mdtool.cli.commands.vet import handle_vet_command

        return handle_vet_command(rest)

    if command == "ast":
        from mdtool.cli.commands.ast import handle_ast_command

        return handle_ast_command(rest)

    if command == "version":
        from mdtool.cli.commands.version import handle_version_command

        return handle_version_command(rest)

    return None
