#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdtool/cli/commands/shared.py
"""Shared utilities for mdtool CLI commands.

This module provides the pieces every command needs: reading inputs from
files or standard input, applying the global logging flags, and loading
the command's section of the configuration file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from mdtool.cli.config import get_command_section, load_config_with_priority
from mdtool.exceptions import FileError, FileNotFoundError
from mdtool.logging_utils import configure_logging

logger = logging.getLogger(__name__)

STDIN_ARGUMENT = "-"


def setup_logging_from_args(parsed_args: argparse.Namespace) -> None:
    """Configure logging from the global ``--log-level``/``--log-file``/``--trace`` flags."""
    trace = getattr(parsed_args, "trace", False)
    level = "DEBUG" if trace else getattr(parsed_args, "log_level", "WARNING")
    configure_logging(level, log_file=getattr(parsed_args, "log_file", None), trace_mode=trace)


def load_command_config(parsed_args: argparse.Namespace, command: str) -> Dict[str, Any]:
    """Load the config file section for ``command``.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command line carrying ``config`` and ``no_config``
    command : str
        Command name

    Returns
    -------
    dict
        The command's configuration table, possibly empty

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration cannot be loaded

    """
    config = load_config_with_priority(
        explicit_path=getattr(parsed_args, "config", None),
        disabled=getattr(parsed_args, "no_config", False),
    )
    section = get_command_section(config, command)
    if section:
        logger.debug(f"Using '{command}' configuration: {section}")
    return section


def read_input(argument: str) -> Tuple[Optional[str], bytes]:
    """Read one input named on the command line.

    Parameters
    ----------
    argument : str
        File path, or ``-`` for standard input

    Returns
    -------
    tuple[str or None, bytes]
        Display name (None for standard input) and the raw bytes

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileError
        If the file cannot be read

    """
    if argument == STDIN_ARGUMENT:
        return None, sys.stdin.buffer.read()

    path = Path(argument)
    if not path.exists():
        raise FileNotFoundError(argument)
    if not path.is_file():
        raise FileError(f"Not a file: {argument}", file_path=argument)

    try:
        return argument, path.read_bytes()
    except OSError as e:
        raise FileError(f"Could not read {argument}: {e}", file_path=argument, original_error=e) from e


def iter_input_arguments(files: List[str]) -> Iterator[str]:
    """Yield the input arguments, standing in ``-`` when none were given."""
    if not files:
        yield STDIN_ARGUMENT
        return
    yield from files
