#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Dynamic CLI argument builder for mdtool.

This module generates argparse arguments from the options dataclasses using
their field metadata, and holds the exit code table shared by every
command.
"""

# src/mdtool/cli/builder.py

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Optional, Type, get_args, get_origin, get_type_hints

from mdtool.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Field metadata keys understood by the builder
CLI_METADATA_NAME = "cli_name"
CLI_METADATA_TYPE = "cli_type"
CLI_METADATA_CHOICES = "choices"

COMMAND_HELP: dict[str, str] = {
    "fmt": "Reformat Markdown files into canonical form",
    "vet": "Report structural faults (runaway fences and links)",
    "ast": "Dump the parsed node tree as JSON",
    "version": "Show version information",
}


def parse_space_count(value: str) -> str:
    """Convert a positive integer argument into that many spaces.

    Parameters
    ----------
    value : str
        Command-line value

    Returns
    -------
    str
        String of ``int(value)`` spaces

    Raises
    ------
    argparse.ArgumentTypeError
        If the value is not a positive integer

    """
    try:
        count = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a number of spaces, got {value!r}") from e
    if count < 1:
        raise argparse.ArgumentTypeError(f"expected a positive number of spaces, got {count}")
    return " " * count


class DynamicCLIBuilder:
    """Builds CLI arguments dynamically from options dataclasses.

    Every dataclass field becomes one flag. Help text and allowed choices
    come from the field metadata; the argparse type comes from the resolved
    annotation. Flags default to ``argparse.SUPPRESS`` so that only values
    given on the command line appear in the parsed namespace, which lets
    :meth:`build_options` layer them over config file values.
    """

    def __init__(self) -> None:
        """Initialize the CLI builder."""
        self.dest_to_cli_flag: Dict[str, str] = {}

    def snake_to_kebab(self, name: str) -> str:
        """Convert snake_case to kebab-case.

        Parameters
        ----------
        name : str
            Snake case field name

        Returns
        -------
        str
            Kebab case CLI name

        """
        return name.replace("_", "-")

    def infer_cli_name(self, field_name: str, is_boolean_with_true_default: bool = False) -> str:
        """Infer CLI argument name from field name.

        Parameters
        ----------
        field_name : str
            Dataclass field name
        is_boolean_with_true_default : bool
            Whether this is a boolean field with default=True

        Returns
        -------
        str
            CLI argument name with -- prefix

        """
        kebab_name = self.snake_to_kebab(field_name)
        if is_boolean_with_true_default:
            return f"--no-{kebab_name}"
        return f"--{kebab_name}"

    def _resolve_field_type(self, field: Field, options_class: Type) -> Any:
        """Resolve a field annotation, which may be a string under postponed evaluation."""
        try:
            type_hints = get_type_hints(options_class)
            if field.name in type_hints:
                return type_hints[field.name]
        except (NameError, AttributeError, TypeError):
            pass
        return field.type

    def get_argument_kwargs(self, field: Field, options_class: Type) -> Dict[str, Any]:
        """Build argparse kwargs for one options field.

        Parameters
        ----------
        field : Field
            Dataclass field
        options_class : Type
            The dataclass containing the field

        Returns
        -------
        dict
            Kwargs for ``argparse.add_argument()``

        """
        metadata = dict(field.metadata)
        kwargs: Dict[str, Any] = {
            "help": metadata.get("help", f"Configure {field.name}"),
            "dest": field.name,
            "default": argparse.SUPPRESS,
        }

        resolved_type = self._resolve_field_type(field, options_class)

        if resolved_type is bool:
            default = field.default if field.default is not MISSING else False
            kwargs["action"] = "store_false" if default is True else "store_true"
            return kwargs

        if metadata.get(CLI_METADATA_TYPE) == "spaces":
            kwargs["type"] = parse_space_count
            kwargs["metavar"] = "N"
        elif CLI_METADATA_CHOICES in metadata:
            kwargs["choices"] = metadata[CLI_METADATA_CHOICES]
        elif get_origin(resolved_type) is not None and get_args(resolved_type):
            # Literal[...] without explicit choices in the metadata
            kwargs["choices"] = list(get_args(resolved_type))
        elif resolved_type is int:
            kwargs["type"] = int
            kwargs["metavar"] = "N"

        return kwargs

    def add_options_class_arguments(
        self, parser: argparse.ArgumentParser, options_class: Type, title: Optional[str] = None
    ) -> None:
        """Add one flag per field of ``options_class`` to ``parser``.

        Parameters
        ----------
        parser : argparse.ArgumentParser
            Parser (or argument group owner) to extend
        options_class : Type
            Options dataclass to introspect
        title : str, optional
            Title of the argument group the flags are placed in

        """
        target: Any = parser.add_argument_group(title) if title else parser

        for field in fields(options_class):
            is_true_bool = field.default is True
            cli_name = field.metadata.get(CLI_METADATA_NAME)
            flag = f"--{cli_name}" if cli_name else self.infer_cli_name(field.name, is_true_bool)

            kwargs = self.get_argument_kwargs(field, options_class)
            target.add_argument(flag, **kwargs)
            self.dest_to_cli_flag[field.name] = flag

    def build_options(
        self,
        options_class: Type,
        parsed_args: argparse.Namespace,
        config_values: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Create an options instance from config values and parsed flags.

        Config values are applied first; flags given on the command line
        override them. Keys that do not name a field of ``options_class``
        are ignored here, since one config table may feed more than one
        options class.

        Parameters
        ----------
        options_class : Type
            Options dataclass to build
        parsed_args : argparse.Namespace
            Parsed command line
        config_values : dict, optional
            Values from the config file

        Returns
        -------
        Any
            Instance of ``options_class``

        Raises
        ------
        ValidationError
            If the combined values fail validation

        """
        known = {f.name: f for f in fields(options_class)}
        values: Dict[str, Any] = {}

        for key, value in (config_values or {}).items():
            name = key.replace("-", "_")
            if name not in known:
                continue
            # Config files may give an indent as a plain count
            if known[name].metadata.get(CLI_METADATA_TYPE) == "spaces" and isinstance(value, int):
                value = parse_space_count(str(value))
            values[name] = value

        for name in known:
            if hasattr(parsed_args, name):
                values[name] = getattr(parsed_args, name)

        logger.debug(f"{options_class.__name__} values: {values}")

        try:
            return options_class(**values)
        except TypeError as e:
            raise ValidationError(f"Invalid {options_class.__name__} values: {e}") from e


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Add logging and config flags shared by every command.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser to extend

    """
    group = parser.add_argument_group("global options")
    group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    group.add_argument("--log-file", metavar="PATH", help="Also write log records to this file")
    group.add_argument("--trace", action="store_true", help="Verbose timestamped logging (implies DEBUG)")
    config_group = group.add_mutually_exclusive_group()
    config_group.add_argument("--config", metavar="PATH", help="Configuration file (TOML, YAML, or JSON)")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level parser used for ``mdtool --help``.

    Commands parse their own arguments; this parser only documents them.

    Returns
    -------
    argparse.ArgumentParser
        Top-level parser

    """
    parser = argparse.ArgumentParser(
        prog="mdtool",
        description="Canonical Markdown formatter and structural linter.",
        epilog="Run 'mdtool COMMAND --help' for the options of a command.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    subparsers = parser.add_subparsers(title="commands", dest="command", metavar="COMMAND")
    for name, help_text in COMMAND_HELP.items():
        subparsers.add_parser(name, help=help_text)
    return parser


# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
EXIT_FAULTS_FOUND = 11


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
