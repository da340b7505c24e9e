#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Config file discovery and loading for the mdtool CLI.

A config file is a mapping of command name to a table of option values::

    [fmt]
    line_width = 80
    bullet_char = "*"

It may be TOML, YAML or JSON, or the ``[tool.mdtool]`` table of a
``pyproject.toml``. Every loading failure surfaces as
:class:`argparse.ArgumentTypeError`, which the commands map to the
validation exit code.
"""

# src/mdtool/cli/config.py

import argparse
import json
import os
import sys
from pathlib import Path
from typing import IO, Any, Callable, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from mdtool.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_SECTION

# suffix -> (open mode, loader, format name)
_LOADERS: Dict[str, tuple[str, Callable[[IO[Any]], Any], str]] = {
    ".toml": ("rb", tomllib.load, "TOML"),
    ".yaml": ("r", yaml.safe_load, "YAML"),
    ".yml": ("r", yaml.safe_load, "YAML"),
    ".json": ("r", json.load, "JSON"),
}

_DECODE_ERRORS = (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError)


def _read_document(path: Path) -> Any:
    """Load ``path`` with the parser its suffix selects."""
    suffix = path.suffix.lower()
    if suffix not in _LOADERS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .toml, .yaml, or .json")

    mode, loader, format_name = _LOADERS[suffix]
    try:
        if mode == "rb":
            with open(path, "rb") as f:
                return loader(f)
        with open(path, "r", encoding="utf-8") as f:
            return loader(f)
    except _DECODE_ERRORS as e:
        raise argparse.ArgumentTypeError(f"Invalid {format_name} in config file {path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {path}: {e}") from e


def _pyproject_table(path: Path) -> Dict[str, Any]:
    """Return the ``[tool.mdtool]`` table of a pyproject.toml, or ``{}``."""
    data = _read_document(path)
    table = data.get("tool", {}).get(PYPROJECT_SECTION)
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise argparse.ArgumentTypeError(f"[tool.{PYPROJECT_SECTION}] in {path} must be a table")
    return table


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Look for a config file in ``start_dir`` and each of its parents.

    In each directory the dedicated files (``.mdtool.toml``, ``.mdtool.yaml``,
    ``.mdtool.yml``, ``.mdtool.json``) win over a ``pyproject.toml``, and a
    ``pyproject.toml`` only counts when it has a ``[tool.mdtool]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from; the working directory by default

    Returns
    -------
    Path or None
        The nearest config file

    """
    directory = (start_dir or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for filename in CONFIG_FILENAMES:
            candidate = candidate_dir / filename
            if candidate.is_file():
                return candidate

        pyproject = candidate_dir / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _pyproject_table(pyproject):
                    return pyproject
            except argparse.ArgumentTypeError:
                # A broken pyproject.toml belongs to someone else
                continue
    return None


def discover_config_file() -> Optional[Path]:
    """Find the config file for this run: nearest to the working directory, then in home."""
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Read one config file.

    Parameters
    ----------
    config_path : Path or str
        TOML, YAML or JSON file, or a ``pyproject.toml``

    Returns
    -------
    dict
        The configuration mapping; an empty file gives ``{}``

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed, or not a mapping

    Examples
    --------
    >>> load_config_file(".mdtool.toml")["fmt"]["line_width"]
    80

    """
    path = Path(config_path)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {path}")

    if path.name.lower() == "pyproject.toml":
        return _pyproject_table(path)

    config = _read_document(path)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def load_config_with_priority(explicit_path: Optional[str] = None, disabled: bool = False) -> Dict[str, Any]:
    """Load the configuration that applies to this run.

    The first source present wins: ``--config PATH``, then the file named
    by ``MDTOOL_CONFIG``, then discovery. ``--no-config`` skips them all.

    Parameters
    ----------
    explicit_path : str, optional
        Value of ``--config``
    disabled : bool, default False
        Value of ``--no-config``

    Returns
    -------
    dict
        The configuration, or ``{}`` when there is none

    Raises
    ------
    argparse.ArgumentTypeError
        If the selected file cannot be loaded

    """
    if disabled:
        return {}

    chosen = explicit_path or os.environ.get(CONFIG_ENV_VAR) or discover_config_file()
    if not chosen:
        return {}
    return load_config_file(chosen)


def get_command_section(config: Dict[str, Any], command: str) -> Dict[str, Any]:
    """Return ``config[command]``, or ``{}`` when the command has no table.

    Raises
    ------
    argparse.ArgumentTypeError
        If the entry exists but is not a table

    """
    section = config.get(command, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(f"'{command}' in the config file must be a table, got {type(section).__name__}")
    return section
