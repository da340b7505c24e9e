#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/cli/commands/version.py
"""Version command for the mdtool CLI."""

import argparse
import platform

from mdtool.cli.builder import EXIT_ERROR, EXIT_SUCCESS
from mdtool.utils.packages import get_package_version

# Distributions reported by ``mdtool version --deps``
REPORTED_PACKAGES = ("mistune", "pyyaml", "packaging", "rich")


def get_version() -> str:
    """Return the installed mdtool version."""
    from mdtool import __version__

    return __version__


def handle_version_command(args: list[str] | None = None) -> int:
    """Handle the version command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'version')

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = argparse.ArgumentParser(prog="mdtool version", description="Show version information.")
    parser.add_argument("--deps", action="store_true", help="Also list Python and dependency versions")

    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_ERROR

    print(f"mdtool {get_version()}")

    if parsed.deps:
        print(f"Python {platform.python_version()}")
        for package in REPORTED_PACKAGES:
            installed = get_package_version(package)
            print(f"{package} {installed or 'not installed'}")

    return EXIT_SUCCESS
