"""Helpers for checking installed package versions."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtool/utils/packages.py
from __future__ import annotations

from importlib import metadata
from typing import Optional, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet


def get_package_version(package_name: str) -> Optional[str]:
    """Get the installed version of a distribution.

    Parameters
    ----------
    package_name : str
        Distribution name as used by pip (not the import name)

    Returns
    -------
    str or None
        Version string if installed, None otherwise

    """
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check whether an installed distribution satisfies ``version_spec``.

    Parameters
    ----------
    package_name : str
        Distribution name
    version_spec : str
        PEP 440 specifier, e.g. ">=3.0.0"

    Returns
    -------
    tuple
        ``(meets_requirement, installed_version)``; an unparseable specifier
        or version counts as not meeting the requirement

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None

    try:
        spec = SpecifierSet(version_spec)
        meets = version.parse(installed_version) in spec
    except (InvalidSpecifier, version.InvalidVersion):
        return False, installed_version
    return meets, installed_version
