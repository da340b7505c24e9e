#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/utils/decorators.py
"""Utility decorators for mdtool parsers and renderers.

Dependency checks live here so the optional and third-party imports of a
component are validated in one place, before any work starts, and the user
gets a single error listing everything that needs installing.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from mdtool.exceptions import DependencyError
from mdtool.utils.packages import check_version_requirement


def requires_dependencies(component_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before a method runs.

    Parameters
    ----------
    component_name : str
        Name of the component (e.g. "markdown", "vet-rich"). Used in error
        messages.
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples. ``version_spec``
        may be empty to accept any installed version.

    Returns
    -------
    Callable
        Decorator that validates the packages on every call

    Raises
    ------
    DependencyError
        If any package is missing or installed at an incompatible version.
        All problems are collected before raising.

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(self, input_data):
        ...     import mistune

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing: list[tuple[str, str]] = []
            version_mismatches: list[tuple[str, str, str]] = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Nothing is measured when ``logger`` is not enabled for DEBUG.

    Parameters
    ----------
    logger : logging.Logger
        Logger receiving the timing message
    operation : str
        Label for the timed block, e.g. "Parsing (markdown)"

    Examples
    --------
        >>> with debug_timer(logger, "Rendering (markdown)"):
        ...     text = renderer.render_to_string(doc)

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.4f}s")
    else:
        yield
