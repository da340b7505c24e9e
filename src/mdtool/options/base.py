#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser and renderer options.

Options are frozen dataclasses. Field metadata carries the CLI help text and,
where relevant, the allowed choices; the ``fmt`` command builds its flags from
it.
"""

# src/mdtool/options/base.py

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated; validation runs again

        """
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> Self:
        """Build an instance from a mapping, ignoring keys that are not fields.

        Keys may use dashes instead of underscores, as config files often do.

        Parameters
        ----------
        values : dict
            Mapping of option names to values

        Returns
        -------
        Self
            New options instance

        """
        known = {f.name for f in fields(cls)}
        normalized = {key.replace("-", "_"): value for key, value in values.items()}
        return cls(**{key: value for key, value in normalized.items() if key in known})


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options."""

    def __post_init__(self) -> None:
        """Validate base renderer options."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options."""

    def __post_init__(self) -> None:
        """Validate base parser options."""
        pass
