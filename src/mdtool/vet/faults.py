#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/vet/faults.py
"""Fault records produced by the structural vet scanner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class FaultType(IntEnum):
    """Kinds of structural Markdown defects."""

    RUNAWAY_CODE_FENCE = 1
    RUNAWAY_LINK_TEXT = 2
    RUNAWAY_LINK_URL = 3
    LINK_TEXT_WHITESPACE = 4
    LINK_URL_WHITESPACE = 5
    LINK_SPACE_BETWEEN_TEXT_AND_LINK = 6

    def __str__(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    FaultType.RUNAWAY_CODE_FENCE: "Runaway Code Fence",
    FaultType.RUNAWAY_LINK_TEXT: "Runaway Link Text",
    FaultType.RUNAWAY_LINK_URL: "Runaway Link URL",
    FaultType.LINK_TEXT_WHITESPACE: "Link Text with Whitespace",
    FaultType.LINK_URL_WHITESPACE: "Link URL with Whitespace",
    FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK: "Whitespace between Link Text and Link URL",
}


@dataclass(frozen=True)
class Fault:
    """A located structural defect.

    Checks create faults with only ``offset`` and ``reason``; the location
    fields are filled in by :func:`mdtool.vet.scanner.resolve_locations`.

    Parameters
    ----------
    offset : int
        Byte offset of the defect in the raw document
    reason : FaultType
        What is wrong
    row : int, default 0
        1-based line number, 0 while unresolved
    column : int, default 0
        0-based byte offset within the line
    line : str, default ""
        Text of the line, without its line terminator

    """

    offset: int
    reason: FaultType
    row: int = 0
    column: int = 0
    line: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this fault."""
        return {
            "offset": self.offset,
            "row": self.row,
            "column": self.column,
            "reason": str(self.reason),
            "code": self.reason.name,
            "line": self.line,
        }
