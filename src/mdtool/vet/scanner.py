#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/vet/scanner.py
"""Run the structural checks over a document and locate the faults."""

from __future__ import annotations

import logging
from dataclasses import replace
from operator import attrgetter
from typing import Callable, Sequence, Union

from mdtool.utils.decorators import debug_timer
from mdtool.vet.checks import check_code_fences, check_links
from mdtool.vet.faults import Fault

logger = logging.getLogger(__name__)

Check = Callable[[bytes], list[Fault]]

DEFAULT_CHECKS: tuple[Check, ...] = (check_links, check_code_fences)


def resolve_locations(raw: bytes, faults: Sequence[Fault]) -> list[Fault]:
    """Fill in row, column and line text for offset-sorted faults.

    The document is walked forward once for all faults together, so the
    cost is linear in the document size however many faults there are.
    An offset that points at a newline belongs to the line that newline
    ends.

    Parameters
    ----------
    raw : bytes
        Raw document content the offsets refer to
    faults : sequence of Fault
        Faults sorted by ascending offset

    Returns
    -------
    list of Fault
        New fault records with location fields set, in the same order

    Raises
    ------
    ValueError
        If ``faults`` is not sorted by offset

    """
    resolved: list[Fault] = []
    row = 1
    line_start = 0
    line_end = raw.find(b"\n")
    last_offset = 0

    for fault in faults:
        if fault.offset < last_offset:
            raise ValueError("Faults must be sorted by offset before resolving locations")
        last_offset = fault.offset

        while line_end != -1 and line_end < fault.offset:
            line_start = line_end + 1
            row += 1
            line_end = raw.find(b"\n", line_start)

        end = line_end if line_end != -1 else len(raw)
        line = raw[line_start:end].decode("utf-8", errors="replace")
        if line.endswith("\r"):
            line = line[:-1]
        resolved.append(replace(fault, row=row, column=fault.offset - line_start, line=line))

    return resolved


def vet(source: Union[str, bytes], checks: Sequence[Check] = DEFAULT_CHECKS) -> list[Fault]:
    """Scan a Markdown document for structural defects.

    Parameters
    ----------
    source : str or bytes
        Document content. A ``str`` is encoded as UTF-8 first, so offsets
        and columns are always byte positions.
    checks : sequence of callable, optional
        Checks to run, in order. Defaults to the link and code fence checks.

    Returns
    -------
    list of Fault
        Faults sorted by offset; faults at the same offset keep the order in
        which they were detected. An empty list means the document is clean.

    Examples
    --------
    >>> [str(f.reason) for f in vet("```\\ncode\\n")]
    ['Runaway Code Fence']
    >>> vet("[text](http://x/)")
    []

    """
    if isinstance(source, str):
        raw = source.encode("utf-8")
    elif isinstance(source, (bytes, bytearray, memoryview)):
        raw = bytes(source)
    else:
        raise TypeError(f"vet() expects str or bytes, got {type(source).__name__}")

    with debug_timer(logger, "Vet"):
        faults: list[Fault] = []
        for check in checks:
            faults.extend(check(raw))
        faults.sort(key=attrgetter("offset"))
        resolved = resolve_locations(raw, faults)

    if resolved:
        logger.debug(f"Vet found {len(resolved)} fault(s)")
    return resolved
