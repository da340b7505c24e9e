#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/vet/checks.py
"""Byte-level structural checks.

Each check is a single linear scan over the raw document and knows nothing
about how a Markdown parser would read it. Some defects (a code fence that
never closes, link text that runs across a blank line) still parse under a
lenient parser but render unpredictably, so they are looked for here, below
the parse layer.

Every check takes the raw bytes and returns faults carrying only an offset
and a reason.

"""

from __future__ import annotations

from mdtool.constants import FENCE_MARKER, LINK_TEXT_CLOSE, LINK_TEXT_OPEN, LINK_URL_CLOSE, LINK_URL_OPEN
from mdtool.vet.faults import Fault, FaultType

_INLINE_SPACE = (ord(" "), ord("\t"))


def check_links(raw: bytes) -> list[Fault]:
    """Find malformed ``[text](url)`` syntax.

    Every ``[`` starts a candidate link. Bracket text not followed by ``(``
    (after optional spaces or tabs) is ordinary text and is never a fault.
    A missing ``]`` or ``)`` ends the scan, since nothing after it can be
    paired reliably. All faults are reported at the offset of the ``[``.

    Parameters
    ----------
    raw : bytes
        Raw document content

    Returns
    -------
    list of Fault
        Faults in detection order

    Examples
    --------
    >>> [f.reason.name for f in check_links(b"[text] (http://x/)")]
    ['LINK_SPACE_BETWEEN_TEXT_AND_LINK']

    """
    faults: list[Fault] = []
    size = len(raw)
    pos = 0

    while pos < size:
        start = raw.find(LINK_TEXT_OPEN, pos)
        if start == -1:
            break

        close = raw.find(LINK_TEXT_CLOSE, start + 1)
        if close == -1:
            faults.append(Fault(start, FaultType.RUNAWAY_LINK_TEXT))
            break
        text = raw[start + 1 : close]

        i = close + 1
        while i < size and raw[i] in _INLINE_SPACE:
            i += 1
        if i == size:
            break
        if raw[i : i + 1] != LINK_URL_OPEN:
            pos = close + 1
            continue
        if i > close + 1:
            faults.append(Fault(start, FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK))

        end = raw.find(LINK_URL_CLOSE, i + 1)
        if end == -1:
            faults.append(Fault(start, FaultType.RUNAWAY_LINK_URL))
            break
        url = raw[i + 1 : end]

        if b"\n\n" in text:
            faults.append(Fault(start, FaultType.LINK_TEXT_WHITESPACE))
        if b"\n" in url:
            faults.append(Fault(start, FaultType.LINK_URL_WHITESPACE))

        pos = end + 1

    return faults


def check_code_fences(raw: bytes) -> list[Fault]:
    """Find a code fence that is never closed.

    Only markers at the very start of the input or right after a newline
    count as fences. An odd number of them means the last one never closed.

    Parameters
    ----------
    raw : bytes
        Raw document content

    Returns
    -------
    list of Fault
        Empty, or one RUNAWAY_CODE_FENCE fault at the last fence marker

    """
    count = 0
    last = -1
    pos = 0

    while True:
        found = raw.find(FENCE_MARKER, pos)
        if found == -1:
            break
        if found == 0 or raw[found - 1 : found] == b"\n":
            count += 1
            last = found
        pos = found + len(FENCE_MARKER)

    if count % 2 == 1:
        return [Fault(last, FaultType.RUNAWAY_CODE_FENCE)]
    return []
