#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/utils/text.py
"""Text processing utilities for the Markdown formatter.

Functions
---------
split_words : Split text into words on ASCII whitespace
word_wrap : Greedy word wrapping with separate first-line prefix and indent

Examples
--------
    >>> word_wrap(["foo"], 78)
    'foo'
    >>> word_wrap(split_words("one two three four"), 10, "- ", "  ")
    '- one two\\n  three\\n  four'

"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from mdtool.constants import UNLIMITED_WIDTH, UNLIMITED_WIDTH_THRESHOLD

# Non-breaking and other Unicode spaces stay inside words
_ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")


def split_words(text: str) -> list[str]:
    """Split ``text`` into words on runs of ASCII whitespace.

    Parameters
    ----------
    text : str
        Text to split

    Returns
    -------
    list of str
        Non-empty words in order

    """
    return [word for word in _ASCII_WHITESPACE.split(text) if word]


def word_wrap(
    words: Iterable[str],
    width: int,
    prefix: str = "",
    indent: str = "",
    line_start: Callable[[str], str] | None = None,
) -> str:
    """Wrap a sequence of words at a column limit.

    The first line starts with ``prefix`` and every following line with
    ``indent``. Column accounting starts at ``len(prefix)``. A word is
    appended to the current line while ``col + 1 + len(word) < width``;
    otherwise it starts a new line. A word that cannot fit on any line
    (``len(word) >= width - len(indent)``) is placed alone on a line of its
    own after ``indent``, even when it is the first word, and is never
    split. The line it leaves behind is only kept when the prefix carries
    something other than whitespace or the indent itself, such as a bullet.

    Parameters
    ----------
    words : iterable of str
        Words to place; empty strings are ignored
    width : int
        Column limit. Any value ``<= 1`` means unlimited.
    prefix : str, default ""
        Text placed before the first word of the first line
    indent : str, default ""
        Text placed before the first word of every continuation line
    line_start : callable, optional
        Applied to each word that begins a line, before its width is
        counted. The renderer uses it to escape block markers.

    Returns
    -------
    str
        Wrapped text without a trailing newline, or the empty string when
        there are no words

    Examples
    --------
        >>> word_wrap(["averylongwordexceedingwidth"], 5, "", "  ")
        '  averylongwordexceedingwidth'

    """
    if width <= UNLIMITED_WIDTH_THRESHOLD:
        width = UNLIMITED_WIDTH

    oversize = width - len(indent)
    lines: list[str] = []
    line: list[str] = []
    lead = prefix
    col = len(prefix)

    for word in words:
        if not word:
            continue

        if len(word) >= oversize:
            if line:
                lines.append(lead + " ".join(line))
            elif lead.strip() and lead != indent:
                lines.append(lead.rstrip())
            lines.append(indent + (line_start(word) if line_start else word))
            lead = indent
            line = []
            col = len(indent)
            continue

        if not line:
            word = line_start(word) if line_start else word
            line.append(word)
            col = len(lead) + len(word)
        elif col + 1 + len(word) < width:
            line.append(word)
            col += 1 + len(word)
        else:
            lines.append(lead + " ".join(line))
            lead = indent
            word = line_start(word) if line_start else word
            line = [word]
            col = len(indent) + len(word)

    if line:
        lines.append(lead + " ".join(line))

    return "\n".join(lines)
