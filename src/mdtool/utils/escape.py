#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/utils/escape.py
"""Backslash escaping for literal text written back out as Markdown.

mistune hands the formatter literal text: backslash escapes are already
removed (entity references are left as written). Writing that text out
verbatim can create markup the source never had, so the renderer puts the
escapes back.

Escaping happens at two points. :func:`escape_markdown_context_aware` runs on
every text node and covers inline syntax. :func:`escape_line_start` runs on
the first word of each output line once wrapping has decided where lines
begin, because list markers, ATX headings, quotes and setext underlines only
mean something there.

Examples
--------
    >>> escape_markdown_context_aware("Use *literal* [stars]")
    'Use \\\\*literal\\\\* \\\\[stars\\\\]'
    >>> escape_line_start("-")
    '\\\\-'
    >>> escape_line_start("12.")
    '12\\\\.'

"""

from __future__ import annotations

import re
from typing import Literal

EscapeContext = Literal["text", "table"]

# Characters with inline meaning anywhere in a line
_ALWAYS_ESCAPE = frozenset("\\`*[]")

# Words that open a block when they begin a line: bullet markers, ATX
# heading markers, setext underlines, thematic breaks and table delimiter rows
_MARKER_WORD = re.compile(r"(?:[-+*]|#{1,6}|[-=:|]+)\Z")
_ORDERED_MARKER = re.compile(r"(\d{1,9})([.)])\Z")
_CLOSING_HASHES = re.compile(r"(^|\s)(#+)$")


def escape_markdown_context_aware(text: str, context: EscapeContext = "text") -> str:
    r"""Escape inline Markdown syntax in literal text.

    Parameters
    ----------
    text : str
        Literal text, as found in a Text node
    context : {'text', 'table'}, default = 'text'
        Where the text will be written. Inside a table cell ``|`` is escaped
        as well.

    Returns
    -------
    str
        Text that parses back to ``text``

    Notes
    -----
    - Backslash, backtick, asterisk and square brackets are always escaped.
    - ``_`` is left alone between two letters or digits (``snake_case``),
      where it can neither open nor close emphasis.
    - ``<`` is escaped only where it could start a tag or autolink.
    - ``~`` is escaped only in runs of two or more, which could form
      strikethrough or a code fence.

    Examples
    --------
        >>> escape_markdown_context_aware("snake_case and _under_")
        'snake_case and \\_under\\_'
        >>> escape_markdown_context_aware("a | b", "table")
        'a \\| b'

    """
    if not text:
        return text

    escaped_chars: list[str] = []
    last = len(text) - 1
    for i, char in enumerate(text):
        prev_char = text[i - 1] if i > 0 else ""
        next_char = text[i + 1] if i < last else ""

        if char in _ALWAYS_ESCAPE or (char == "|" and context == "table"):
            escaped_chars.append("\\" + char)
        elif char == "_":
            if prev_char.isalnum() and next_char.isalnum():
                escaped_chars.append(char)
            else:
                escaped_chars.append("\\_")
        elif char == "<":
            if next_char.isalpha() or next_char in ("/", "!", "?"):
                escaped_chars.append("\\<")
            else:
                escaped_chars.append(char)
        elif char == "~":
            if "~" in (prev_char, next_char):
                escaped_chars.append("\\~")
            else:
                escaped_chars.append(char)
        else:
            escaped_chars.append(char)

    return "".join(escaped_chars)


def escape_line_start(word: str) -> str:
    r"""Escape a word that would open a block if it began a line.

    Parameters
    ----------
    word : str
        First word of an output line, already inline-escaped

    Returns
    -------
    str
        ``word`` with a backslash before its marker character, or ``word``
        unchanged when it cannot start a block

    Examples
    --------
        >>> escape_line_start("#")
        '\\#'
        >>> escape_line_start("> quoted")
        '\\> quoted'
        >>> escape_line_start("1.5")
        '1.5'

    """
    if not word:
        return word
    if word.startswith(">") or _MARKER_WORD.match(word):
        return "\\" + word
    ordered = _ORDERED_MARKER.match(word)
    if ordered:
        return f"{ordered.group(1)}\\{ordered.group(2)}"
    return word


def escape_closing_hashes(heading_text: str) -> str:
    """Escape a trailing run of ``#`` that an ATX heading would swallow.

    ``# Issue #`` would otherwise lose its last word as a closing sequence.
    """
    return _CLOSING_HASHES.sub(lambda m: f"{m.group(1)}\\{m.group(2)}", heading_text)


def escape_table_pipes(code: str) -> str:
    """Escape pipes in a code span that sits in a table cell.

    Pipes already preceded by an odd number of backslashes are left as they
    are, so the cell text does not grow on every formatting pass.
    """
    escaped_chars: list[str] = []
    backslashes = 0
    for char in code:
        if char == "|" and backslashes % 2 == 0:
            escaped_chars.append("\\")
        escaped_chars.append(char)
        backslashes = backslashes + 1 if char == "\\" else 0
    return "".join(escaped_chars)
