#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/renderers/context.py
"""Render context stack used by the Markdown renderer.

Every open construct that needs its output collected in isolation
(paragraph, list, list item, block quote, link text...) gets a frame. A
frame's indent is the full line prefix for text written inside it: the
concatenation of the deltas of every frame below it. Handlers write fully
indented text, so merging a child frame into its parent is a plain append.

The bottom (root) frame lives for the whole render and cannot be popped.

"""

from __future__ import annotations

from mdtool.exceptions import RenderingError


class RenderFrame:
    """Text accumulator for one open construct.

    Parameters
    ----------
    indent : str
        Full line prefix for text written into this frame

    """

    def __init__(self, indent: str = "") -> None:
        self.indent = indent
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        """Append ``text``; empty strings are ignored."""
        if text:
            self._parts.append(text)

    def rstrip(self, chars: str | None = None) -> None:
        """Strip trailing ``chars`` from the accumulated text in place."""
        while self._parts:
            tail = self._parts[-1].rstrip(chars)
            if tail:
                self._parts[-1] = tail
                return
            self._parts.pop()

    def getvalue(self) -> str:
        """Return the accumulated text."""
        return "".join(self._parts)

    @property
    def empty(self) -> bool:
        """True when nothing has been written."""
        return not self._parts

    def __repr__(self) -> str:
        return f"RenderFrame(indent={self.indent!r}, length={len(self.getvalue())})"


class RenderContextStack:
    """Stack of :class:`RenderFrame` objects with push/pop accounting.

    ``pushes`` and ``pops`` count every push and pop over the stack's life,
    so a finished render can be checked for balance.

    Examples
    --------
        >>> stack = RenderContextStack()
        >>> stack.push("> ").write("> quoted\\n")
        >>> stack.pop()
        ('> quoted\\n', '> ')

    """

    def __init__(self) -> None:
        self._frames: list[RenderFrame] = [RenderFrame("")]
        self.pushes = 0
        self.pops = 0

    def push(self, delta: str = "") -> RenderFrame:
        """Open a frame whose indent is the current indent plus ``delta``.

        Parameters
        ----------
        delta : str, default ""
            Prefix added on top of the current frame's indent

        Returns
        -------
        RenderFrame
            The new top frame

        """
        frame = RenderFrame(self.indent + delta)
        self._frames.append(frame)
        self.pushes += 1
        return frame

    def peek(self) -> RenderFrame:
        """Return the top frame."""
        return self._frames[-1]

    def pop(self) -> tuple[str, str]:
        """Close the top frame.

        Returns
        -------
        tuple[str, str]
            The frame's accumulated text and its resolved indent

        Raises
        ------
        RenderingError
            If only the root frame is left

        """
        if len(self._frames) <= 1:
            raise RenderingError(
                "Render context stack underflow: exit event without a matching enter",
                rendering_stage="pop",
            )
        frame = self._frames.pop()
        self.pops += 1
        return frame.getvalue(), frame.indent

    @property
    def root(self) -> RenderFrame:
        """The bottom frame holding the document output."""
        return self._frames[0]

    @property
    def depth(self) -> int:
        """Number of open frames above the root."""
        return len(self._frames) - 1

    @property
    def indent(self) -> str:
        """Indent of the top frame."""
        return self._frames[-1].indent
