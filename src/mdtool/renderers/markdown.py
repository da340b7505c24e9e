#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/renderers/markdown.py
"""Canonical Markdown renderer.

This module turns a node tree back into Markdown text in one canonical form:
ATX headings, ``-`` bullets, sequential ordered numbering from 1, fenced code
blocks, and paragraphs re-wrapped at a fixed width. Formatting a document
twice gives the same text as formatting it once.

The renderer is driven by enter/exit events from :func:`mdtool.ast.walk`.
Output is collected on a :class:`~mdtool.renderers.context.RenderContextStack`:
every construct that needs its text in isolation pushes a frame on enter and
merges it into the parent on exit, so arbitrary nesting (an image inside a
link inside a list item inside a block quote) needs no per-construct state.

Text written into a frame always carries the frame's full line prefix. The
first line of a list item is the exception: the bullet already occupies that
space, so the prefix is removed when the item is closed.

Literal text is escaped on the way out so that it parses back to the same
text. Inline syntax is escaped as each text node is written; block markers
are escaped only on words that wrapping places at the start of a line. Hard
line breaks travel through the frames as a placeholder character and are
turned into ``"  \\n"`` when the paragraph is wrapped, so reflowing never
moves text across them.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Union

from mdtool.ast import (
    INLINE_NODE_TYPES,
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdtool.ast.visitors import EventVisitor
from mdtool.constants import (
    BLOCK_QUOTE_PREFIX,
    CODE_FENCE,
    CODE_FENCE_INDENT_UNIT,
    HARD_BREAK_MARKUP,
    HARD_BREAK_PLACEHOLDER,
    REPLACEMENT_CHARACTER,
    TABLE_MIN_COLUMN_WIDTH,
)
from mdtool.exceptions import RenderingError
from mdtool.options.markdown import MarkdownRendererOptions
from mdtool.renderers.base import BaseRenderer
from mdtool.renderers.context import RenderContextStack
from mdtool.utils.decorators import debug_timer
from mdtool.utils.escape import (
    escape_closing_hashes,
    escape_line_start,
    escape_markdown_context_aware,
    escape_table_pipes,
)
from mdtool.utils.text import split_words, word_wrap

logger = logging.getLogger(__name__)

_BACKTICK_RUN = re.compile(r"`+")
_FENCE_LINE = re.compile(r"^ *(`{3,})", re.MULTILINE)


class MarkdownRenderer(EventVisitor, BaseRenderer):
    """Render a node tree to canonical Markdown.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Formatting options

    Examples
    --------
        >>> from mdtool.ast import Document, Heading, List, ListItem, Paragraph, Text
        >>> doc = Document(children=[
        ...     Heading(level=2, content=[Text(content="Steps")]),
        ...     List(ordered=True, items=[
        ...         ListItem(children=[Paragraph(content=[Text(content="first")])]),
        ...         ListItem(children=[Paragraph(content=[Text(content="second")])]),
        ...     ]),
        ... ])
        >>> print(MarkdownRenderer().render_to_string(doc), end="")
        ## Steps
        <BLANKLINE>
        1. first
        2. second

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._reset_state()

    def _reset_state(self) -> None:
        self._stack = RenderContextStack()
        # Ordered list id -> next ordinal; bullet width per open list item
        self._counters: dict[int, int] = {}
        self._bullet_widths: dict[int, int] = {}
        self._list_depth = 0
        self._warned_kinds: set[str] = set()
        # Rendered cell text per open table, row by row
        self._tables: list[list[list[str]]] = []
        self._cell_depth = 0

    def render_to_string(self, doc: Document) -> str:
        """Render a document to a Markdown string.

        Parameters
        ----------
        doc : Document
            Root of the tree to render

        Returns
        -------
        str
            Markdown text ending in exactly one newline, or the empty string
            for a document without content

        Raises
        ------
        RenderingError
            If the enter/exit events are unbalanced

        """
        self._reset_state()

        with debug_timer(logger, "Rendering (markdown)"):
            self.traverse(doc)

        if self._stack.depth != 0:
            raise RenderingError(
                f"Render context stack not balanced after walk: {self._stack.depth} frame(s) left open",
                rendering_stage="finish",
            )
        if self._list_depth != 0:
            raise RenderingError(
                f"List nesting not balanced after walk: depth {self._list_depth}", rendering_stage="finish"
            )

        output = self._stack.root.getvalue().lstrip("\n").rstrip("\n")
        self._counters.clear()
        self._bullet_widths.clear()
        return output + "\n" if output else ""

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a document and write the Markdown to ``output``.

        Parameters
        ----------
        doc : Document
            Root of the tree to render
        output : str, Path, IO[bytes], or IO[str]
            File path or stream

        """
        self.write_text_output(self.render_to_string(doc), output)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        self._stack.peek().write(text)

    def _in_tight_list(self, node: Node) -> bool:
        container = node.parent
        if isinstance(container, ListItem):
            container = container.parent
        return isinstance(container, List) and container.tight

    def _separate(self, node: Node, force_blank: bool = False) -> None:
        """Put the line break(s) between ``node`` and its previous sibling.

        A block after another block gets exactly one blank line, or a single
        newline inside a tight list. The blank line carries the current prefix
        with trailing spaces removed, so blank lines inside a block quote keep
        their ``>``.
        """
        out = self._stack.peek()
        prev = node.prev
        if prev is None or isinstance(prev, INLINE_NODE_TYPES) or out.empty:
            return

        out.rstrip("\n")
        if self._in_tight_list(node) and not force_blank:
            out.write("\n")
        else:
            out.write("\n" + self._stack.indent.rstrip() + "\n")

    def _prefix_lines(self, text: str, prefix: str) -> str:
        return "\n".join(prefix + line if line else prefix.rstrip() for line in text.split("\n"))

    @staticmethod
    def _code_span(content: str) -> str:
        """Wrap ``content`` in backticks that cannot close early."""
        runs = _BACKTICK_RUN.findall(content)
        if not runs:
            return f"`{content}`"
        fence = "`" * (max(len(run) for run in runs) + 1)
        return f"{fence} {content} {fence}"

    @staticmethod
    def _destination(url: str, title: str | None) -> str:
        destination = url.replace(" ", "%20")
        if title:
            escaped = title.replace('"', '\\"')
            destination += f' "{escaped}"'
        return destination

    def _code_block_prefix(self, node: CodeBlock) -> str:
        """Line prefix for a fenced code block.

        Inside a list item the fence is indented one list unit past the item
        text, truncated down to a multiple of four columns, and pulled back by
        four when that would leave it four or more columns past the item text
        (where it would read as an indented code block). A fence that is the
        first block of an item sits directly after the bullet, and a fence
        inside a block quote only takes the quote's own prefix.
        """
        indent = self._stack.indent
        if not isinstance(node.parent, ListItem) or node.prev is None or indent.strip():
            return indent

        unit = CODE_FENCE_INDENT_UNIT
        width = (len(indent) + len(self.options.list_indent)) // unit * unit
        while width < len(indent):
            width += unit
        if width - len(indent) >= unit:
            width -= unit
        return " " * width

    def _wrap_paragraph(self, text: str, indent: str) -> str:
        """Wrap each run of text between hard breaks on its own."""
        segments = [split_words(segment) for segment in text.split(HARD_BREAK_PLACEHOLDER)]
        wrapped = [
            word_wrap(words, self.options.line_width, indent, indent, line_start=escape_line_start)
            for words in segments
            if words
        ]
        return HARD_BREAK_MARKUP.join(wrapped)

    @staticmethod
    def _single_line(text: str) -> str:
        return text.replace(HARD_BREAK_PLACEHOLDER, " ").replace("\n", " ").strip()

    @staticmethod
    def _table_row(cells: list[str], widths: list[int], alignments: list[str | None]) -> str:
        parts = []
        for cell, width, alignment in zip(cells, widths, alignments):
            padding = width - len(cell)
            if alignment == "right":
                cell = " " * padding + cell
            elif alignment == "center":
                cell = " " * (padding // 2) + cell + " " * (padding - padding // 2)
            else:
                cell = cell + " " * padding
            parts.append(f" {cell} ")
        return "|" + "|".join(parts) + "|"

    @staticmethod
    def _table_delimiter(widths: list[int], alignments: list[str | None]) -> str:
        parts = []
        for width, alignment in zip(widths, alignments):
            left = ":" if alignment in ("left", "center") else "-"
            right = ":" if alignment in ("right", "center") else "-"
            parts.append(left + "-" * width + right)
        return "|" + "|".join(parts) + "|"

    def _close_inline(self, marker: str) -> None:
        text, _ = self._stack.pop()
        if text:
            self._write(f"{marker}{text}{marker}")

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def enter_document(self, node: Document) -> None:
        front_matter = node.metadata.get("front_matter")
        if isinstance(front_matter, str):
            if front_matter and not front_matter.endswith("\n"):
                front_matter += "\n"
            self._write(f"---\n{front_matter}---\n\n")

    def enter_heading(self, node: Heading) -> None:
        self._stack.push()

    def exit_heading(self, node: Heading) -> None:
        text, indent = self._stack.pop()
        text = self._single_line(text)
        self._separate(node)

        if self.options.heading_style == "setext" and node.level <= 2 and text:
            first, sep, rest = text.partition(" ")
            text = escape_line_start(first) + sep + rest
            underline = ("=" if node.level == 1 else "-") * len(text)
            self._write(f"{indent}{text}\n{indent}{underline}\n")
            return

        text = escape_closing_hashes(text)
        hashes = "#" * node.level
        self._write(f"{indent}{hashes} {text}\n" if text else f"{indent}{hashes}\n")

    def enter_paragraph(self, node: Paragraph) -> None:
        self._stack.push()

    def exit_paragraph(self, node: Paragraph) -> None:
        text, indent = self._stack.pop()
        wrapped = self._wrap_paragraph(text, indent)
        if not wrapped:
            return
        self._separate(node)
        self._write(wrapped + "\n")

    def enter_thematic_break(self, node: ThematicBreak) -> None:
        # A rule right under paragraph text would turn it into a setext heading
        self._separate(node, force_blank=True)
        self._write(self._stack.indent + self.options.hr_char * self.options.hr_length + "\n")

    def enter_code_block(self, node: CodeBlock) -> None:
        self._separate(node)
        prefix = self._code_block_prefix(node)

        longest = max((len(run) for run in _FENCE_LINE.findall(node.content)), default=0)
        fence = CODE_FENCE if longest < len(CODE_FENCE) else "`" * (longest + 1)

        info = node.language or ""
        info_attrs = node.metadata.get("info_attrs")
        if info and info_attrs:
            info = f"{info} {info_attrs}"

        lines = [prefix + fence + info]
        if node.content:
            body = node.content[:-1] if node.content.endswith("\n") else node.content
            lines.append(self._prefix_lines(body, prefix))
        lines.append(prefix + fence)
        self._write("\n".join(lines) + "\n")

    def enter_block_quote(self, node: BlockQuote) -> None:
        self._stack.push(BLOCK_QUOTE_PREFIX)

    def exit_block_quote(self, node: BlockQuote) -> None:
        text, indent = self._stack.pop()
        self._separate(node)
        if not text:
            self._write(indent.rstrip() + "\n")
            return
        self._write(text if text.endswith("\n") else text + "\n")

    def enter_list(self, node: List) -> None:
        delta = ""
        if isinstance(node.parent, ListItem):
            # Nested bullets go one indent unit right of the enclosing bullet,
            # and never left of the enclosing item's text
            bullet_width = self._bullet_widths.get(id(node.parent), 0)
            delta = " " * max(0, len(self.options.list_indent) - bullet_width)
        self._stack.push(delta)

        if node.ordered:
            self._counters[id(node)] = 1
        self._list_depth += 1

    def exit_list(self, node: List) -> None:
        text, _ = self._stack.pop()
        self._list_depth -= 1
        if self._list_depth < 0:
            raise RenderingError("List nesting depth went negative", rendering_stage="list")
        self._counters.pop(id(node), None)

        if text:
            self._separate(node)
            self._write(text)

    def enter_list_item(self, node: ListItem) -> None:
        parent = node.parent
        if isinstance(parent, List) and parent.ordered:
            ordinal = self._counters.get(id(parent), 1)
            self._counters[id(parent)] = ordinal + 1
            marker = f"{ordinal}."
        else:
            marker = self.options.bullet_char

        self._separate(node)
        bullet = marker + " "
        self._write(self._stack.indent + bullet)
        self._stack.push(" " * len(bullet))
        self._bullet_widths[id(node)] = len(bullet)

    def exit_list_item(self, node: ListItem) -> None:
        text, indent = self._stack.pop()
        self._bullet_widths.pop(id(node), None)

        text = text.rstrip("\n")
        if text.startswith(indent):
            text = text[len(indent) :]
        text = text.lstrip(" ")

        if not text:
            # Drop the space after a bare bullet
            self._stack.peek().rstrip(" ")
            self._write("\n")
            return
        self._write(text + "\n")

    def enter_html_block(self, node: HTMLBlock) -> None:
        content = node.content.strip("\n")
        if not content:
            return
        self._separate(node)
        self._write(self._prefix_lines(content, self._stack.indent) + "\n")

    def enter_table(self, node: Table) -> None:
        self._tables.append([])

    def exit_table(self, node: Table) -> None:
        """Write the collected cells as a pipe table with padded columns.

        Every column is as wide as its widest cell. Body cells are padded
        according to the column alignment and header cells are always
        left-aligned; the delimiter row carries the alignment colons.
        """
        rows = [row for row in self._tables.pop() if row]
        if not rows:
            return

        columns = max(len(node.alignments), max(len(row) for row in rows))
        rows = [row + [""] * (columns - len(row)) for row in rows]
        alignments: list[str | None] = list(node.alignments[:columns])
        alignments += [None] * (columns - len(alignments))
        widths = [max(TABLE_MIN_COLUMN_WIDTH, *(len(row[column]) for row in rows)) for column in range(columns)]

        header, body = rows[0], rows[1:]
        lines = [
            self._table_row(header, widths, [None] * columns),
            self._table_delimiter(widths, alignments),
            *(self._table_row(row, widths, alignments) for row in body),
        ]

        # The header row would otherwise continue a paragraph in a tight list
        self._separate(node, force_blank=True)
        indent = self._stack.indent
        self._write("\n".join(indent + line for line in lines) + "\n")

    def enter_table_row(self, node: TableRow) -> None:
        if self._tables:
            self._tables[-1].append([])

    def enter_table_cell(self, node: TableCell) -> None:
        self._cell_depth += 1
        self._stack.push()

    def exit_table_cell(self, node: TableCell) -> None:
        text, _ = self._stack.pop()
        self._cell_depth -= 1
        cell = " ".join(split_words(self._single_line(text)))
        if self._tables and self._tables[-1]:
            self._tables[-1][-1].append(cell)
        else:
            # A cell outside any table row is written as plain text
            self._write(cell)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def enter_text(self, node: Text) -> None:
        content = node.content.replace(HARD_BREAK_PLACEHOLDER, REPLACEMENT_CHARACTER)
        content = escape_markdown_context_aware(content, "table" if self._cell_depth else "text")
        if content.endswith("!") and isinstance(node.next, Link):
            # "!" right before a link would turn it into an image
            content = content[:-1] + "\\!"
        self._write(content)

    def enter_line_break(self, node: LineBreak) -> None:
        self._write("\n" if node.soft else HARD_BREAK_PLACEHOLDER)

    def enter_code(self, node: Code) -> None:
        content = escape_table_pipes(node.content) if self._cell_depth else node.content
        self._write(self._code_span(content))

    def enter_emphasis(self, node: Emphasis) -> None:
        self._stack.push()

    def exit_emphasis(self, node: Emphasis) -> None:
        self._close_inline("*")

    def enter_strong(self, node: Strong) -> None:
        self._stack.push()

    def exit_strong(self, node: Strong) -> None:
        self._close_inline("**")

    def enter_strikethrough(self, node: Strikethrough) -> None:
        self._stack.push()

    def exit_strikethrough(self, node: Strikethrough) -> None:
        self._close_inline("~~")

    def enter_link(self, node: Link) -> None:
        self._stack.push()

    def exit_link(self, node: Link) -> None:
        text, _ = self._stack.pop()
        self._write(f"[{text}]({self._destination(node.url, node.title)})")

    def enter_image(self, node: Image) -> None:
        self._stack.push()

    def exit_image(self, node: Image) -> None:
        alt, _ = self._stack.pop()
        self._write(f"![{alt}]({self._destination(node.url, node.title)})")

    def enter_html_inline(self, node: HTMLInline) -> None:
        self._write(node.content)

    # ------------------------------------------------------------------
    # Unrecognized nodes
    # ------------------------------------------------------------------

    def enter_unknown(self, node: Node) -> None:
        """Open a throwaway frame so the subtree renders nothing."""
        if node.kind not in self._warned_kinds:
            self._warned_kinds.add(node.kind)
            logger.warning(f"Skipping unsupported node type during Markdown rendering: {type(node).__name__}")
        self._stack.push()

    def exit_unknown(self, node: Node) -> None:
        self._stack.pop()
