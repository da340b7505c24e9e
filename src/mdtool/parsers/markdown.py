#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/parsers/markdown.py
"""Markdown to AST parser.

This module wraps mistune (3.x) in AST mode and converts its token stream
into the mdtool node tree consumed by the canonical renderer. A leading
YAML front matter block is split off before mistune sees the text and is
kept on the Document so the formatter can write it back unchanged.

"""

from __future__ import annotations

import logging
from typing import Any

from mdtool.ast import (
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
from mdtool.exceptions import ParsingError
from mdtool.options.markdown import MarkdownParserOptions
from mdtool.parsers.base import BaseParser
from mdtool.utils.decorators import debug_timer, requires_dependencies
from mdtool.utils.io_utils import MarkdownSource, read_source_text

logger = logging.getLogger(__name__)

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]

FRONT_MATTER_DELIMITER = "---"

# The base table plugin only fires at the top level
TABLE_PLUGINS = ["table", "mistune.plugins.table.table_in_quote", "mistune.plugins.table.table_in_list"]


class MarkdownParser(BaseParser):
    r"""Convert Markdown to the mdtool node tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Hello\\n\\nThis is **bold**.")
        >>> doc.children[0].level
        1

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: MarkdownSource) -> Document:
        """Parse Markdown input into a Document.

        Parameters
        ----------
        input_data : str, bytes, Path, or file-like
            Markdown input. A ``str`` is the Markdown text itself; bytes and
            file contents are decoded as UTF-8.

        Returns
        -------
        Document
            Root of the node tree. ``metadata["front_matter"]`` holds the raw
            front matter text when the document has any.

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        markdown_content = read_source_text(input_data)
        markdown_content, metadata = self._extract_front_matter(markdown_content)

        import mistune

        plugins: list[str] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.extend(TABLE_PLUGINS)

        markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        with debug_timer(logger, "Parsing (markdown)"):
            try:
                tokens, _state = markdown.parse(markdown_content)
            except Exception as e:
                raise ParsingError(
                    f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e
                ) from e

            children = self._process_tokens(tokens) if isinstance(tokens, list) else []

        return Document(children=children, metadata=metadata)

    def _extract_front_matter(self, content: str) -> tuple[str, dict[str, Any]]:
        """Split a leading YAML front matter block from ``content``.

        Parameters
        ----------
        content : str
            Markdown content

        Returns
        -------
        tuple[str, dict]
            Remaining content and the Document metadata. The metadata is
            empty when there is no front matter.

        """
        if not (content.startswith("---\n") or content.startswith("---\r\n")):
            return content, {}

        lines = content.splitlines(keepends=True)
        end_index = -1
        for i in range(1, len(lines)):
            if lines[i].rstrip("\r\n") == FRONT_MATTER_DELIMITER:
                end_index = i
                break

        if end_index <= 0:
            return content, {}

        raw = "".join(line.rstrip("\r\n") + "\n" for line in lines[1:end_index])
        remaining = "".join(lines[end_index + 1 :])
        metadata: dict[str, Any] = {"front_matter": raw}

        import yaml

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            logger.warning(f"Front matter is not valid YAML, keeping it verbatim: {e}")
        else:
            if isinstance(data, dict):
                metadata["front_matter_fields"] = data

        return remaining, metadata

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single block token into a node.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting node, or None for tokens that carry no content
            (``blank_line``) or are dropped by the options

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is the paragraph of a tight list item
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "block_html":
            if not self.options.preserve_html:
                return None
            return HTMLBlock(content=token.get("raw", ""))
        elif token_type == "blank_line":
            return None

        logger.debug(f"Skipping unsupported block token: {token_type!r}")
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        children = token.get("children", [])
        content = self._process_inline_tokens(children) if isinstance(children, list) else []
        return Heading(level=level, content=content)

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process a fenced or indented code block token.

        Only the first word of the info string is kept as the language;
        the rest is preserved in ``metadata["info_attrs"]``.

        """
        code_content = token.get("raw", "")
        attrs = token.get("attrs", {})
        info_string = attrs.get("info") if isinstance(attrs, dict) else None

        metadata: dict[str, Any] = {}
        language = None
        if info_string:
            parts = info_string.strip().split(maxsplit=1)
            if parts:
                language = parts[0]
                if len(parts) > 1:
                    metadata["info_attrs"] = parts[1]

        return CodeBlock(content=code_content, language=language, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        mistune 3 keeps ``tight`` and ``bullet`` on the token itself and
        ``ordered`` / ``start`` / ``depth`` under ``attrs``.

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = bool(token.get("tight", attrs.get("tight", True)))

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []

        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in children
            if isinstance(child, dict) and child.get("type") == "list_item"
        ]
        return List(ordered=ordered, items=items, start=start if isinstance(start, int) else 1, tight=tight)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        mistune puts the header cells straight under ``table_head`` and the
        body rows under ``table_body``. Each cell carries its column
        alignment in ``attrs["align"]``.

        """
        header = None
        rows: list[TableRow] = []
        alignments = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                cells = self._process_table_cells(section)
                header = TableRow(cells=cells, is_header=True)
                alignments = [cell.alignment for cell in cells]
            elif section_type == "table_body":
                for row_token in section.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(row_token)))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, token: dict[str, Any]) -> list[TableCell]:
        cells = []
        for cell_token in token.get("children", []):
            if cell_token.get("type") != "table_cell":
                continue
            attrs = cell_token.get("attrs", {})
            alignment = attrs.get("align") if isinstance(attrs, dict) else None
            content = self._process_inline_tokens(cell_token.get("children", []))
            cells.append(TableCell(content=content, alignment=alignment))
        return cells

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens into nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        content = self._process_inline_tokens(token.get("children", []))
        return Link(url=attrs.get("url", ""), content=content, title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; the alt text is kept as inline children."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        content = self._process_inline_tokens(token.get("children", []))
        return Image(url=attrs.get("url", ""), content=content, title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline | None:
        if not self.options.preserve_html:
            return None
        return HTMLInline(content=token.get("raw", ""))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline node, or None for unsupported tokens

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug(f"Skipping unsupported inline token: {token_type!r}")
        return None


def markdown_to_ast(markdown_content: MarkdownSource, options: MarkdownParserOptions | None = None) -> Document:
    """Parse Markdown into a Document.

    Parameters
    ----------
    markdown_content : str, bytes, Path, or file-like
        Markdown input
    options : MarkdownParserOptions or None, default = None
        Parser options

    Returns
    -------
    Document
        Root of the node tree

    """
    return MarkdownParser(options).parse(markdown_content)
