#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/ast/serialization.py
"""JSON serialization and deserialization for AST nodes.

Used by the ``mdtool ast`` command to dump the parse tree, and by tests to
build trees from fixtures. Navigation back-references (``parent``, ``prev``,
``next``) are never serialized; they are rebuilt by the walker.

Examples
--------
Serialize AST to JSON:

    >>> from mdtool.ast.nodes import Document, Heading, Text
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> json_str = ast_to_json(doc, indent=2)

Deserialize JSON back to AST:

    >>> doc = json_to_ast(json_str)
    >>> doc.children[0].level
    1

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, cast

from mdtool.ast.nodes import (
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
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdtool.ast.visitors import NodeVisitor

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_source_location(location: SourceLocation) -> dict[str, Any]:
    result: dict[str, Any] = {"node_type": "SourceLocation", "format": location.format}
    if location.line is not None:
        result["line"] = location.line
    if location.column is not None:
        result["column"] = location.column
    if location.metadata:
        result["metadata"] = location.metadata
    return result


class _DictSerializer(NodeVisitor):
    """Visitor that turns each node into a plain dictionary."""

    def _finish(self, node: Node, result: dict[str, Any]) -> dict[str, Any]:
        result["metadata"] = node.metadata
        if node.source_location:
            result["source_location"] = _serialize_source_location(node.source_location)
        return result

    def _nodes(self, nodes: list[Node]) -> list[dict[str, Any]]:
        return [child.accept(self) for child in nodes]

    def visit_document(self, node: Document) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Document", "children": self._nodes(node.children)})

    def visit_heading(self, node: Heading) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Heading", "level": node.level, "content": self._nodes(node.content)})

    def visit_paragraph(self, node: Paragraph) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Paragraph", "content": self._nodes(node.content)})

    def visit_code_block(self, node: CodeBlock) -> dict[str, Any]:
        result: dict[str, Any] = {"node_type": "CodeBlock", "content": node.content}
        if node.language:
            result["language"] = node.language
        return self._finish(node, result)

    def visit_block_quote(self, node: BlockQuote) -> dict[str, Any]:
        return self._finish(node, {"node_type": "BlockQuote", "children": self._nodes(node.children)})

    def visit_list(self, node: List) -> dict[str, Any]:
        result = {
            "node_type": "List",
            "ordered": node.ordered,
            "start": node.start,
            "tight": node.tight,
            "items": self._nodes(cast(list[Node], node.items)),
        }
        return self._finish(node, result)

    def visit_list_item(self, node: ListItem) -> dict[str, Any]:
        return self._finish(node, {"node_type": "ListItem", "children": self._nodes(node.children)})

    def visit_thematic_break(self, node: ThematicBreak) -> dict[str, Any]:
        return self._finish(node, {"node_type": "ThematicBreak"})

    def visit_html_block(self, node: HTMLBlock) -> dict[str, Any]:
        return self._finish(node, {"node_type": "HTMLBlock", "content": node.content})

    def visit_table(self, node: Table) -> dict[str, Any]:
        result: dict[str, Any] = {
            "node_type": "Table",
            "header": node.header.accept(self) if node.header is not None else None,
            "rows": self._nodes(cast(list[Node], node.rows)),
            "alignments": list(node.alignments),
        }
        return self._finish(node, result)

    def visit_table_row(self, node: TableRow) -> dict[str, Any]:
        result: dict[str, Any] = {
            "node_type": "TableRow",
            "is_header": node.is_header,
            "cells": self._nodes(cast(list[Node], node.cells)),
        }
        return self._finish(node, result)

    def visit_table_cell(self, node: TableCell) -> dict[str, Any]:
        result: dict[str, Any] = {"node_type": "TableCell", "content": self._nodes(node.content)}
        if node.alignment:
            result["alignment"] = node.alignment
        return self._finish(node, result)

    def visit_text(self, node: Text) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Text", "content": node.content})

    def visit_emphasis(self, node: Emphasis) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Emphasis", "content": self._nodes(node.content)})

    def visit_strong(self, node: Strong) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Strong", "content": self._nodes(node.content)})

    def visit_strikethrough(self, node: Strikethrough) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Strikethrough", "content": self._nodes(node.content)})

    def visit_code(self, node: Code) -> dict[str, Any]:
        return self._finish(node, {"node_type": "Code", "content": node.content})

    def visit_link(self, node: Link) -> dict[str, Any]:
        result: dict[str, Any] = {"node_type": "Link", "url": node.url, "content": self._nodes(node.content)}
        if node.title is not None:
            result["title"] = node.title
        return self._finish(node, result)

    def visit_image(self, node: Image) -> dict[str, Any]:
        result: dict[str, Any] = {"node_type": "Image", "url": node.url, "content": self._nodes(node.content)}
        if node.title is not None:
            result["title"] = node.title
        return self._finish(node, result)

    def visit_line_break(self, node: LineBreak) -> dict[str, Any]:
        return self._finish(node, {"node_type": "LineBreak", "soft": node.soft})

    def visit_html_inline(self, node: HTMLInline) -> dict[str, Any]:
        return self._finish(node, {"node_type": "HTMLInline", "content": node.content})

    def generic_visit(self, node: Node) -> Any:
        raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a dictionary representation.

    Parameters
    ----------
    node : Node
        The AST node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the tree contains a node type this module does not know

    Examples
    --------
    >>> ast_to_dict(Text(content="Hello"))
    {'node_type': 'Text', 'content': 'Hello', 'metadata': {}}

    """
    serializer = _DictSerializer()
    try:
        return node.accept(serializer)
    except AttributeError as e:
        # accept() on a foreign Node subclass calls a visit_* method we lack
        raise ValueError(f"Unknown node type for serialization: {e}") from e


def _common(data: dict[str, Any]) -> dict[str, Any]:
    location = data.get("source_location")
    return {
        "metadata": data.get("metadata", {}),
        "source_location": _deserialize_source_location(location) if location else None,
    }


def _deserialize_source_location(data: dict[str, Any]) -> SourceLocation:
    return SourceLocation(
        format=data["format"],
        line=data.get("line"),
        column=data.get("column"),
        metadata=data.get("metadata", {}),
    )


def _children(data: dict[str, Any], key: str) -> list[Node]:
    return [dict_to_ast(child) for child in data.get(key, [])]


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "Document": lambda d: Document(children=_children(d, "children"), **_common(d)),
    "Heading": lambda d: Heading(level=d["level"], content=_children(d, "content"), **_common(d)),
    "Paragraph": lambda d: Paragraph(content=_children(d, "content"), **_common(d)),
    "CodeBlock": lambda d: CodeBlock(content=d["content"], language=d.get("language"), **_common(d)),
    "BlockQuote": lambda d: BlockQuote(children=_children(d, "children"), **_common(d)),
    "List": lambda d: List(
        ordered=d["ordered"],
        items=cast(list[ListItem], _children(d, "items")),
        start=d.get("start", 1),
        tight=d.get("tight", True),
        **_common(d),
    ),
    "ListItem": lambda d: ListItem(children=_children(d, "children"), **_common(d)),
    "ThematicBreak": lambda d: ThematicBreak(**_common(d)),
    "HTMLBlock": lambda d: HTMLBlock(content=d["content"], **_common(d)),
    "Table": lambda d: Table(
        header=cast(TableRow, dict_to_ast(d["header"])) if d.get("header") else None,
        rows=cast(list[TableRow], _children(d, "rows")),
        alignments=list(d.get("alignments", [])),
        **_common(d),
    ),
    "TableRow": lambda d: TableRow(
        cells=cast(list[TableCell], _children(d, "cells")), is_header=d.get("is_header", False), **_common(d)
    ),
    "TableCell": lambda d: TableCell(content=_children(d, "content"), alignment=d.get("alignment"), **_common(d)),
    "Text": lambda d: Text(content=d["content"], **_common(d)),
    "Emphasis": lambda d: Emphasis(content=_children(d, "content"), **_common(d)),
    "Strong": lambda d: Strong(content=_children(d, "content"), **_common(d)),
    "Strikethrough": lambda d: Strikethrough(content=_children(d, "content"), **_common(d)),
    "Code": lambda d: Code(content=d["content"], **_common(d)),
    "Link": lambda d: Link(url=d["url"], content=_children(d, "content"), title=d.get("title"), **_common(d)),
    "Image": lambda d: Image(url=d["url"], content=_children(d, "content"), title=d.get("title"), **_common(d)),
    "LineBreak": lambda d: LineBreak(soft=d.get("soft", False), **_common(d)),
    "HTMLInline": lambda d: HTMLInline(content=d["content"], **_common(d)),
}


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Convert a dictionary representation back to an AST node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValueError
        If the dictionary has no ``node_type`` or an unknown one

    """
    node_type = data.get("node_type")
    if not node_type:
        raise ValueError("Dictionary must contain 'node_type' field")

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if deserializer is None:
        raise ValueError(f"Unknown node type: {node_type}")

    return deserializer(data)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string, ``{"schema_version": 1, "node_type": ..., ...}``

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Node:
    """Deserialize a JSON string produced by :func:`ast_to_json`.

    Parameters
    ----------
    json_str : str
        JSON string representation

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValueError
        If the schema version is unsupported or a node type is unknown

    """
    data = json.loads(json_str)
    schema_version = data.pop("schema_version", None)
    if schema_version is None:
        logger.debug("No schema_version in AST JSON, assuming version %d", SCHEMA_VERSION)
    elif schema_version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {schema_version} (supported: {SCHEMA_VERSION})")
    return dict_to_ast(data)
