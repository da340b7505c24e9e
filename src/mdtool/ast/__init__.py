#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/ast/__init__.py
"""Abstract Syntax Tree (AST) module for Markdown documents.

The module consists of:

- nodes: AST node classes and tree navigation helpers
- walk: depth-first enter/exit traversal
- visitors: double-dispatch and event-driven visitor base classes
- serialization: JSON serialization and deserialization of AST structures

Examples
--------
Basic usage:

    >>> from mdtool.ast import Document, Heading, Paragraph, Text
    >>> from mdtool.renderers.markdown import MarkdownRenderer
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> MarkdownRenderer().render_to_string(doc)
    '# Title\\n\\nHello world\\n'

"""

from __future__ import annotations

from mdtool.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Alignment,
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
    extract_text,
    get_node_children,
    iter_ancestors,
    link_tree,
)
from mdtool.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from mdtool.ast.visitors import EventVisitor, NodeVisitor
from mdtool.ast.walk import WalkEvent, walk

__all__ = [
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "EventVisitor",
    "HTMLBlock",
    "HTMLInline",
    "Heading",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "WalkEvent",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "extract_text",
    "get_node_children",
    "iter_ancestors",
    "json_to_ast",
    "link_tree",
    "walk",
]
