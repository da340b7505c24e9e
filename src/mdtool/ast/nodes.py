#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/ast/nodes.py
"""Node types for the formatter's document tree.

The parser adapter in :mod:`mdtool.parsers.markdown` builds these nodes from
mistune tokens and :class:`mdtool.renderers.markdown.MarkdownRenderer` writes
them back out, driven by the enter/exit walk in :mod:`mdtool.ast.walk`.

Node Kinds
----------
Containers of blocks:
    - Document, BlockQuote, ListItem (``children``), List (``items``)
    - Table (``header`` and ``rows``), TableRow (``cells``)

Leaf blocks:
    - Heading, Paragraph, TableCell (inline ``content``)
    - CodeBlock, HTMLBlock, ThematicBreak

Inlines:
    - Text, Code, HTMLInline, LineBreak
    - Emphasis, Strong, Strikethrough, Link, Image (inline ``content``)

Every node also has ``metadata`` and ``source_location`` fields, and the
navigation attributes ``parent``, ``prev`` and ``next``. The navigation
attributes are filled in by :func:`link_tree`; they are not dataclass fields,
so they play no part in equality or ``repr``.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, Optional

Alignment = Literal["left", "center", "right"]


@dataclass
class SourceLocation:
    """Where a node came from.

    Parameters
    ----------
    format : str
        Source format, ``'markdown'`` for parsed trees
    line, column : int or None
        Position in the source, when known
    metadata : dict
        Anything else worth keeping about the position

    """

    format: str
    line: Optional[int] = None
    column: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class Node(ABC):
    """Base class of every node.

    ``kind`` is the snake-case class name, which the event visitors use to
    find their ``enter_<kind>`` and ``exit_<kind>`` handlers.
    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    parent: Optional[Node] = None
    prev: Optional[Node] = None
    next: Optional[Node] = None

    @property
    def kind(self) -> str:
        """Snake-case node kind name, e.g. ``'block_quote'`` for BlockQuote."""
        return _kind_name(type(self).__name__)

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Call the visitor's ``visit_<kind>`` method and return its result."""


def _kind_name(class_name: str) -> str:
    chars: list[str] = []
    for i, ch in enumerate(class_name):
        if ch.isupper() and i > 0 and not class_name[i - 1].isupper():
            chars.append("_")
        elif ch.isupper() and 0 < i < len(class_name) - 1 and class_name[i + 1].islower():
            chars.append("_")
        chars.append(ch.lower())
    return "".join(chars)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root of the tree.

    ``metadata["front_matter"]`` holds raw YAML front matter, which the
    renderer writes back above the body.
    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Section heading.

    Parameters
    ----------
    level : int
        1 to 6
    content : list of Node
        Heading text as inline nodes

    Raises
    ------
    ValueError
        If ``level`` is outside 1-6

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Run of inline content, re-wrapped by the renderer."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code; always written back fenced.

    Parameters
    ----------
    content : str
        Code text, newline-terminated as mistune delivers it
    language : str or None
        First word of the info string. Any further words are kept in
        ``metadata["info_attrs"]``.

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """``>`` quote around other blocks."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Bulleted or numbered list.

    Parameters
    ----------
    ordered : bool
        Numbered list when True
    items : list of ListItem
        The entries
    start : int, default = 1
        First number in the source. The renderer ignores it and counts
        from 1.
    tight : bool, default = True
        No blank lines between items

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """One list entry holding block nodes."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list_item(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block, copied through verbatim."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_block(self)


@dataclass
class Table(Node):
    """GFM pipe table.

    Parameters
    ----------
    header : TableRow or None
        Header row. A table built without one uses its first body row.
    rows : list of TableRow
        Body rows
    alignments : list of {'left', 'center', 'right', None}
        Column alignment from the delimiter row

    """

    header: Optional[TableRow] = None
    rows: list[TableRow] = field(default_factory=list)
    alignments: list[Optional[Alignment]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Row of cells; ``is_header`` marks the header row."""

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Single table cell with inline content."""

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_cell(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Literal text. Backslash escapes are already resolved."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis, written back as ``*...*``."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong emphasis, written back as ``**...**``."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """``~~deleted~~`` text."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Code span; ``content`` excludes the backticks."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Inline link.

    Parameters
    ----------
    url : str
        Destination
    content : list of Node
        Link text as inline nodes
    title : str or None
        Optional quoted title

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image. The alternative text stays a list of inline nodes so that
    formatting inside ``![...]`` survives a round trip."""

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    @property
    def alt_text(self) -> str:
        """Alternative text without formatting."""
        return extract_text(self)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Line break inside a paragraph.

    A soft break (a plain newline in the source) is reflowed like a space.
    A hard break (``soft=False``) ends the line wherever wrapping puts it.
    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Inline raw HTML, copied through verbatim."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_inline(self)


BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Document,
    Heading,
    Paragraph,
    CodeBlock,
    BlockQuote,
    List,
    ListItem,
    ThematicBreak,
    HTMLBlock,
    Table,
    TableRow,
    TableCell,
)

INLINE_NODE_TYPES: tuple[type[Node], ...] = (
    Text,
    Emphasis,
    Strong,
    Strikethrough,
    Code,
    Link,
    Image,
    LineBreak,
    HTMLInline,
)


def get_node_children(node: Node) -> list[Node]:
    """Return the direct children of ``node`` in document order.

    Parameters
    ----------
    node : Node
        Any node

    Returns
    -------
    list of Node
        A new list; empty for leaves

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(node, (Heading, Paragraph, TableCell, Emphasis, Strong, Strikethrough, Link, Image)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        header: list[Node] = [node.header] if node.header is not None else []
        return header + list(node.rows)

    if isinstance(node, TableRow):
        return list(node.cells)

    # Nodes from other producers may still carry a children list
    children = getattr(node, "children", None)
    if isinstance(children, list):
        return [child for child in children if isinstance(child, Node)]

    return []


def link_tree(root: Node) -> Node:
    """Fill in ``parent``, ``prev`` and ``next`` for every node under ``root``.

    The root's own ``parent`` and siblings are reset to None. Linking is
    iterative so deeply nested documents do not hit the recursion limit.
    A node reachable twice (a cycle or a shared subtree) raises ValueError.

    Parameters
    ----------
    root : Node
        Root of the tree, normally a Document

    Returns
    -------
    Node
        The same root, for chaining

    """
    root.parent = None
    root.prev = None
    root.next = None

    seen: set[int] = set()
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            raise ValueError(f"Node {node.kind!r} is reachable more than once; the tree must be acyclic")
        seen.add(id(node))
        children = get_node_children(node)
        previous: Optional[Node] = None
        for child in children:
            child.parent = node
            child.prev = previous
            child.next = None
            if previous is not None:
                previous.next = child
            previous = child
        stack.extend(reversed(children))

    return root


def iter_ancestors(node: Node) -> Iterator[Node]:
    """Yield the ancestors of a linked node, nearest first."""
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def extract_text(node: Node) -> str:
    """Concatenate the text payload of all descendants of ``node``.

    Formatting markers are dropped and line breaks become single spaces.
    """
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, LineBreak):
        return " "
    return "".join(extract_text(child) for child in get_node_children(node))
