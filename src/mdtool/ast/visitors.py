#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Two traversal styles are available:

- :class:`NodeVisitor` is the classic double-dispatch visitor: ``node.accept(v)``
  calls ``v.visit_<kind>(node)`` and the visitor decides whether and how to
  descend. Serialization uses it.
- :class:`EventVisitor` consumes the flat enter/exit event stream produced by
  :func:`mdtool.ast.walk.walk`. Handlers are looked up by node kind
  (``enter_paragraph`` / ``exit_paragraph``), so any object providing those
  callbacks can be driven by the walker. The Markdown renderer uses it.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

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
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdtool.ast.walk import walk


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for each node type. The
    visitor is responsible for visiting children itself.

    Examples
    --------
    Visitor that collects heading levels:

        >>> class HeadingLevels(NodeVisitor):
        ...     def __init__(self):
        ...         self.levels = []
        ...     def visit_heading(self, node):
        ...         self.levels.append(node.level)
        ...     # remaining visit_* methods omitted

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class EventVisitor:
    """Base class for visitors driven by enter/exit walk events.

    Subclasses define ``enter_<kind>`` and/or ``exit_<kind>`` methods, where
    ``<kind>`` is :attr:`Node.kind` (``paragraph``, ``list_item``, ...). A
    kind with neither method is routed to :meth:`enter_unknown` /
    :meth:`exit_unknown`. A kind with only one of the two methods is treated
    as known and the missing side is a no-op.

    """

    def traverse(self, root: Node) -> None:
        """Walk ``root`` and dispatch every event to this visitor.

        Parameters
        ----------
        root : Node
            Root of the tree to traverse

        """
        for node, entering in walk(root):
            self.dispatch(node, entering)

    def dispatch(self, node: Node, entering: bool) -> None:
        """Route one walk event to the matching handler."""
        handler = self._find_handler(node, entering)
        if handler is not None:
            handler(node)
        elif not self._knows(node):
            if entering:
                self.enter_unknown(node)
            else:
                self.exit_unknown(node)

    def _find_handler(self, node: Node, entering: bool) -> Optional[Callable[[Node], None]]:
        prefix = "enter_" if entering else "exit_"
        return getattr(self, prefix + node.kind, None)

    def _knows(self, node: Node) -> bool:
        kind = node.kind
        return hasattr(self, "enter_" + kind) or hasattr(self, "exit_" + kind)

    def enter_unknown(self, node: Node) -> None:
        """Handle entering a node kind this visitor has no handler for."""
        return None

    def exit_unknown(self, node: Node) -> None:
        """Handle exiting a node kind this visitor has no handler for."""
        return None
