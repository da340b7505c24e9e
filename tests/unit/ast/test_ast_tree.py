#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for AST nodes, tree linking, the walk and the visitors."""

import pytest

from mdtool.ast import (
    BlockQuote,
    Code,
    Document,
    EventVisitor,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    NodeVisitor,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    extract_text,
    get_node_children,
    iter_ancestors,
    link_tree,
    walk,
)


def sample_document() -> Document:
    return Document(
        children=[
            Heading(level=1, content=[Text(content="Title")]),
            BlockQuote(
                children=[
                    Paragraph(content=[Text(content="a "), Strong(content=[Text(content="b")])]),
                ]
            ),
            List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text(content="item")])])]),
        ]
    )


@pytest.mark.unit
class TestNodes:
    """Test node classes and helpers."""

    def test_kind_names(self):
        """Test the snake-case kind of each node class."""
        assert Document().kind == "document"
        assert BlockQuote().kind == "block_quote"
        assert ListItem().kind == "list_item"
        assert LineBreak().kind == "line_break"
        assert Code(content="x").kind == "code"

    def test_heading_level_validated(self):
        """Test that heading levels outside 1-6 are rejected."""
        with pytest.raises(ValueError):
            Heading(level=7)

    def test_get_node_children(self):
        """Test children lookup for block, inline and list nodes."""
        doc = sample_document()
        assert len(get_node_children(doc)) == 3
        assert get_node_children(doc.children[2]) == doc.children[2].items
        assert get_node_children(Text(content="leaf")) == []

    def test_extract_text(self):
        """Test plain-text extraction through formatting."""
        para = Paragraph(
            content=[Text(content="a"), LineBreak(), Strong(content=[Code(content="b")]), Image(url="i", content=[])]
        )
        assert extract_text(para) == "a b"

    def test_table_children(self):
        """Test that a table's header comes before its body rows."""
        header = TableRow(cells=[TableCell(content=[Text(content="h")])], is_header=True)
        row = TableRow(cells=[TableCell(content=[Text(content="1")])])
        table = Table(header=header, rows=[row], alignments=["right"])

        assert table.kind == "table"
        assert header.kind == "table_row"
        assert row.cells[0].kind == "table_cell"
        assert get_node_children(table) == [header, row]
        assert get_node_children(row) == row.cells
        assert get_node_children(Table(rows=[row])) == [row]
        assert extract_text(table) == "h1"


@pytest.mark.unit
class TestLinkTree:
    """Test parent and sibling links."""

    def test_parent_and_siblings(self):
        """Test that every node knows its parent and neighbours."""
        doc = link_tree(sample_document())
        heading, quote, lst = doc.children

        assert heading.parent is doc
        assert heading.prev is None
        assert quote.prev is heading
        assert quote.next is lst
        assert lst.next is None

        item = lst.items[0]
        para = item.children[0]
        assert [node.kind for node in iter_ancestors(para)] == ["list_item", "list", "document"]

    def test_shared_subtree_rejected(self):
        """Test that a node reachable twice is an error."""
        shared = Paragraph(content=[Text(content="x")])
        doc = Document(children=[shared, shared])
        with pytest.raises(ValueError, match="more than once"):
            link_tree(doc)


@pytest.mark.unit
class TestWalk:
    """Test enter/exit traversal."""

    def test_event_order(self):
        """Test depth-first order with exits after descendants."""
        doc = Document(children=[Paragraph(content=[Text(content="hi")])])
        events = [(node.kind, entering) for node, entering in walk(doc)]
        assert events == [
            ("document", True),
            ("paragraph", True),
            ("text", True),
            ("text", False),
            ("paragraph", False),
            ("document", False),
        ]

    def test_every_node_entered_and_exited_once(self):
        """Test that enter and exit events are balanced."""
        events = list(walk(sample_document()))
        entered = [id(node) for node, entering in events if entering]
        exited = [id(node) for node, entering in events if not entering]
        assert sorted(entered) == sorted(exited)
        assert len(set(entered)) == len(entered)

    def test_deep_tree(self):
        """Test that very deep nesting does not hit the recursion limit."""
        node = Paragraph(content=[Text(content="core")])
        for _ in range(5000):
            node = BlockQuote(children=[node])
        assert sum(1 for _ in walk(Document(children=[node]))) == 2 * 5003


@pytest.mark.unit
class TestVisitors:
    """Test the visitor base classes."""

    def test_event_visitor_dispatch(self):
        """Test that handlers receive events and unknown kinds are routed."""

        class Collector(EventVisitor):
            def __init__(self):
                self.seen = []
                self.unknown = []

            def enter_text(self, node):
                self.seen.append(node.content)

            def exit_link(self, node):
                self.seen.append(f"<{node.url}>")

            def enter_unknown(self, node):
                self.unknown.append(node.kind)

        visitor = Collector()
        doc = Document(children=[Paragraph(content=[Link(url="u", content=[Text(content="t")])])])
        visitor.traverse(doc)

        assert visitor.seen == ["t", "<u>"]
        # Neither enter_ nor exit_ exists for these kinds
        assert visitor.unknown == ["document", "paragraph"]

    def test_node_visitor_requires_every_visit_method(self):
        """Test that a NodeVisitor missing visit methods cannot be instantiated."""

        class HeadingLevels(NodeVisitor):
            def visit_heading(self, node):
                return node.level

        with pytest.raises(TypeError):
            HeadingLevels()
