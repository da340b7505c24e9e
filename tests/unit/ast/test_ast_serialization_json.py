#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for AST JSON serialization."""

import json

import pytest

from mdtool.ast import (
    CodeBlock,
    Document,
    Heading,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
)


def sample_document() -> Document:
    return Document(
        children=[
            Heading(level=2, content=[Text(content="Intro")]),
            CodeBlock(content="x = 1\n", language="python", metadata={"info_attrs": "title=a.py"}),
            List(
                ordered=True,
                start=3,
                tight=False,
                items=[ListItem(children=[Paragraph(content=[Link(url="u", title="T", content=[Text(content="l")])])])],
            ),
        ],
        metadata={"front_matter": "title: x\n"},
    )


@pytest.mark.unit
class TestAstSerialization:
    """Test conversion between nodes, dictionaries and JSON."""

    def test_text_to_dict(self):
        """Test the dictionary form of a leaf node."""
        assert ast_to_dict(Text(content="Hello")) == {"node_type": "Text", "content": "Hello", "metadata": {}}

    def test_json_carries_schema_version(self):
        """Test that the JSON envelope names its schema version."""
        data = json.loads(ast_to_json(Document()))
        assert data["schema_version"] == 1
        assert data["node_type"] == "Document"

    def test_round_trip_preserves_fields(self):
        """Test that a JSON round trip keeps structure, attributes and metadata."""
        original = sample_document()
        restored = json_to_ast(ast_to_json(original, indent=2))

        assert ast_to_dict(restored) == ast_to_dict(original)
        code = restored.children[1]
        assert isinstance(code, CodeBlock)
        assert code.metadata["info_attrs"] == "title=a.py"
        assert restored.children[2].start == 3
        assert restored.children[2].tight is False

    def test_table_round_trip(self):
        """Test that tables keep their header, rows and alignments."""
        table = Table(
            header=TableRow(cells=[TableCell(content=[Text(content="h")], alignment="center")], is_header=True),
            rows=[TableRow(cells=[TableCell(content=[Text(content="1")], alignment="center")])],
            alignments=["center"],
        )
        restored = json_to_ast(ast_to_json(table))

        assert isinstance(restored, Table)
        assert restored.header.is_header is True
        assert restored.alignments == ["center"]
        assert restored.rows[0].cells[0].alignment == "center"
        assert ast_to_dict(restored) == ast_to_dict(table)

    def test_headerless_table_round_trip(self):
        """Test that a table without a header row stays without one."""
        table = Table(rows=[TableRow(cells=[TableCell()])])
        data = ast_to_dict(table)

        assert data["header"] is None
        assert dict_to_ast(data).header is None

    def test_unicode_not_escaped(self):
        """Test that non-ASCII text is written as-is."""
        assert "Café" in ast_to_json(Text(content="Café"))

    def test_missing_node_type(self):
        """Test that a dictionary without a node type is rejected."""
        with pytest.raises(ValueError, match="node_type"):
            dict_to_ast({"content": "x"})

    def test_unknown_node_type(self):
        """Test that an unknown node type is rejected."""
        with pytest.raises(ValueError, match="Unknown node type"):
            dict_to_ast({"node_type": "Table"})

    def test_unsupported_schema_version(self):
        """Test that a newer schema version is refused."""
        with pytest.raises(ValueError, match="schema version"):
            json_to_ast('{"schema_version": 99, "node_type": "Document"}')

    def test_foreign_node_rejected(self):
        """Test that a node class unknown to the serializer is an error."""

        class Widget(Node):
            def accept(self, visitor):
                return visitor.generic_visit(self)

        with pytest.raises(ValueError, match="Widget"):
            ast_to_dict(Document(children=[Widget()]))
