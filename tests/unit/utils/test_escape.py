#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for Markdown escaping helpers."""

import pytest

from mdtool.utils.escape import (
    escape_closing_hashes,
    escape_line_start,
    escape_markdown_context_aware,
    escape_table_pipes,
)


@pytest.mark.unit
class TestEscapeMarkdownContextAware:
    """Test inline escaping of literal text."""

    def test_empty(self):
        """Test that empty text is returned as is."""
        assert escape_markdown_context_aware("") == ""

    def test_always_escaped(self):
        """Test characters escaped wherever they occur."""
        assert escape_markdown_context_aware("\\`*[]") == "\\\\\\`\\*\\[\\]"

    def test_pipe_only_in_tables(self):
        """Test that pipes are escaped only in table context."""
        assert escape_markdown_context_aware("a | b") == "a | b"
        assert escape_markdown_context_aware("a | b", "table") == "a \\| b"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("snake_case", "snake_case"),
            ("_x_", "\\_x\\_"),
            ("a _ b", "a \\_ b"),
            ("x_", "x\\_"),
            ("1_000", "1_000"),
        ],
    )
    def test_underscore(self, text, expected):
        """Test that underscores inside words are left alone."""
        assert escape_markdown_context_aware(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("<div>", "\\<div>"),
            ("</p>", "\\</p>"),
            ("<!-- c -->", "\\<!-- c -->"),
            ("<?php", "\\<?php"),
            ("a < b", "a < b"),
            ("<3", "<3"),
        ],
    )
    def test_angle_bracket(self, text, expected):
        """Test that ``<`` is escaped only where it could open a tag."""
        assert escape_markdown_context_aware(text) == expected

    def test_tilde_runs(self):
        """Test that only runs of tildes are escaped."""
        assert escape_markdown_context_aware("~a~") == "~a~"
        assert escape_markdown_context_aware("~~a~~") == "\\~\\~a\\~\\~"

    def test_entities_and_other_punctuation_untouched(self):
        """Test that characters without inline meaning pass through."""
        text = "AT&T &amp; 50% (ok) {x} ! # - + > ."
        assert escape_markdown_context_aware(text) == text


@pytest.mark.unit
class TestEscapeLineStart:
    """Test escaping of block markers at the start of a line."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("-", "\\-"),
            ("+", "\\+"),
            ("*", "\\*"),
            ("#", "\\#"),
            ("######", "\\######"),
            (">", "\\>"),
            (">>", "\\>>"),
            ("---", "\\---"),
            ("===", "\\==="),
            ("|", "\\|"),
            (":--", "\\:--"),
            ("1.", "1\\."),
            ("123456789)", "123456789\\)"),
        ],
    )
    def test_markers(self, word, expected):
        """Test that each kind of block marker is escaped."""
        assert escape_line_start(word) == expected

    @pytest.mark.parametrize(
        "word",
        ["", "word", "-word", "#tag", "#######", "1.5", "1234567890.", "a.", "\\-", "+1"],
    )
    def test_plain_words(self, word):
        """Test that words which cannot open a block are unchanged."""
        assert escape_line_start(word) == word


@pytest.mark.unit
class TestEscapeClosingHashes:
    """Test escaping of trailing hashes in ATX heading text."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Issue #", "Issue \\#"),
            ("##", "\\##"),
            ("C#", "C#"),
            ("a # b", "a # b"),
            ("", ""),
        ],
    )
    def test_closing_hashes(self, text, expected):
        """Test that only a separate trailing run of hashes is escaped."""
        assert escape_closing_hashes(text) == expected


@pytest.mark.unit
class TestEscapeTablePipes:
    """Test pipe escaping in table code spans."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("a|b", "a\\|b"),
            ("a\\|b", "a\\|b"),
            ("a\\\\|b", "a\\\\\\|b"),
            ("||", "\\|\\|"),
            ("plain", "plain"),
        ],
    )
    def test_pipes(self, code, expected):
        """Test that unescaped pipes gain a backslash and escaped ones do not."""
        assert escape_table_pipes(code) == expected
