#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/parsers/__init__.py
"""Parsers that turn Markdown text into the mdtool node tree."""

from mdtool.parsers.base import BaseParser
from mdtool.parsers.markdown import MarkdownParser, markdown_to_ast

__all__ = ["BaseParser", "MarkdownParser", "markdown_to_ast"]
