#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options dataclasses for parsing and formatting."""

from mdtool.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdtool.options.markdown import MarkdownParserOptions, MarkdownRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
]
