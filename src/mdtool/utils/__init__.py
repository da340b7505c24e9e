#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/utils/__init__.py
"""Utility modules for the mdtool package.

This package contains word wrapping, input loading and output writing,
and the dependency-checking decorators used by parsers and renderers.
"""

from mdtool.utils.io_utils import read_source_bytes, read_source_text, write_content
from mdtool.utils.text import split_words, word_wrap

__all__ = [
    "read_source_bytes",
    "read_source_text",
    "split_words",
    "word_wrap",
    "write_content",
]
