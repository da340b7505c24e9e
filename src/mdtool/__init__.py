"""mdtool - canonical formatting and structural vetting for Markdown.

mdtool re-renders Markdown into one canonical form (``fmt``) and scans raw
Markdown bytes for structural defects that a lenient parser would silently
misread (``vet``).

Key Features
------------
- Canonical formatter: ATX headings, uniform bullets, sequential ordered
  lists, fenced code blocks and paragraphs wrapped at a fixed width
- Idempotent output: formatting formatted text changes nothing
- Byte-level vet scanner for runaway code fences and malformed links
- Node tree with JSON serialization for inspection and tooling

Requirements
------------
- Python 3.10+
- mistune 3.x for parsing

Examples
--------
    >>> from mdtool import format_markdown, vet
    >>> format_markdown("Title\\n=====\\n\\n* a\\n* b\\n")
    '# Title\\n\\n- a\\n- b\\n'
    >>> [str(fault.reason) for fault in vet("[text] (http://x/)")]
    ['Whitespace between Link Text and Link URL']

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdtool requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdtool.api import format_markdown, from_ast, to_ast  # noqa: E402
from mdtool.ast import Document  # noqa: E402
from mdtool.exceptions import (  # noqa: E402
    DependencyError,
    FileError,
    MdToolError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdtool.options import MarkdownParserOptions, MarkdownRendererOptions  # noqa: E402
from mdtool.vet import Fault, FaultType, vet  # noqa: E402

__all__ = [
    "__version__",
    "DependencyError",
    "Document",
    "Fault",
    "FaultType",
    "FileError",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "MdToolError",
    "ParsingError",
    "RenderingError",
    "ValidationError",
    "format_markdown",
    "from_ast",
    "to_ast",
    "vet",
]
