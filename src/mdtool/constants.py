#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdtool library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Formatting - defaults for the canonical renderer
3. Vet Scanner - byte markers the structural scanner looks for
4. Configuration Files - names searched by the CLI
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

BulletChar = Literal["-", "+", "*"]
HrChar = Literal["-", "*", "_"]
HeadingStyle = Literal["atx", "setext"]

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_LINE_WIDTH = 70

# Any width at or below this value disables wrapping
UNLIMITED_WIDTH_THRESHOLD = 1
UNLIMITED_WIDTH = 1 << 23

DEFAULT_LIST_INDENT = "    "
DEFAULT_BULLET_CHAR: BulletChar = "-"
BULLET_CHARS: tuple[str, ...] = ("-", "+", "*")

DEFAULT_HR_CHAR: HrChar = "-"
HR_CHARS: tuple[str, ...] = ("-", "*", "_")
DEFAULT_HR_LENGTH = 3
MIN_HR_LENGTH = 3

DEFAULT_HEADING_STYLE: HeadingStyle = "atx"
HEADING_STYLES: tuple[str, ...] = ("atx", "setext")

CODE_FENCE = "```"

# Fences inside list items are indented in whole blocks of this width
CODE_FENCE_INDENT_UNIT = 4

BLOCK_QUOTE_PREFIX = "> "

HARD_BREAK_MARKUP = "  \n"

# Placeholder for a hard break while paragraph text is collected. NUL cannot
# survive in literal text: it is written as U+FFFD, as CommonMark requires.
HARD_BREAK_PLACEHOLDER = "\x00"
REPLACEMENT_CHARACTER = "\ufffd"

TABLE_MIN_COLUMN_WIDTH = 1

# =============================================================================
# Vet Scanner
# =============================================================================

FENCE_MARKER = b"```"
LINK_TEXT_OPEN = b"["
LINK_TEXT_CLOSE = b"]"
LINK_URL_OPEN = b"("
LINK_URL_CLOSE = b")"

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_ENV_VAR = "MDTOOL_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (".mdtool.toml", ".mdtool.yaml", ".mdtool.yml", ".mdtool.json")
PYPROJECT_SECTION = "mdtool"
