#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and canonical formatting."""
# src/mdtool/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from mdtool.constants import (
    BULLET_CHARS,
    DEFAULT_BULLET_CHAR,
    DEFAULT_HEADING_STYLE,
    DEFAULT_HR_CHAR,
    DEFAULT_HR_LENGTH,
    DEFAULT_LINE_WIDTH,
    DEFAULT_LIST_INDENT,
    HEADING_STYLES,
    HR_CHARS,
    MIN_HR_LENGTH,
    UNLIMITED_WIDTH,
    UNLIMITED_WIDTH_THRESHOLD,
    BulletChar,
    HeadingStyle,
    HrChar,
)
from mdtool.exceptions import ValidationError
from mdtool.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Recognize ``~~text~~`` as strikethrough
    preserve_html : bool, default True
        Keep raw HTML blocks and inline HTML as verbatim nodes. When False
        they are dropped from the tree.
    parse_tables : bool, default True
        Recognize GFM pipe tables, including tables inside block quotes and
        list items. When False a table is read as paragraph text.

    """

    parse_strikethrough: bool = field(
        default=True,
        metadata={
            "help": "Parse ~~strikethrough~~ syntax",
            "cli_name": "no-parse-strikethrough",
            "importance": "core",
        },
    )
    preserve_html: bool = field(
        default=True,
        metadata={
            "help": "Keep raw HTML blocks and inline HTML verbatim",
            "cli_name": "no-preserve-html",
            "importance": "advanced",
        },
    )
    parse_tables: bool = field(
        default=True,
        metadata={
            "help": "Parse GFM pipe tables",
            "cli_name": "no-parse-tables",
            "importance": "core",
        },
    )


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Canonical Markdown formatting options.

    Parameters
    ----------
    line_width : int, default 70
        Column at which paragraphs are wrapped. Any value ``<= 1`` disables
        wrapping.
    list_indent : str, default four spaces
        Indent unit for nested lists and fenced code inside list items.
        Must be non-empty and consist of spaces only.
    bullet_char : {"-", "+", "*"}, default "-"
        Marker for unordered list items.
    hr_char : {"-", "*", "_"}, default "-"
        Character repeated to draw a horizontal rule.
    hr_length : int, default 3
        Number of ``hr_char`` repetitions, at least 3.
    heading_style : {"atx", "setext"}, default "atx"
        ``atx`` always emits ``#``-prefixed headings. ``setext`` underlines
        levels 1 and 2 with ``=`` and ``-``; deeper levels stay ATX.

    Raises
    ------
    ValidationError
        If any value is outside its allowed set or range.

    """

    line_width: int = field(
        default=DEFAULT_LINE_WIDTH,
        metadata={"help": "Wrap paragraphs at this column (<= 1 disables wrapping)", "importance": "core"},
    )
    list_indent: str = field(
        default=DEFAULT_LIST_INDENT,
        metadata={
            "help": "Indent unit for nested lists; on the command line, a number of spaces",
            "cli_type": "spaces",
            "importance": "core",
        },
    )
    bullet_char: BulletChar = field(
        default=DEFAULT_BULLET_CHAR,
        metadata={"help": "Bullet for unordered list items", "choices": list(BULLET_CHARS), "importance": "core"},
    )
    hr_char: HrChar = field(
        default=DEFAULT_HR_CHAR,
        metadata={"help": "Character used for horizontal rules", "choices": list(HR_CHARS), "importance": "advanced"},
    )
    hr_length: int = field(
        default=DEFAULT_HR_LENGTH,
        metadata={"help": "Length of horizontal rules", "importance": "advanced"},
    )
    heading_style: HeadingStyle = field(
        default=DEFAULT_HEADING_STYLE,
        metadata={
            "help": "Heading style; setext applies to levels 1-2 only",
            "choices": list(HEADING_STYLES),
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid set or range.

        """
        super().__post_init__()

        if isinstance(self.line_width, bool) or not isinstance(self.line_width, int):
            raise ValidationError(
                f"line_width must be an integer, got {self.line_width!r}",
                parameter_name="line_width",
                parameter_value=self.line_width,
            )
        if not self.list_indent or self.list_indent.strip(" "):
            raise ValidationError(
                f"list_indent must be one or more spaces, got {self.list_indent!r}",
                parameter_name="list_indent",
                parameter_value=self.list_indent,
            )
        if self.bullet_char not in BULLET_CHARS:
            raise ValidationError(
                f"Unsupported bullet character {self.bullet_char!r}; expected one of {', '.join(BULLET_CHARS)}",
                parameter_name="bullet_char",
                parameter_value=self.bullet_char,
            )
        if self.hr_char not in HR_CHARS:
            raise ValidationError(
                f"Unsupported horizontal rule character {self.hr_char!r}; expected one of {', '.join(HR_CHARS)}",
                parameter_name="hr_char",
                parameter_value=self.hr_char,
            )
        if self.hr_length < MIN_HR_LENGTH:
            raise ValidationError(
                f"hr_length must be at least {MIN_HR_LENGTH}, got {self.hr_length}",
                parameter_name="hr_length",
                parameter_value=self.hr_length,
            )
        if self.heading_style not in HEADING_STYLES:
            raise ValidationError(
                f"Unsupported heading style {self.heading_style!r}; expected one of {', '.join(HEADING_STYLES)}",
                parameter_name="heading_style",
                parameter_value=self.heading_style,
            )

    @property
    def effective_line_width(self) -> int:
        """Wrap width with the unlimited sentinel applied."""
        if self.line_width <= UNLIMITED_WIDTH_THRESHOLD:
            return UNLIMITED_WIDTH
        return self.line_width
