#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/api.py
"""Public API for parsing, formatting and vetting Markdown.

Functions
---------
to_ast : Parse Markdown into a node tree
from_ast : Render a node tree as canonical Markdown
format_markdown : Parse and render in one step
vet : Scan raw Markdown for structural defects

"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, TypeVar, Union

from mdtool.ast import Document
from mdtool.exceptions import ValidationError
from mdtool.options.base import CloneFrozenMixin
from mdtool.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from mdtool.parsers.markdown import MarkdownParser
from mdtool.renderers.markdown import MarkdownRenderer
from mdtool.utils.io_utils import MarkdownSource
from mdtool.vet.scanner import vet

logger = logging.getLogger(__name__)

_OptionsT = TypeVar("_OptionsT", bound=CloneFrozenMixin)


def _apply_option_overrides(
    options: Optional[_OptionsT], options_class: type[_OptionsT], overrides: dict[str, Any]
) -> _OptionsT:
    """Merge keyword overrides into an options instance.

    Parameters
    ----------
    options : options instance or None
        Base options; defaults are used when None
    options_class : type
        Options dataclass the overrides belong to
    overrides : dict
        Field name to value

    Returns
    -------
    options instance
        ``options`` with the overrides applied

    Raises
    ------
    ValidationError
        If an override does not name a field of ``options_class``

    """
    base = options if options is not None else options_class()
    if not overrides:
        return base

    known = {f.name for f in fields(options_class)}  # type: ignore[arg-type]
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValidationError(
            f"Unknown {options_class.__name__} option(s): {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=overrides[unknown[0]],
        )
    return base.create_updated(**overrides)


def to_ast(source: MarkdownSource, *, parser_options: Optional[MarkdownParserOptions] = None, **kwargs: Any) -> Document:
    """Parse Markdown into a node tree.

    Parameters
    ----------
    source : str, bytes, Path, or file-like
        Markdown input. A ``str`` is Markdown text; pass a ``Path`` to read a
        file.
    parser_options : MarkdownParserOptions, optional
        Parser options
    kwargs : Any
        Individual parser options overriding ``parser_options``

    Returns
    -------
    Document
        Root of the node tree

    Raises
    ------
    DependencyError
        If mistune is not installed
    ParsingError
        If parsing fails

    Examples
    --------
        >>> doc = to_ast("# Title\\n\\nBody text")
        >>> [child.kind for child in doc.children]
        ['heading', 'paragraph']

    """
    options = _apply_option_overrides(parser_options, MarkdownParserOptions, kwargs)
    return MarkdownParser(options).parse(source)


def from_ast(
    document: Document,
    *,
    renderer_options: Optional[MarkdownRendererOptions] = None,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Render a node tree as canonical Markdown.

    Parameters
    ----------
    document : Document
        Root of the tree
    renderer_options : MarkdownRendererOptions, optional
        Formatting options
    output : str, Path, IO[bytes], IO[str], or None
        Where to write the result. When None the Markdown is returned.
    kwargs : Any
        Individual formatting options overriding ``renderer_options``

    Returns
    -------
    str or None
        The Markdown text when ``output`` is None

    """
    options = _apply_option_overrides(renderer_options, MarkdownRendererOptions, kwargs)
    renderer = MarkdownRenderer(options)
    if output is None:
        return renderer.render_to_string(document)
    renderer.render(document, output)
    return None


def format_markdown(
    source: MarkdownSource,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[MarkdownRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Reformat Markdown into canonical form.

    Parameters
    ----------
    source : str, bytes, Path, or file-like
        Markdown input
    parser_options : MarkdownParserOptions, optional
        Parser options
    renderer_options : MarkdownRendererOptions, optional
        Formatting options
    kwargs : Any
        Individual formatting options (``line_width``, ``bullet_char``...)
        overriding ``renderer_options``

    Returns
    -------
    str
        Canonical Markdown

    Examples
    --------
        >>> format_markdown("* one\\n* two\\n")
        '- one\\n- two\\n'
        >>> format_markdown("1. a\\n1. b\\n", bullet_char="*")
        '1. a\\n2. b\\n'

    """
    options = _apply_option_overrides(renderer_options, MarkdownRendererOptions, kwargs)
    document = to_ast(source, parser_options=parser_options)
    return MarkdownRenderer(options).render_to_string(document)


__all__ = ["format_markdown", "from_ast", "to_ast", "vet"]
