#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/renderers/base.py
"""Base class for node tree renderers.

Renderers turn a :class:`~mdtool.ast.Document` back into text. They hold
only their options between calls; all per-document state is created inside
each render call.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdtool.ast import Document
from mdtool.exceptions import InvalidOptionsError
from mdtool.options.base import BaseRendererOptions
from mdtool.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the tree and write the result to ``output``.

        Parameters
        ----------
        doc : Document
            Document to render
        output : str, Path, IO[bytes], or IO[str]
            File path or file-like object

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass

    def render_to_string(self, doc: Document) -> str:
        """Render the tree to a string.

        Raises
        ------
        NotImplementedError
            If the renderer does not produce text

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write rendered text to a path or stream.

        Binary streams receive UTF-8 bytes; text streams receive the string.

        Examples
        --------
            >>> from io import BytesIO
            >>> buffer = BytesIO()
            >>> BaseRenderer.write_text_output("# Hello\\n", buffer)
            >>> buffer.getvalue()
            b'# Hello\\n'

        """
        write_content(text, output)
