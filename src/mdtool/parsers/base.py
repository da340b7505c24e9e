#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/parsers/base.py
"""Base class for parsers that build the mdtool node tree.

The formatter and the ``ast`` command consume a :class:`~mdtool.ast.Document`;
any parser that produces one can feed the renderer.

"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mdtool.ast import Document
from mdtool.exceptions import InvalidOptionsError
from mdtool.options.base import BaseParserOptions
from mdtool.utils.io_utils import MarkdownSource


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
        >>> class EmptyParser(BaseParser):
        ...     def parse(self, input_data):
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: MarkdownSource) -> Document:
        """Parse the input document into a node tree.

        Parameters
        ----------
        input_data : str, bytes, Path, or file-like
            Document to parse. A ``str`` is document content.

        Returns
        -------
        Document
            Root of the parsed tree

        Raises
        ------
        ParsingError
            If the input cannot be parsed
        DependencyError
            If required dependencies are not installed

        """
        raise NotImplementedError
