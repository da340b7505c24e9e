#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/utils/io_utils.py
"""I/O utilities for reading Markdown sources and writing formatted output.

A ``str`` source is always Markdown content, never a file name. Paths must
be passed as :class:`pathlib.Path` objects, which keeps ``format_markdown("x.md")``
from silently opening a file.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Any, Union, cast

from mdtool.exceptions import FileError
from mdtool.exceptions import FileNotFoundError as MdToolFileNotFoundError

MarkdownSource = Union[str, bytes, Path, IO[bytes], IO[str]]


def is_file_like(obj: Any) -> bool:
    """Check if an object is file-like (has a callable ``read``).

    Examples
    --------
    >>> is_file_like(BytesIO(b"data"))
    True
    >>> is_file_like("not_file_like")
    False

    """
    return hasattr(obj, "read") and callable(obj.read)


def read_source_bytes(source: MarkdownSource) -> bytes:
    """Read a Markdown source into raw bytes.

    Parameters
    ----------
    source : str, bytes, Path, or file-like
        ``str`` is encoded as UTF-8; ``Path`` is read from disk; file-like
        objects are read to the end and may be binary or text.

    Returns
    -------
    bytes
        Raw document content

    Raises
    ------
    FileNotFoundError
        If a Path does not exist
    FileError
        If a Path cannot be read
    TypeError
        If the source type is not supported

    """
    if isinstance(source, bytes):
        return source
    if isinstance(source, str):
        return source.encode("utf-8")
    if isinstance(source, Path):
        if not source.exists():
            raise MdToolFileNotFoundError(file_path=str(source))
        try:
            return source.read_bytes()
        except OSError as e:
            raise FileError(f"Could not read {source}: {e}", file_path=str(source), original_error=e) from e
    if is_file_like(source):
        data = source.read()
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
        raise TypeError(f"File-like object returned {type(data).__name__}, expected str or bytes")

    raise TypeError(f"Unsupported input type: {type(source).__name__}")


def read_source_text(source: MarkdownSource) -> str:
    """Read a Markdown source as text, decoding bytes as UTF-8.

    Undecodable bytes are replaced rather than rejected, so a stray Latin-1
    byte does not stop a document from being formatted.

    """
    if isinstance(source, str):
        return source
    return read_source_bytes(source).decode("utf-8", errors="replace")


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str], None]) -> Union[StringIO, None]:
    """Write text to an output destination or return it as a file-like object.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], IO[str], or None
        ``None`` returns a :class:`StringIO`; a ``str`` or ``Path`` is a file
        path written as UTF-8; binary streams receive UTF-8 bytes and text
        streams receive the string unchanged.

    Returns
    -------
    StringIO or None
        A StringIO when ``output`` is None, otherwise None

    Raises
    ------
    TypeError
        If the output type is not supported

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return None

    if hasattr(output, "write"):
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO):
            is_binary_mode = False
        elif isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["MarkdownSource", "is_file_like", "read_source_bytes", "read_source_text", "write_content"]
