#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by mdtool.

Exception Hierarchy
-------------------
- MdToolError

  - ValidationError: an option or argument has an unusable value
    - InvalidOptionsError: a parser or renderer got the wrong options class

  - FileError: an input could not be read or an output written
    - FileNotFoundError: an input path does not exist

  - ParsingError: mistune failed on the input

  - RenderingError: the renderer failed, or its walk went out of balance

  - DependencyError: a required package is missing or too old

Vet faults are not exceptions: :func:`mdtool.vet.vet` returns them as data.

"""

from typing import Any


class MdToolError(Exception):
    """Root of the mdtool exception tree.

    Parameters
    ----------
    message : str
        What went wrong
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdToolError):
    """An option or argument was given a value mdtool cannot use.

    Examples are a bullet character outside ``-``, ``+`` and ``*``, an
    ``hr_length`` below 3, or a keyword override that names no option.

    Parameters
    ----------
    message : str
        What is wrong with the value
    parameter_name : str, optional
        Option or argument name
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A parser or renderer was constructed with the wrong options class.

    Parameters
    ----------
    component_name : str
        Parser or renderer name, e.g. ``"markdown"``
    expected_type : type
        Options class the component accepts
    received_type : type
        Class of the options actually passed

    """

    def __init__(self, component_name: str, expected_type: type, received_type: type):
        message = (
            f"The {component_name} component takes {expected_type.__name__}, "
            f"not {received_type.__name__}."
        )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MdToolError):
    """An input could not be read or an output could not be written.

    Parameters
    ----------
    message : str
        What went wrong
    file_path : str, optional
        The path involved
    original_error : Exception, optional
        The underlying OSError, if any

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """An input path does not exist."""

    def __init__(self, file_path: str):
        super().__init__(f"File not found: {file_path}", file_path=file_path)


class ParsingError(MdToolError):
    """mistune raised while tokenizing the input.

    Parameters
    ----------
    message : str
        What went wrong
    parsing_stage : str, optional
        Where it happened, e.g. ``"tokenize"``
    original_error : Exception, optional
        The exception raised by mistune

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MdToolError):
    """The renderer could not produce output.

    Also raised when the render walk breaks its own bookkeeping: popping
    the root frame, frames left open when the walk ends, or list nesting
    dropping below zero. Rendering stops rather than emit wrong Markdown.

    Parameters
    ----------
    message : str
        What went wrong
    rendering_stage : str, optional
        Where it happened, e.g. ``"pop"`` or ``"finish"``
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(MdToolError):
    """A package needed by a component is missing or too old.

    Parameters
    ----------
    component_name : str
        Component that needs the packages, e.g. ``"markdown"``
    missing_packages : list[tuple[str, str]]
        ``(distribution, version_spec)`` pairs that could not be imported
    version_mismatches : list[tuple[str, str, str]], optional
        ``(distribution, required, installed)`` triples
    message : str, optional
        Replaces the generated message, which lists every problem and a
        ``pip install`` line
    original_import_error : ImportError, optional
        First import failure seen

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        version_mismatches = version_mismatches or []
        if message is None:
            message = self._describe(component_name, missing_packages, version_mismatches)

        super().__init__(message, original_error=original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error

    @staticmethod
    def _describe(
        component_name: str, missing: list[tuple[str, str]], mismatches: list[tuple[str, str, str]]
    ) -> str:
        lines = []
        if missing:
            names = ", ".join(f"'{name}{spec}'" for name, spec in missing)
            lines.append(f"{component_name} needs {names}")
        for name, required, installed in mismatches:
            lines.append(f"{component_name} needs '{name}{required}' but {installed} is installed")

        requirements = [f"{name}{spec}" for name, spec in missing] + [f"{name}{req}" for name, req, _ in mismatches]
        if requirements:
            lines.append("Install with: pip install --upgrade " + " ".join(f'"{req}"' for req in requirements))
        return "\n".join(lines)
