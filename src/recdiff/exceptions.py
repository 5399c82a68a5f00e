#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the recdiff library.

This module defines the exception classes raised at the few boundaries of
the comparison engine that can fail. The comparison functions themselves
are total over strings and element trees; only option validation, file
reading, XML parsing and optional-dependency checks raise.

Exception Hierarchy
-------------------
- RecdiffError (base exception)

  - ValidationError (parameter/option validation)
    - SelectorError (unparseable record selector)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)

  - ParsingError (input parsing failures)
    - XmlParseError (malformed XML document)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class RecdiffError(Exception):
    """Base exception class for all recdiff-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(RecdiffError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class SelectorError(ValidationError):
    """Exception raised when a record selector cannot be parsed.

    Parameters
    ----------
    selector : str
        The selector text that failed to parse
    message : str, optional
        Custom error message. If not provided, a default message is used

    """

    def __init__(self, selector: str, message: str | None = None):
        """Initialize the selector error."""
        if message is None:
            message = f"Invalid record selector: {selector!r}"
        super().__init__(message, parameter_name="record_selector", parameter_value=selector)
        self.selector = selector


class FileError(RecdiffError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(RecdiffError):
    """Exception raised when input parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class XmlParseError(ParsingError):
    """Exception raised when an XML document is malformed.

    The message is the parser diagnostic with runs of whitespace collapsed
    to single spaces.
    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the XML parse error."""
        super().__init__(message, parsing_stage="xml_parsing", original_error=original_error)


def _requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


class DependencyError(RecdiffError):
    """Exception raised when an optional dependency is missing or too old.

    Unless ``message`` is given, the message lists the missing packages and
    version mismatches of ``feature_name`` and ends with an install hint,
    e.g.::

        xml-records requires: defusedxml>=0.7.0
        Install with: pip install --upgrade "defusedxml>=0.7.0"

    Parameters
    ----------
    feature_name : str
        Feature that needs the packages (e.g. ``"xml-records"``)
    missing_packages : list[tuple[str, str]]
        ``(install_name, version_spec)`` of packages that failed to import
    version_mismatches : list[tuple[str, str, str]], optional
        ``(install_name, required_spec, installed_version)`` of packages
        that are installed but do not satisfy the required version
    install_command : str, optional
        Install hint to use instead of the generated ``pip`` command
    message : str, optional
        Complete message, replacing the generated one
    original_import_error : ImportError, optional
        The first ImportError encountered

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error and build its message."""
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches or []
        self.install_command = install_command
        self.original_import_error = original_import_error
        super().__init__(message or self._describe(), original_error=original_import_error)

    def _describe(self) -> str:
        lines = []
        if self.missing_packages:
            names = ", ".join(_requirement(name, spec) for name, spec in self.missing_packages)
            lines.append(f"{self.feature_name} requires: {names}")
        for name, required, installed in self.version_mismatches:
            lines.append(
                f"{self.feature_name} has version mismatches: {name} {installed} installed, {required} required"
            )

        requirements = [_requirement(name, spec) for name, spec in self.missing_packages]
        requirements += [_requirement(name, required) for name, required, _ in self.version_mismatches]
        hint = self.install_command
        if not hint and requirements:
            hint = "pip install --upgrade " + " ".join(f'"{req}"' for req in requirements)
        if hint:
            lines.append(f"Install with: {hint}")
        return "\n".join(lines)
