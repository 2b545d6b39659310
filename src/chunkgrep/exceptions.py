#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the chunkgrep library.

This module defines specialized exception classes for the error conditions
that can occur while planning, scanning and aggregating a chunked search.
Every failure is fatal to a run: no partial results are ever surfaced.

Exception Hierarchy
-------------------
- ChunkGrepError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidPatternError (empty or malformed search term)
    - PlanningError (degenerate chunk planning inputs)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist or vanished mid-run)
    - FileAccessError (unreadable file, failed read or decode)

  - AggregationError (incomplete or inconsistent chunk results)

"""

from typing import Any


class ChunkGrepError(Exception):
    """Base exception class for all chunkgrep-specific errors.

    Catching this will catch every library-specific error.

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

    def __reduce__(self) -> tuple[Any, ...]:
        """Pickle by state so errors raised in pool workers survive the trip back."""
        return (_rebuild_error, (type(self), self.message, self.__dict__.copy()))


def _rebuild_error(cls: type[ChunkGrepError], message: str, state: dict[str, Any]) -> ChunkGrepError:
    error = cls.__new__(cls)
    Exception.__init__(error, message)
    error.__dict__.update(state)
    return error


class ValidationError(ChunkGrepError):
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


class InvalidPatternError(ValidationError):
    """Exception raised when a search term cannot be compiled.

    Raised before any scanning begins for empty terms, terms containing
    whitespace or control characters, and terms whose boundary expression
    fails to compile.

    Parameters
    ----------
    message : str
        Description of the problem
    term : str, optional
        The rejected search term
    original_error : Exception, optional
        The underlying ``re.error``, if any

    """

    def __init__(self, message: str, term: str | None = None, original_error: Exception | None = None):
        """Initialize the pattern error with the rejected term."""
        super().__init__(message, parameter_name="term", parameter_value=term, original_error=original_error)
        self.term = term


class PlanningError(ValidationError):
    """Exception raised for degenerate chunk planning inputs.

    Examples are a negative file length or a worker count below one.
    """


class FileError(ChunkGrepError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path details."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):  # noqa: A001
    """Exception raised when the input file does not exist.

    Also raised when the file disappears between planning and scanning.

    Parameters
    ----------
    file_path : str
        Path to the file that was not found
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when the input file cannot be read.

    Covers permission problems, read failures in the middle of a scan, paths
    that are not regular files, and decode failures under a strict error
    policy.

    Parameters
    ----------
    file_path : str
        Path to the file that cannot be read
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot read file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class AggregationError(ChunkGrepError):
    """Exception raised when chunk results cannot be merged.

    Global line numbers are only meaningful when every chunk ``0..N-1``
    reported exactly once, so a missing or duplicated chunk index is fatal.
    """
