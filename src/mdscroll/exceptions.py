#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdscroll library.

This module defines the small set of exception classes raised by mdscroll.
Parsing and rendering never raise: malformed Markdown degrades to best-effort
output. Errors are limited to user input that cannot be honoured, such as an
invalid search pattern or a broken configuration file.

Exception Hierarchy
-------------------
- MdScrollError (base exception)

  - ValidationError (invalid parameter values, unknown theme slots, styles)

  - ConfigError (unreadable or malformed configuration files)

  - SearchError (search failures)
    - InvalidPatternError (regex that does not compile)

  - DocumentLoadError (input text could not be obtained)

"""


class MdScrollError(Exception):
    """Base exception class for all mdscroll-specific errors.

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


class ValidationError(MdScrollError):
    """Exception raised for invalid input parameters or options."""

    def __init__(self, message: str, parameter_name: str | None = None, original_error: Exception | None = None):
        """Initialize the validation error with the offending parameter name."""
        super().__init__(message, original_error)
        self.parameter_name = parameter_name


class ConfigError(MdScrollError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the configuration file that failed to load
    original_error : Exception, optional
        Underlying decode or I/O error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the config error with the failing path."""
        super().__init__(message, original_error)
        self.config_path = config_path


class SearchError(MdScrollError):
    """Base class for search failures."""

    pass


class InvalidPatternError(SearchError):
    """Exception raised when a regex search pattern does not compile.

    The existing match list and search mode of the pane are left untouched
    when this is raised.

    Parameters
    ----------
    pattern : str
        The pattern text as entered by the user
    original_error : Exception, optional
        The ``re.error`` raised by the compiler

    """

    def __init__(self, pattern: str, original_error: Exception | None = None):
        """Initialize the error with the rejected pattern."""
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"Invalid regex '{pattern}'{detail}", original_error)
        self.pattern = pattern


class DocumentLoadError(MdScrollError):
    """Exception raised when document text cannot be obtained from its source."""

    def __init__(self, message: str, source: str | None = None, original_error: Exception | None = None):
        """Initialize the load error with the source description."""
        super().__init__(message, original_error)
        self.source = source
