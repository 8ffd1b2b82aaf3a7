"""
Exception classes for the results builder.

Centralized location for all custom exceptions to avoid circular imports.
"""

from pathlib import Path


class ResultsBuilderError(Exception):
    """Base exception for all results builder errors."""
    pass


class ValidationError(ResultsBuilderError):
    """Base exception for validation-related errors."""
    pass


class ConfigurationError(ResultsBuilderError):
    """Base exception for configuration-related errors."""
    pass


class MalformedFileNameError(ValidationError):
    """Raised when a result or logo file name does not follow the naming grammar."""

    def __init__(self, file_name: str, reason: str):
        self.file_name: str = file_name
        self.reason: str = reason
        super().__init__(f"Malformed file name {file_name!r}: {reason}")


class ImageDecodeError(ResultsBuilderError):
    """Raised when a logo asset cannot be decoded or rasterized."""

    def __init__(self, path: Path | str, reason: str):
        self.path: Path = Path(path)
        self.reason: str = reason
        super().__init__(f"Could not decode logo {self.path}: {reason}")


class HistoryLookupFailure(ResultsBuilderError):
    """Raised when version-control history has no usable date for a path.

    Always recoverable: callers fall back to the current time.
    """

    def __init__(self, path: Path | str, reason: str):
        self.path: Path = Path(path)
        self.reason: str = reason
        super().__init__(f"No history for {self.path}: {reason}")


class InterpreterError(ValidationError):
    """Raised when a result file does not contain valid result data."""
    pass
