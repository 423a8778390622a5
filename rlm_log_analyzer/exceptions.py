"""
Custom exceptions for RLM report log analysis.

This module defines a hierarchy of exceptions for handling errors
specific to report log detection, event extraction and report output.
Every error is fatal for a run: the downstream tables assume a fully
consistent event sequence, so nothing is reported from a failed analysis.
"""

from typing import Optional


class LicenseLogError(Exception):
    """Base exception for all license log analysis errors."""

    pass


class InvalidFormatError(LicenseLogError):
    """Raised when the input is not an RLM report log.

    Attributes:
        detected: The format the detector classified the file as.
    """

    MESSAGE = (
        "Log file format invalid. Only RLM report formatted logs are supported. "
        "ISV logs are not supported"
    )

    def __init__(self, detected=None, message: Optional[str] = None) -> None:
        self.detected = detected
        super().__init__(message or self.MESSAGE)


class EventDataError(LicenseLogError):
    """Raised when an event row has fewer fields than its schema needs.

    Attributes:
        row: 1-based line number of the offending row.
    """

    def __init__(self, row: int, message: Optional[str] = None) -> None:
        self.row = row
        super().__init__(message or f"Missing data on line {row}")


class InvalidIndexError(LicenseLogError):
    """Raised when a name was never registered in an identity registry.

    This signals an internal inconsistency, not bad user data.

    Attributes:
        name: The name that was looked up.
        category: Registry category (product, user or host).
    """

    def __init__(self, name: str, category: Optional[str] = None) -> None:
        self.name = name
        self.category = category
        super().__init__(f"No index to '{name}'")

    def __str__(self) -> str:
        base = super().__str__()
        if self.category:
            return f"{base} (registry: {self.category})"
        return base


class InvalidProductVersionError(LicenseLogError):
    """Raised when a legacy product version lacks its "v" prefix.

    Attributes:
        row: 1-based line number of the offending row.
    """

    def __init__(self, row: int) -> None:
        self.row = row
        super().__init__(f"Invalid product version formatting on line {row}")


class CannotOpenFileError(LicenseLogError):
    """Raised when an input or report file cannot be opened.

    Attributes:
        path: The offending path (empty when nothing was selected).
    """

    def __init__(self, path: str = "") -> None:
        self.path = path
        if not path:
            message = "No file selected"
        else:
            message = f"Unable to open file: {path}"
        super().__init__(message)


class CannotFindDirError(LicenseLogError):
    """Raised when the output directory does not exist.

    Attributes:
        path: The offending path (empty when nothing was selected).
    """

    def __init__(self, path: str = "") -> None:
        self.path = path
        if not path:
            message = "No directory selected"
        else:
            message = f"Unable to open directory: {path}"
        super().__init__(message)


class ConfigurationError(LicenseLogError):
    """Raised for configuration-related errors."""

    pass
