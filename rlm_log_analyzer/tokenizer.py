"""
Field splitting for raw log lines.
"""

from typing import Iterable, List, Optional, Tuple

from .exceptions import InvalidProductVersionError

USER_HOST_SEPARATOR = "@"
VERSION_PREFIX = "v"


def tokenize(line: str, delimiter: Optional[str] = None) -> List[str]:
    """Split a line into fields.

    With no delimiter the line is split on runs of whitespace. With a
    delimiter the split is exact, so empty fields between adjacent
    delimiters are kept.
    """
    if delimiter is None:
        return line.split()
    if not line:
        return []
    return line.split(delimiter)


def tokenize_lines(lines: Iterable[str]) -> List[List[str]]:
    """Whitespace-split every line, preserving line order."""
    return [tokenize(line) for line in lines]


# Legacy cleanup helpers for logs that write user@host and vX.Y versions


def split_user_host(field: str) -> Tuple[str, str]:
    """Split `user@host` into its two parts; host is empty if absent."""
    parts = tokenize(field, USER_HOST_SEPARATOR)
    if len(parts) < 2:
        return field, ""
    return parts[0], USER_HOST_SEPARATOR.join(parts[1:])


def strip_version_prefix(version: str, row: int) -> str:
    """Drop the leading "v" of a legacy product version.

    Raises:
        InvalidProductVersionError: If the version does not start with "v".
    """
    if not version.startswith(VERSION_PREFIX):
        raise InvalidProductVersionError(row)
    return version[len(VERSION_PREFIX):]
