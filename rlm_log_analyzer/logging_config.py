"""
Logging setup for the rlm_log_analyzer package.

Every module logs through a child of the "rlm_log_analyzer" logger. The
package logger owns a single handler and does not propagate, so progress
output looks the same whether the analyzer runs from the command line or
is imported by another tool.

    from rlm_log_analyzer.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Processing: %s", filename)

Timestamped output, as used by --structured-logs:

    configure_logging(level=logging.DEBUG, simple_mode=False)
"""

import logging
import sys
from typing import Dict, Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(message)s"

PACKAGE_LOGGER = "rlm_log_analyzer"

_loggers: Dict[str, logging.Logger] = {}
_configured: bool = False


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
    simple_mode: bool = True,
) -> None:
    """
    Install the package handler, replacing any previous one.

    Args:
        level: Package log level (default: INFO).
        format_string: Record format. Defaults to bare messages in simple
            mode and to DEFAULT_FORMAT otherwise.
        stream: Target stream (default: sys.stdout).
        simple_mode: Print messages without timestamps or level names.
    """
    global _configured

    if format_string is None:
        format_string = SIMPLE_FORMAT if simple_mode else DEFAULT_FORMAT

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(format_string))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, configuring the package on first use."""
    if not _configured:
        configure_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map the command line verbosity flags to a log level."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def set_level(level: int) -> None:
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def enable_debug() -> None:
    set_level(logging.DEBUG)


def enable_quiet() -> None:
    """Only warnings and errors."""
    set_level(logging.WARNING)
