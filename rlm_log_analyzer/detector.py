"""
Log format detection.

Only RLM report logs carry the data needed for usage reports. The ISV debug
log has a recognizable line shape and is rejected explicitly instead of
being parsed as something it is not.
"""

from enum import Enum
from typing import Sequence

from .config import FORMAT_SCAN_LINES
from .exceptions import InvalidFormatError
from .logging_config import get_logger
from .patterns import ISV_LINE_PATTERN, REPORT_LOG_MARKER, RLM_DEBUG_TAG

logger = get_logger(__name__)


class LogFormat(Enum):
    INVALID = "invalid"
    REPORT_LOG = "report_log"
    ISV_LOG = "isv_log"


def is_isv_line(line: str) -> bool:
    """True for lines shaped like `MM/DD HH:MM (tag)` with a tag other than rlm."""
    for match in ISV_LINE_PATTERN.finditer(line):
        if match.group(1) != RLM_DEBUG_TAG:
            return True
    return False


def classify_format(lines: Sequence[str], scan_lines: int = FORMAT_SCAN_LINES) -> LogFormat:
    """Classify a log from its first lines without raising."""
    for line in lines[:scan_lines]:
        if REPORT_LOG_MARKER in line:
            return LogFormat.REPORT_LOG
        if is_isv_line(line):
            return LogFormat.ISV_LOG
    return LogFormat.INVALID


def detect_format(lines: Sequence[str], scan_lines: int = FORMAT_SCAN_LINES) -> LogFormat:
    """Return LogFormat.REPORT_LOG or raise.

    Raises:
        InvalidFormatError: For ISV logs and for files without any marker.
    """
    log_format = classify_format(lines, scan_lines)
    if log_format is not LogFormat.REPORT_LOG:
        logger.debug("Rejected log format: %s", log_format.value)
        raise InvalidFormatError(log_format)
    return log_format
