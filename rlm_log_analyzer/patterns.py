"""
Markers, regex patterns and column layouts of the RLM report log format.

The column offsets below are the positions of each field in a whitespace
split report log line. They follow the reportlog layout written by the RLM
license server and must not be changed.
"""

import re

# =============================================================================
# FORMAT DETECTION
# =============================================================================

# First line of every report log: RLM Report Log Format 2.0, version ...
REPORT_LOG_MARKER = "RLM Report Log Format"

# ISV debug log line: 03/14 09:00 (isv) ...
# The rlm server's own debug log has the same shape with the tag "(rlm)".
ISV_LINE_PATTERN = re.compile(r"\S+/\S+\s+\S+:\S+\s+\(([^()\s]+)\)")
RLM_DEBUG_TAG = "rlm"

# =============================================================================
# EVENT LAYOUT
# =============================================================================

# Column holding the event keyword on every event line
EVENT_KIND_COLUMN = 0

OUT = "OUT"
IN = "IN"
DENY = "DENY"
START = "START"
SHUTDOWN = "SHUTDOWN"
PRODUCT = "PRODUCT"

EVENT_KINDS = (OUT, IN, DENY, START, SHUTDOWN, PRODUCT)

# Per kind: ordered (record field, source column) assignments.
# The order is also the column order of the processed log output.
EVENT_SCHEMAS = {
    # OUT product version pool# user host "isv_def" count cur_use cur_resuse
    #     server_handle share_handle process_id "project" "requested product"
    #     "requested version" mm/dd hh:mm:ss
    OUT: (
        ("date", 16),
        ("time", 17),
        ("product", 1),
        ("version", 2),
        ("user", 4),
        ("host", 5),
        ("count", 8),
        ("handle", 10),
        ("reserved", 9),
    ),
    # IN why product version user host "isv_def" count cur_use cur_resuse
    #    server_handle mm/dd hh:mm:ss
    IN: (
        ("date", 11),
        ("time", 12),
        ("product", 2),
        ("version", 3),
        ("user", 4),
        ("host", 5),
        ("count", 8),
        ("handle", 10),
        ("reserved", 9),
    ),
    # Count and reason share column 7 in the observed layout.
    DENY: (
        ("date", 10),
        ("time", 11),
        ("product", 1),
        ("version", 2),
        ("user", 3),
        ("host", 4),
        ("count", 7),
        ("reason", 7),
    ),
    # START hostname mm/dd/yyyy hh:mm:ss
    START: (
        ("date", 2),
        ("time", 3),
        ("server", 1),
    ),
    # SHUTDOWN user host mm/dd hh:mm:ss
    SHUTDOWN: (
        ("date", 3),
        ("time", 4),
    ),
    # PRODUCT name version pool# count reserved ...
    PRODUCT: (
        ("product", 1),
        ("version", 2),
        ("count", 4),
        ("limit", 5),
    ),
}

# Kinds whose date lacks the year and gets stamped with the ambient year
YEAR_STAMPED_KINDS = frozenset((OUT, IN, DENY, SHUTDOWN))

# Kinds carrying a timestamp (candidates for the file end time)
TIMESTAMPED_KINDS = frozenset((OUT, IN, DENY, START, SHUTDOWN))

# Kinds registering product/user/host names
IDENTITY_KINDS = frozenset((OUT, IN, DENY))


def required_fields(kind: str) -> int:
    """Minimum number of fields a row of the given kind must have."""
    columns = [column for _, column in EVENT_SCHEMAS[kind]]
    return max(columns + [EVENT_KIND_COLUMN]) + 1


# =============================================================================
# DATES AND TIMES
# =============================================================================

DATE_SEPARATOR = "/"
TIME_SEPARATOR = ":"

# Events logged on this date at 00:00 can precede the new year's marker line
NEW_YEAR_DATE = "01/01"

# Number of fields of a bare date marker line: mm/dd/yyyy hh:mm
YEAR_MARKER_FIELDS = 2

YEAR_PATTERN = re.compile(r"\d{4}")

STILL_CHECKED_OUT = "(Still checked out)"
