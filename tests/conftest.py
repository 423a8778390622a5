"""
Pytest configuration and shared fixtures for RLM report log tests.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# =============================================================================
# LINE BUILDERS
# =============================================================================

class RlogLines:
    """Builds report log lines with the RLM column layout."""

    header = "RLM Report Log Format 2.0, version 14.1 BL2, hostid 0a1b2c3d"

    @staticmethod
    def start(server, date, time):
        return f"START {server} {date} {time}"

    @staticmethod
    def shutdown(date, time, user="admin", host="licsrv01"):
        return f"SHUTDOWN {user} {host} {date} {time}"

    @staticmethod
    def product(product, count, reserved, version="9.5"):
        return f'PRODUCT {product} {version} 1 {count} {reserved} 0 ANY "" "" "" 0 ""'

    @staticmethod
    def out(product, user, host, count, handle, date, time, reserved=0, version="9.5"):
        return (
            f'OUT {product} {version} 1 {user} {host} "" 1 {count} {reserved} '
            f'{handle} {handle} 410 "" "" "" {date} {time}'
        )

    @staticmethod
    def checkin(product, user, host, count, handle, date, time, reserved=0, version="9.5"):
        return (
            f'IN 1 {product} {version} {user} {host} "" 1 {count} {reserved} '
            f"{handle} {date} {time}"
        )

    @staticmethod
    def deny(product, user, host, reason, date, time, version="9.5"):
        return f'DENY {product} {version} {user} {host} "" 1 {reason} 1 "" {date} {time}'


@pytest.fixture
def rlog():
    """Report log line builder."""
    return RlogLines


# =============================================================================
# SAMPLE LOG DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_log_lines():
    """A short server session: three checkouts, one denial, a shutdown.

    Expected pairings:
        alice/imarisbase      09:00:00 -> IN 10:00:00        (01:00:00)
        bob/imarisbase        09:30:00 -> SHUTDOWN 18:00:00  (08:30:00)
        alice/filamenttracer  09:45:00 -> IN 11:45:30        (02:00:30)
    """
    return [
        RlogLines.header,
        RlogLines.start("licsrv01", "06/16/2023", "08:00:00"),
        RlogLines.product("imarisbase", 10, 2),
        RlogLines.product("filamenttracer", 5, 0),
        RlogLines.out("imarisbase", "alice", "ws-01", 1, "26e", "06/16", "09:00:00"),
        RlogLines.out("imarisbase", "bob", "ws-02", 2, "27a", "06/16", "09:30:00", reserved=1),
        RlogLines.out("filamenttracer", "alice", "ws-01", 1, "27b", "06/16", "09:45:00"),
        RlogLines.checkin("imarisbase", "alice", "ws-01", 1, "26e", "06/16", "10:00:00", reserved=1),
        RlogLines.deny("imarisbase", "carol", "ws-03", -22, "06/16", "10:15"),
        RlogLines.checkin("filamenttracer", "alice", "ws-01", 0, "27b", "06/16", "11:45:30"),
        RlogLines.shutdown("06/16", "18:00:00"),
    ]


@pytest.fixture
def rollover_log_lines():
    """Checkouts spanning midnight on New Year's Eve."""
    return [
        RlogLines.header,
        RlogLines.start("licsrv01", "12/31/2023", "23:00:00"),
        RlogLines.out("imarisbase", "alice", "ws-01", 1, "a1", "12/31", "23:59:00"),
        RlogLines.out("imarisbase", "bob", "ws-02", 2, "a2", "01/01", "00:00:10"),
        RlogLines.checkin("imarisbase", "alice", "ws-01", 1, "a1", "01/01", "00:00:40"),
        "01/01/2024 00:01",
        RlogLines.checkin("imarisbase", "bob", "ws-02", 0, "a2", "01/01", "00:30:00"),
    ]


@pytest.fixture
def isv_log_lines():
    """Lines from an ISV debug log, which is not supported."""
    return [
        "03/14 09:00 (isv) Server started on licsrv01",
        "03/14 09:00 (isv) License server started",
        "03/14 09:05 (isv) OUT: imarisbase v9.5 by alice@ws-01",
    ]


# =============================================================================
# ANALYZER FIXTURES
# =============================================================================

@pytest.fixture
def config():
    """Configuration with a fixed fallback year."""
    from rlm_log_analyzer.config import AnalyzerConfig
    return AnalyzerConfig(default_year=2023)


@pytest.fixture
def license_analyzer(config):
    """Create a LicenseLogAnalyzer instance for testing."""
    from rlm_log_analyzer.analyzer import LicenseLogAnalyzer
    return LicenseLogAnalyzer(config)


@pytest.fixture
def sample_log(sample_log_lines, config):
    """Extracted events of the sample log."""
    from rlm_log_analyzer.extractor import extract_events
    from rlm_log_analyzer.tokenizer import tokenize_lines
    return extract_events(tokenize_lines(sample_log_lines), config)


# =============================================================================
# TEMPORARY FILE FIXTURES
# =============================================================================

@pytest.fixture
def temp_log_file(tmp_path, sample_log_lines):
    """Create a temporary report log file for testing."""
    log_file = tmp_path / "imaris.rlog"
    log_file.write_text("\n".join(sample_log_lines) + "\n")
    return log_file


@pytest.fixture
def output_dir(tmp_path):
    """Empty directory for reports."""
    out = tmp_path / "reports"
    out.mkdir()
    return out
