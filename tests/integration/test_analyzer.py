"""
Integration tests for the license log analyzer.

Tests the full workflow including:
- Log file loading and format checks
- Event extraction
- Derived tables
"""

import pytest

from rlm_log_analyzer.analyzer import LicenseLogAnalyzer, load_lines
from rlm_log_analyzer.detector import LogFormat
from rlm_log_analyzer.exceptions import (
    CannotOpenFileError,
    EventDataError,
    InvalidFormatError,
)


class TestLogFileProcessing:
    """Tests for processing log files."""

    def test_analyze_file(self, license_analyzer, temp_log_file):
        result = license_analyzer.analyze_file(str(temp_log_file))

        assert result.log_format is LogFormat.REPORT_LOG
        assert result.input_path == str(temp_log_file)
        assert result.server_name == "licsrv01"
        assert len(result.log.events) == 10

    def test_counters(self, license_analyzer, temp_log_file, sample_log_lines):
        license_analyzer.analyze_file(str(temp_log_file))
        assert license_analyzer.files_processed == 1
        assert license_analyzer.lines_processed == len(sample_log_lines)

    def test_missing_file(self, license_analyzer, tmp_path):
        missing = tmp_path / "missing.rlog"
        with pytest.raises(CannotOpenFileError) as exc_info:
            license_analyzer.analyze_file(str(missing))
        assert exc_info.value.path == str(missing)

    def test_no_file_selected(self):
        with pytest.raises(CannotOpenFileError, match="No file selected"):
            load_lines("")

    def test_undecodable_bytes_replaced(self, tmp_path, sample_log_lines):
        log_file = tmp_path / "latin.rlog"
        log_file.write_bytes(("\n".join(sample_log_lines) + "\n# caf\xe9\n").encode("latin-1"))
        lines = load_lines(str(log_file))
        assert lines[0].startswith("RLM Report Log Format")
        assert "\ufffd" in lines[-1]


class TestFormatRejection:
    """Inputs that are not report logs."""

    def test_isv_log(self, license_analyzer, isv_log_lines):
        with pytest.raises(InvalidFormatError) as exc_info:
            license_analyzer.analyze_lines(isv_log_lines)
        assert exc_info.value.detected is LogFormat.ISV_LOG

    def test_unrecognized(self, license_analyzer):
        with pytest.raises(InvalidFormatError) as exc_info:
            license_analyzer.analyze_content("hello\nworld\n")
        assert exc_info.value.detected is LogFormat.INVALID

    def test_empty(self, license_analyzer):
        with pytest.raises(InvalidFormatError):
            license_analyzer.analyze_lines([])

    def test_short_event_aborts(self, license_analyzer, rlog):
        content = "\n".join([rlog.header, "OUT imarisbase 9.5 1 alice"])
        with pytest.raises(EventDataError) as exc_info:
            license_analyzer.analyze_content(content)
        assert exc_info.value.row == 2


class TestDerivedTables:
    """Tables built from one run."""

    def test_registries(self, license_analyzer, sample_log_lines):
        result = license_analyzer.analyze_lines(sample_log_lines)
        assert result.log.products.names == ["imarisbase", "filamenttracer"]
        assert result.log.users.names == ["alice", "bob", "carol"]
        assert result.log.hosts.names == ["ws-01", "ws-02", "ws-03"]

    def test_tables(self, license_analyzer, sample_log_lines):
        result = license_analyzer.analyze_lines(sample_log_lines)
        assert len(result.concurrency.snapshots) == 6
        assert len(result.durations_by_user.records) == 3
        assert result.durations_by_user.records == result.durations_by_host.records
        assert len(result.denials) == 1

    def test_content_matches_lines(self, license_analyzer, sample_log_lines):
        from_lines = license_analyzer.analyze_lines(sample_log_lines)
        from_content = license_analyzer.analyze_content("\n".join(sample_log_lines))
        assert from_lines.log.events == from_content.log.events

    def test_log_without_start(self, rlog):
        """Events before any START or date line use the configured year."""
        from rlm_log_analyzer.config import AnalyzerConfig

        analyzer = LicenseLogAnalyzer(AnalyzerConfig(default_year=2021))
        result = analyzer.analyze_lines([
            rlog.header,
            rlog.out("imarisbase", "alice", "ws-01", 1, "h1", "02/03", "09:00:00"),
        ])
        assert result.server_name == ""
        assert result.log.events[0].date == "02/03/2021"
        assert result.durations_by_user.records[0].still_checked_out
