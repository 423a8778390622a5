"""
Main LicenseLogAnalyzer class tying the pipeline together.

A run loads the whole log, checks its format, tokenizes and extracts the
events, then derives the concurrency table, checkout durations (by user and
by host) and denials from the finished event sequence. Any error aborts the
run.
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .concurrency import ConcurrencyReport, accumulate_concurrency
from .config import AnalyzerConfig
from .denials import DenialRecord, collect_denials
from .detector import LogFormat, detect_format
from .durations import CheckinIndex, DurationReport, reconcile_durations
from .exceptions import CannotOpenFileError
from .extractor import EventExtractor, ExtractedLog
from .logging_config import get_logger
from .tokenizer import tokenize_lines

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """All tables produced from one report log."""
    input_path: str
    log_format: LogFormat
    log: ExtractedLog
    concurrency: ConcurrencyReport
    durations_by_user: DurationReport
    durations_by_host: DurationReport
    denials: List[DenialRecord]

    @property
    def server_name(self) -> str:
        return self.log.server_name


def load_lines(path: str, encoding: str = "utf-8") -> List[str]:
    """Read a log file into a list of lines.

    Raises:
        CannotOpenFileError: If the path is empty or cannot be read.
    """
    if not path:
        raise CannotOpenFileError(path)
    try:
        with open(path, encoding=encoding, errors="replace") as f:
            return f.read().splitlines()
    except OSError:
        raise CannotOpenFileError(path) from None


class LicenseLogAnalyzer:
    """Analyzer for RLM report logs."""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = (config or AnalyzerConfig()).validate()
        self.lines_processed = 0
        self.files_processed = 0

    def analyze_lines(self, lines: Sequence[str], input_path: str = "") -> AnalysisResult:
        """Run the full pipeline over already loaded lines."""
        log_format = detect_format(lines, self.config.format_scan_lines)

        rows = tokenize_lines(lines)
        log = EventExtractor(self.config).extract(rows)
        self.lines_processed += len(lines)

        logger.info(
            "  %s events, %d products, %d users, %d hosts",
            f"{len(log.events):,}",
            len(log.products),
            len(log.users),
            len(log.hosts),
        )

        concurrency = accumulate_concurrency(log)
        index = CheckinIndex(log.events)
        by_user = reconcile_durations(log, "user", index)
        by_host = reconcile_durations(log, "host", index)
        denials = collect_denials(log.events)

        logger.info(
            "  %d checkouts, %d denials, %d server starts, %d shutdowns",
            len(by_user.records),
            len(denials),
            len(log.start_events),
            len(log.shutdown_events),
        )

        return AnalysisResult(
            input_path=input_path,
            log_format=log_format,
            log=log,
            concurrency=concurrency,
            durations_by_user=by_user,
            durations_by_host=by_host,
            denials=denials,
        )

    def analyze_content(self, content: str, input_path: str = "") -> AnalysisResult:
        """Analyze log text held in memory."""
        return self.analyze_lines(content.splitlines(), input_path)

    def analyze_file(self, path: str) -> AnalysisResult:
        """Load and analyze a report log file."""
        logger.info("Processing: %s", os.path.basename(path) if path else path)
        lines = load_lines(path, self.config.encoding)
        result = self.analyze_lines(lines, path)
        self.files_processed += 1
        logger.info("  Processed %s lines", f"{len(lines):,}")
        return result
