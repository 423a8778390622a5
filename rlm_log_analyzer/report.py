"""
Flat file reports for an analysis result.

File names are derived from the input file name:
    <output_dir>/<input stem>_<label>_<report name>.<ext>
"""

import csv
import os
from typing import Dict, List, Optional, Sequence

from .analyzer import AnalysisResult
from .config import AnalyzerConfig
from .denials import denial_rows
from .exceptions import CannotFindDirError, CannotOpenFileError
from .logging_config import get_logger

logger = get_logger(__name__)

# Report key -> (file name suffix, extension), in writing order
REPORTS = {
    "summary": ("License_Summary", "txt"),
    "processed_log": ("Processed_Log_File", "txt"),
    "concurrent_usage": ("Concurrent_License_Usage", "csv"),
    "license_activity": ("License_Activity", "csv"),
    "total_duration_hosts": ("Total_Duration_Hosts", "csv"),
    "total_duration_users": ("Total_Duration_Users", "csv"),
    "denied_requests": ("Denied_License_Requests", "csv"),
}


def output_paths(input_path: str, output_dir: str, label: str) -> Dict[str, str]:
    """Report key -> output file path."""
    stem = os.path.splitext(os.path.basename(input_path))[0]
    return {
        key: os.path.join(output_dir, f"{stem}_{label}_{name}.{ext}")
        for key, (name, ext) in REPORTS.items()
    }


def summary_lines(result: AnalysisResult) -> List[str]:
    """Text of the summary report."""
    log = result.log
    lines = ["Log Data Summary For:", result.input_path, ""]
    lines += [f"Server Name: {log.server_name}", ""]

    for title, events in (
        ("Server Start(s)", log.start_events),
        ("Server Shutdown(s)", log.shutdown_events),
    ):
        lines.append(f"{title}: ({len(events)} Total)")
        lines.extend(" ".join(event.columns()[1:]) for event in events)
        lines.append("")

    for title, registry in (
        ("Product(s)", log.products),
        ("User(s)", log.users),
        ("Host(s)", log.hosts),
    ):
        lines.append(f"{title}: ({len(registry)} Total)")
        lines.extend(registry)
        lines.append("")

    return lines


class ReportWriter:
    """Writes the report set of one input file into a directory."""

    def __init__(self, input_path: str, output_dir: str,
                 config: Optional[AnalyzerConfig] = None):
        if not output_dir or not os.path.isdir(output_dir):
            raise CannotFindDirError(output_dir)
        self.config = config or AnalyzerConfig()
        self.input_path = input_path
        self.output_dir = output_dir
        self.paths = output_paths(input_path, output_dir, self.config.report_label)

    def selected(self) -> List[str]:
        keys = list(self.paths)
        if not self.config.include_processed_log:
            keys.remove("processed_log")
        return keys

    def existing_files(self) -> List[str]:
        """Report paths that already exist and would be overwritten."""
        return [self.paths[key] for key in self.selected() if os.path.exists(self.paths[key])]

    def write(self, result: AnalysisResult) -> List[str]:
        """Write every selected report and return the paths written."""
        existing = self.existing_files()
        if existing:
            logger.warning("Overwriting %d existing report file(s)", len(existing))

        writers = {
            "summary": lambda path: self.write_text(path, summary_lines(result)),
            "processed_log": lambda path: self.write_table(
                path, [event.columns() for event in result.log.events], delimiter=" "
            ),
            "concurrent_usage": lambda path: self.write_table(path, result.concurrency.rows()),
            "license_activity": lambda path: self.write_table(
                path, result.durations_by_host.rows()
            ),
            "total_duration_hosts": lambda path: self.write_table(
                path, result.durations_by_host.total_rows()
            ),
            "total_duration_users": lambda path: self.write_table(
                path, result.durations_by_user.total_rows()
            ),
            "denied_requests": lambda path: self.write_table(path, denial_rows(result.denials)),
        }

        written = []
        for key in self.selected():
            path = self.paths[key]
            writers[key](path)
            logger.info("  Wrote %s", path)
            written.append(path)
        return written

    def write_text(self, path: str, lines: Sequence[str]) -> None:
        try:
            with open(path, "w", encoding=self.config.encoding) as f:
                f.write("\n".join(lines))
                f.write("\n")
        except OSError:
            raise CannotOpenFileError(path) from None

    def write_table(self, path: str, rows: Sequence[Sequence[str]], delimiter: str = ",") -> None:
        try:
            with open(path, "w", encoding=self.config.encoding, newline="") as f:
                if delimiter == ",":
                    writer = csv.writer(f, lineterminator="\n")
                    writer.writerows(rows)
                else:
                    for row in rows:
                        f.write(delimiter.join(row) + "\n")
        except OSError:
            raise CannotOpenFileError(path) from None
