"""
Run configuration for the analyzer and the report writer.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .exceptions import ConfigurationError

# Only the head of a file is searched for the format markers
FORMAT_SCAN_LINES = 20

REPORT_LABEL = "LIC_Imaris"


@dataclass
class AnalyzerConfig:
    """Settings shared by the analysis pipeline and the report writer."""
    format_scan_lines: int = FORMAT_SCAN_LINES
    # Year for events seen before any START or year marker line
    default_year: Optional[int] = None
    report_label: str = REPORT_LABEL
    encoding: str = "utf-8"
    overwrite: bool = False
    include_processed_log: bool = True

    def validate(self) -> "AnalyzerConfig":
        """Check the values, raising ConfigurationError on the first bad one."""
        if self.format_scan_lines < 1:
            raise ConfigurationError(
                f"format_scan_lines must be positive, got {self.format_scan_lines}"
            )
        if self.default_year is not None and not 1000 <= self.default_year <= 9999:
            raise ConfigurationError(
                f"default_year must have four digits, got {self.default_year}"
            )
        if not self.report_label or "/" in self.report_label:
            raise ConfigurationError(f"Invalid report label: {self.report_label!r}")
        return self

    def fallback_year(self) -> str:
        """Year used until the log itself provides one."""
        if self.default_year is not None:
            return str(self.default_year)
        return str(date.today().year)
