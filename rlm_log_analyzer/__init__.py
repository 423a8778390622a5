"""
RLM Log Analyzer

A Python package for turning RLM license server report logs into usage
reports: concurrent license occupancy, checkout durations per user and per
host, and denied license requests.
"""

from .analyzer import AnalysisResult, LicenseLogAnalyzer, load_lines
from .concurrency import ConcurrencyReport, ProductUsage, UsageSnapshot, accumulate_concurrency
from .config import AnalyzerConfig
from .denials import DenialRecord, collect_denials
from .detector import LogFormat, classify_format, detect_format
from .durations import DurationRecord, DurationReport, reconcile_durations
from .events import EventRecord
from .exceptions import (
    CannotFindDirError,
    CannotOpenFileError,
    ConfigurationError,
    EventDataError,
    InvalidFormatError,
    InvalidIndexError,
    InvalidProductVersionError,
    LicenseLogError,
)
from .extractor import EventExtractor, ExtractedLog, ExtractionState, extract_events
from .registry import IdentityRegistry
from .report import ReportWriter, output_paths
from .tokenizer import tokenize

__all__ = [
    # Main analyzer
    "LicenseLogAnalyzer",
    "AnalysisResult",
    "AnalyzerConfig",
    "load_lines",
    # Pipeline stages
    "LogFormat",
    "classify_format",
    "detect_format",
    "tokenize",
    "EventExtractor",
    "ExtractedLog",
    "ExtractionState",
    "extract_events",
    "IdentityRegistry",
    "accumulate_concurrency",
    "reconcile_durations",
    "collect_denials",
    # Records and tables
    "EventRecord",
    "ConcurrencyReport",
    "ProductUsage",
    "UsageSnapshot",
    "DurationRecord",
    "DurationReport",
    "DenialRecord",
    # Reports
    "ReportWriter",
    "output_paths",
    # Exceptions
    "LicenseLogError",
    "InvalidFormatError",
    "EventDataError",
    "InvalidIndexError",
    "InvalidProductVersionError",
    "CannotOpenFileError",
    "CannotFindDirError",
    "ConfigurationError",
]

__version__ = "1.0.0"
