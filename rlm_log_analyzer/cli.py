"""
Command line interface.

    rlm-log-analyzer imaris.rlog -o reports/
    python -m rlm_log_analyzer imaris.rlog -o reports/ --overwrite
"""

import argparse
import os
import sys
from typing import List, Optional

from .analyzer import LicenseLogAnalyzer
from .config import FORMAT_SCAN_LINES, REPORT_LABEL, AnalyzerConfig
from .exceptions import LicenseLogError
from .logging_config import configure_logging, get_logger, level_for
from .report import ReportWriter

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rlm-log-analyzer",
        description="License usage reports from an RLM report log",
    )
    parser.add_argument("log_file", help="RLM report log to analyze")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory for the reports (default: the log file's directory)",
    )
    parser.add_argument("--overwrite", action="store_true", help="Replace existing reports")
    parser.add_argument(
        "--no-processed-log",
        action="store_true",
        help="Skip the reformatted copy of the extracted events",
    )
    parser.add_argument(
        "--default-year",
        type=int,
        default=None,
        help="Year for events logged before any START or date line",
    )
    parser.add_argument("--label", default=REPORT_LABEL, help="Label used in report file names")
    parser.add_argument(
        "--scan-lines",
        type=int,
        default=FORMAT_SCAN_LINES,
        help="Number of leading lines searched for the format marker",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    parser.add_argument(
        "--structured-logs", action="store_true", help="Timestamped log output"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    configure_logging(
        level=level_for(args.verbose, args.quiet), simple_mode=not args.structured_logs
    )

    output_dir = args.output_dir
    if output_dir is None:
        output_dir = os.path.dirname(os.path.abspath(args.log_file))

    try:
        config = AnalyzerConfig(
            format_scan_lines=args.scan_lines,
            default_year=args.default_year,
            report_label=args.label,
            overwrite=args.overwrite,
            include_processed_log=not args.no_processed_log,
        ).validate()

        writer = ReportWriter(args.log_file, output_dir, config)
        conflicts = writer.existing_files()
        if conflicts and not config.overwrite:
            logger.error("Report files already exist (use --overwrite to replace them):")
            for path in conflicts:
                logger.error("  %s", path)
            return 1

        result = LicenseLogAnalyzer(config).analyze_file(args.log_file)
        written = writer.write(result)
    except LicenseLogError as e:
        logger.error("Error: %s", e)
        return 1

    logger.info("\nServer: %s", result.server_name or "(unknown)")
    logger.info("Wrote %d report(s) to %s", len(written), output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
