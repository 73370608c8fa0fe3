"""
Command-line interface for the report splitter.

Reads JSON-lines records, runs a report filter over them and writes the
resulting records as JSON lines. With --encode, wraps a raw XML report file
into a single input record instead.
"""

import argparse
import base64
import json
import logging
import sys
from contextlib import ExitStack
from typing import Iterator, Optional, TextIO

from .config.config_manager import get_config_manager
from .exceptions import ReportSplitterError
from .filters.report_filter import ReportFilter
from .models import AnomalyPolicy
from .processing.record_processor import RecordProcessor


def _read_records(stream: TextIO, logger: logging.Logger) -> Iterator[dict]:
    for line_number, line in enumerate(stream, 1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            logger.error(f"Line {line_number}: invalid JSON record ({e}); skipped")
            continue
        if not isinstance(record, dict):
            logger.error(f"Line {line_number}: record is not a JSON object; skipped")
            continue
        yield record


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-splitter",
        description="Split base64-encoded Cobertura/JUnit XML reports embedded in JSON-lines records",
    )
    parser.add_argument("--schema", default="cobertura",
                        help="Packaged contract name (cobertura, junit) or path to a contract file")
    parser.add_argument("--source", default=None,
                        help="Record field holding the encoded report (default: $REPORT_SPLITTER_SOURCE or 'message')")
    parser.add_argument("--input", default="-", help="Input JSON-lines file ('-' for stdin)")
    parser.add_argument("--output", default="-", help="Output JSON-lines file ('-' for stdout)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        help="Logging level")
    parser.add_argument("--skip-anomalies", action="store_true",
                        help="Skip only the offending branch on empty grouping nodes "
                             "instead of abandoning the remaining descent")
    parser.add_argument("--encode", metavar="XML_FILE", default=None,
                        help="Wrap a raw XML report into one input record and exit")
    return parser


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for the CLI application.

    Args:
        args: Optional command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args is None:
        args = sys.argv[1:]
    options = build_parser().parse_args(args)

    # Set up logging without reconfiguring root if already configured
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(handler)
    root_logger.setLevel(options.log_level)
    logger = logging.getLogger(__name__)

    try:
        config_manager = get_config_manager()
        source = options.source or config_manager.get_filter_config().source

        with ExitStack() as stack:
            output = sys.stdout if options.output == "-" else stack.enter_context(
                open(options.output, "w", encoding="utf-8"))

            if options.encode:
                with open(options.encode, "rb") as xml_file:
                    encoded = base64.b64encode(xml_file.read()).decode("ascii")
                output.write(json.dumps({source: encoded}) + "\n")
                return 0

            stream = sys.stdin if options.input == "-" else stack.enter_context(
                open(options.input, "r", encoding="utf-8"))

            contract = config_manager.load_mapping_contract(options.schema)
            policy = AnomalyPolicy.SKIP_BRANCH if options.skip_anomalies else AnomalyPolicy.ABORT_REMAINING
            processor = RecordProcessor(ReportFilter(source, contract, policy))

            for record in processor.process(_read_records(stream, logger)):
                output.write(json.dumps(record, default=str) + "\n")

        result = processor.get_result()
        logger.info(f"Split {result.records_split}/{result.records_processed} record(s) "
                    f"({result.success_rate:.1f}%) in {result.processing_time_seconds:.2f}s")
        return 0

    except ReportSplitterError as e:
        logger.error(f"Report splitting failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
