#!/usr/bin/env python3
"""
CLI for the listing data contract and the collection quality gate.

Usage:
    python -m reporting.cli validate <record_json> [--strict]
    python -m reporting.cli evaluate <results_json> [--pdf] [--enforce]

Examples:
    # Validate one collected record
    python -m reporting.cli validate samples/record.json

    # Evaluate a sampling run and write the gate PDF
    python -m reporting.cli evaluate runs/sampling_results.json --pdf

Exit codes:
    0  success (record valid / run evaluated)
    1  unreadable or malformed input
    2  record failed the contract
    3  quality gate failed (evaluate --enforce only)
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from core.contract import MalformedInputError, load_record, validate_record
from core.quality import evaluate_sampling_results
from utils.config import Config

from .pdf_generator import generate_report


EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_CONTRACT_FAILED = 2
EXIT_GATE_FAILED = 3


def _read_text(path: Path):
    """Return file text, or None after printing an error."""
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read {path}: {e}", file=sys.stderr)
        return None


def _load_json(text: str):
    """Parse JSON text, reporting any decode fault as MalformedInputError."""
    try:
        return json.loads(text)
    except ValueError as e:
        raise MalformedInputError(f"Invalid JSON: {e}") from e


def cmd_validate(args, config):
    """Validate one raw collection record and print the report."""
    text = _read_text(Path(args.record_file))
    if text is None:
        return EXIT_BAD_INPUT

    try:
        report = validate_record(load_record(text))
    except MalformedInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))

    if args.strict:
        failed = report.error_count > 0
    else:
        failed = not report.valid
    return EXIT_CONTRACT_FAILED if failed else EXIT_OK


def cmd_evaluate(args, config):
    """Evaluate a sampling results file and print the run summary."""
    text = _read_text(Path(args.results_file))
    if text is None:
        return EXIT_BAD_INPUT

    try:
        document = _load_json(text)
        summary = evaluate_sampling_results(document, config.quality_thresholds())
    except MalformedInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))

    if args.pdf:
        output_dir = Path(args.output_dir or config.reports_dir)
        filepath = generate_report(summary, output_dir)
        print(f"Report generated: {filepath}", file=sys.stderr)

    if args.enforce and not summary.passed:
        return EXIT_GATE_FAILED
    return EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(
        description="Listing data contract validator and collection quality gate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli validate samples/record.json --strict
    python -m reporting.cli evaluate runs/sampling_results.json --pdf
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate one raw collection record against the contract",
    )
    validate_parser.add_argument(
        "record_file",
        help="Path to JSON record file",
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on any ERROR issue, including missing fields",
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Evaluate command
    evaluate_parser = subparsers.add_parser(
        "evaluate",
        help="Apply the quality gate to a sampling results file",
    )
    evaluate_parser.add_argument(
        "results_file",
        help="Path to JSON sampling results file",
    )
    evaluate_parser.add_argument(
        "--pdf",
        action="store_true",
        help="Also write the gate report PDF",
    )
    evaluate_parser.add_argument(
        "--output-dir",
        help="Directory for the PDF (defaults to REPORTS_DIR)",
    )
    evaluate_parser.add_argument(
        "--enforce",
        action="store_true",
        help="Exit non-zero when any platform fails the gate",
    )
    evaluate_parser.set_defaults(func=cmd_evaluate)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    config = Config.load()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    args = build_parser().parse_args(argv)
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
