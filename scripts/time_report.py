#!/usr/bin/env python3
"""
Print the invoice summary for a billing period file.

Loads the YAML period, aggregates its time entries, rounds and reconciles
them to tenths of an hour and prints the invoice line-item table. With
--details, also prints the Markdown list of activities per project.

Usage:
    python3 scripts/time_report.py --file period.yaml
    python3 scripts/time_report.py -f period.yaml --details
    python3 scripts/time_report.py -f period.yaml --verbose   # JSON logs to stderr
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoice_config import load_invoice_period  # noqa: E402
from invoice_engines import (  # noqa: E402
    RawTimeEntry,
    build_time_summary,
    format_details,
    format_summary,
    rounded,
)
from invoice_kernel.exceptions import InvoiceTrackerError  # noqa: E402
from invoice_kernel.logging_config import LogContext, configure_logging  # noqa: E402


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Summarize the time entries of an invoice period.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python3 scripts/time_report.py -f march.yaml\n"
            "  python3 scripts/time_report.py -f march.yaml --details\n"
        ),
    )
    parser.add_argument(
        "--file", "-f", type=Path, required=True,
        help="Invoice period YAML file",
    )
    parser.add_argument(
        "--details", action="store_true",
        help="Also print the activities of each project as Markdown",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Emit DEBUG-level JSON logs to stderr",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        period = load_invoice_period(args.file)
    except (OSError, KeyError, ValueError, yaml.YAMLError) as exc:
        print(f"  ERROR: Could not load {args.file}: {exc}", file=sys.stderr)
        return 1

    number = str(period.invoice_number) if period.invoice_number is not None else None
    span = None
    if period.period_start and period.period_end:
        span = f"{period.period_start.isoformat()} to {period.period_end.isoformat()}"

    with LogContext.bind(invoice_number=number, period=span):
        entries = (
            RawTimeEntry(project=e.project, activity=e.activity, time=e.time)
            for e in period.entries
        )
        try:
            summary = rounded(build_time_summary(entries))
        except InvoiceTrackerError as exc:
            print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
            return 1

    if period.invoice_number is not None:
        print(f"Invoice #{period.invoice_number}")
    if span:
        print(f"Period: {span}")
    print(format_summary(summary, rate=period.rate), end="")

    if args.details:
        print()
        print(format_details(summary), end="")

    return 0


if __name__ == "__main__":
    sys.exit(main())
