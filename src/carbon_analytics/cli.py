"""Batch carbon scoring from the command line.

Usage:
    carbon-analytics
    carbon-analytics data.json
    carbon-analytics data.json --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .core.exceptions import CalculationError, MalformedRecord, SelfCheckFailure
from .core.scoring import run_self_check
from .ingestors import get_data_file, run_batch

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="carbon-analytics",
        description="Score a JSON batch of instruments for net carbon liability",
    )
    parser.add_argument(
        "file", nargs="?", default=None,
        help="Path to the JSON batch file (default: $CARBON_DATA_FILE or ./carbon_calculation/data.json)",
    )
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $LOG_LEVEL or WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        run_self_check()
    except SelfCheckFailure as exc:
        logger.error("Self-check failed, refusing to process data")
        print(str(exc), file=sys.stderr)
        return 1

    path = args.file or get_data_file()
    try:
        lines = run_batch(path)
    except (MalformedRecord, CalculationError, OSError) as exc:
        logger.error("Batch run failed for %s", path)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
