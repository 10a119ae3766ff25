#!/usr/bin/env python3
"""Find the pair of employees who worked together the longest.

Run from the backend/ directory:

    python3 scripts/find_pair.py employees.txt [--test-mode] [--verbose]

The file holds ``EmpID, ProjectID, DateFrom, DateTo`` rows. The result is
printed as a table; problems with the file are shown once on stderr unless
test mode is on, and are always written to the log.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TextIO

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from employee_pairs.core.config import Settings  # noqa: E402
from employee_pairs.core.reporting import Condition, ConditionReporter  # noqa: E402
from employee_pairs.models.pairing import RESULT_COLUMNS, PairingAnalysis  # noqa: E402
from employee_pairs.services.pairing_service import pairing_service  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the pair of employees with the longest common period on shared projects",
    )
    parser.add_argument("path", help="Path to the employee records file")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Do not show notifications; report problems through the log only",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


def make_notifier(stream: TextIO):
    def notify(condition: Condition) -> None:
        print(condition.message, file=stream)

    return notify


def format_table(analysis: PairingAnalysis) -> str:
    if analysis.result is None:
        return "No pair of employees found."

    row = analysis.result.as_row()
    widths = [max(len(header), len(value)) for header, value in zip(RESULT_COLUMNS, row)]
    lines = [
        " | ".join(h.ljust(w) for h, w in zip(RESULT_COLUMNS, widths)),
        "-+-".join("-" * w for w in widths),
        " | ".join(v.ljust(w) for v, w in zip(row, widths)),
    ]
    return "\n".join(lines)


def run(args: argparse.Namespace, out: TextIO | None = None, err: TextIO | None = None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    settings = Settings()
    reporter = ConditionReporter(
        test_mode=args.test_mode or settings.TEST_MODE,
        notifier=make_notifier(err),
    )

    analysis = pairing_service.analyze_path(args.path, reporter, encoding=settings.INPUT_ENCODING)
    print(format_table(analysis), file=out)
    return 0 if analysis.result is not None else 1


def main() -> None:
    args = parse_args()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
    sys.exit(run(args))


if __name__ == "__main__":
    main()
