"""Date parsing and date-range overlap for employee work periods.

Accepted encodings, tried in this order:

- ``MM/DD/YYYY`` (one- or two-digit month and day)
- ``YYYYMMDD``
- ``YYYY-MM-DD``

An empty value means "no date". The literal ``NULL`` (any case) is read as
the current date; this is kept for compatibility with existing exports and
is not a general rule for missing end dates.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Callable, Pattern

from employee_pairs.core.reporting import Condition, ConditionKind

logger = logging.getLogger(__name__)

NULL_TOKEN = "NULL"
SUPPORTED_FORMATS = "MM/DD/YYYY, YYYYMMDD, YYYY-MM-DD"

DateBuilder = Callable[[re.Match[str]], date]

_DATE_PATTERNS: list[tuple[Pattern[str], DateBuilder]] = [
    (
        re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"),
        lambda m: date(int(m.group(3)), int(m.group(1)), int(m.group(2))),
    ),
    (
        re.compile(r"(\d{4})(\d{2})(\d{2})"),
        lambda m: date(int(m.group(1)), int(m.group(2)), int(m.group(3))),
    ),
    (
        re.compile(r"(\d{4})-(\d{2})-(\d{2})"),
        lambda m: date(int(m.group(1)), int(m.group(2)), int(m.group(3))),
    ),
]


class InvalidDateFormat(ValueError):
    def __init__(self, value: str, row: int | None = None, raw_line: str | None = None) -> None:
        self.value = value
        self.row = row
        self.raw_line = raw_line
        where = f" on row {row}" if row is not None else ""
        super().__init__(f"Cannot parse '{value}' as date{where}. Supported formats: {SUPPORTED_FORMATS}")

    def to_condition(self) -> Condition:
        return Condition(
            kind=ConditionKind.INVALID_DATE_FORMAT,
            message=str(self),
            row=self.row,
            raw_line=self.raw_line,
        )


def parse_date(text: str | None, *, row: int | None = None, today: date | None = None) -> date | None:
    if text is None:
        return None

    value = text.strip()
    if not value:
        return None

    if value.upper() == NULL_TOKEN:
        return today or date.today()

    for pattern, build in _DATE_PATTERNS:
        match = pattern.fullmatch(value)
        if not match:
            continue
        try:
            return build(match)
        except ValueError as exc:
            raise InvalidDateFormat(value, row=row) from exc

    raise InvalidDateFormat(value, row=row)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def overlap_days(
    a_start: date | None,
    a_end: date | None,
    b_start: date | None,
    b_end: date | None,
) -> int:
    """Return the days two inclusive date ranges have in common.

    Ranges overlap when ``a_end >= b_start`` and ``a_start <= b_end``. The
    smallest of the four start/end differences is the overlap without its
    last day, whatever the relative position of the ranges, so one is added
    to count the end date. A range with a missing bound never overlaps.
    """
    if a_start is None or a_end is None or b_start is None or b_end is None:
        return 0

    a_start, a_end = _as_date(a_start), _as_date(a_end)
    b_start, b_end = _as_date(b_start), _as_date(b_end)

    if not (a_end >= b_start and a_start <= b_end):
        return 0

    shortest = min(
        (a_end - a_start).days,
        (a_end - b_start).days,
        (b_end - b_start).days,
        (b_end - a_start).days,
    )
    days = max(0, shortest + 1)
    logger.debug("Range overlap in days including end date: %d", days)
    return days
