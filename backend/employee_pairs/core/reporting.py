"""Structured reporting of loader errors and pairing outcomes.

Every component that can end a run early receives a ``ConditionReporter``
instead of writing to a shared logger or opening dialogs. The reporter logs
each condition, keeps it for the caller and, outside test mode, hands it to
an optional interactive notifier at most once.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ConditionKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    HEADER_OR_ROW_SHAPE = "header_or_row_shape"
    ROW_SHAPE = "row_shape"
    INVALID_DATE_FORMAT = "invalid_date_format"
    INVALID_NUMBER = "invalid_number"
    SOURCE_NOT_FOUND = "source_not_found"
    SOURCE_IO_ERROR = "source_io_error"
    INSUFFICIENT_EMPLOYEES = "insufficient_employees"
    NO_QUALIFYING_PAIRS = "no_qualifying_pairs"


INFO_KINDS = frozenset(
    {
        ConditionKind.INSUFFICIENT_EMPLOYEES,
        ConditionKind.NO_QUALIFYING_PAIRS,
    }
)


class Condition(BaseModel):
    """A user-displayable report of an error or a notable empty outcome."""

    kind: ConditionKind
    message: str
    row: int | None = None
    raw_line: str | None = None
    # Log-only conditions are kept and logged but never shown interactively.
    notify: bool = Field(default=True, exclude=True)

    @property
    def is_error(self) -> bool:
        return self.kind not in INFO_KINDS


Notifier = Callable[[Condition], None]


class ConditionReporter:
    def __init__(self, *, test_mode: bool = False, notifier: Notifier | None = None) -> None:
        self.test_mode = test_mode
        self.notifier = notifier
        self.conditions: list[Condition] = []

    def report(self, condition: Condition) -> None:
        if condition.is_error:
            if condition.row is not None:
                logger.error("%s (row %d): %s", condition.kind.value, condition.row, condition.message)
            else:
                logger.error("%s: %s", condition.kind.value, condition.message)
        else:
            logger.info("%s: %s", condition.kind.value, condition.message)

        self.conditions.append(condition)

        if condition.notify and not self.test_mode and self.notifier is not None:
            self.notifier(condition)

    def has(self, kind: ConditionKind) -> bool:
        return any(c.kind == kind for c in self.conditions)

    @property
    def kinds(self) -> list[ConditionKind]:
        return [c.kind for c in self.conditions]
