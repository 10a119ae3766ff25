from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from employee_pairs.core.reporting import Condition, ConditionKind, ConditionReporter
from employee_pairs.models.employee import EmployeeProfile
from employee_pairs.services.date_utils import InvalidDateFormat, parse_date

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ", "
FIELD_COUNT = 4
BOM = "\ufeff"
HEADER_FIELDS = ("empid", "projectid", "datefrom", "dateto")


class RecordLoaderError(Exception):
    kind: ConditionKind = ConditionKind.SOURCE_IO_ERROR

    def __init__(self, message: str, row: int | None = None, raw_line: str | None = None) -> None:
        super().__init__(message)
        self.row = row
        self.raw_line = raw_line

    def to_condition(self) -> Condition:
        return Condition(kind=self.kind, message=str(self), row=self.row, raw_line=self.raw_line)


class EmptyInput(RecordLoaderError):
    kind = ConditionKind.EMPTY_INPUT


class HeaderOrRowShapeError(RecordLoaderError):
    kind = ConditionKind.HEADER_OR_ROW_SHAPE


class RowShapeError(RecordLoaderError):
    kind = ConditionKind.ROW_SHAPE


class InvalidNumberError(RecordLoaderError):
    kind = ConditionKind.INVALID_NUMBER


class SourceNotFound(RecordLoaderError):
    kind = ConditionKind.SOURCE_NOT_FOUND


class SourceIOError(RecordLoaderError):
    kind = ConditionKind.SOURCE_IO_ERROR


def split_fields(line: str) -> list[str]:
    return line.rstrip("\r\n").split(FIELD_SEPARATOR)


def is_header(fields: list[str]) -> bool:
    return len(fields) == FIELD_COUNT and tuple(f.strip().lower() for f in fields) == HEADER_FIELDS


def _parse_int(value: str, name: str, row: int, line: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise InvalidNumberError(
            f"Row {row}: {name} '{value.strip()}' is not a whole number. Row data: {line}",
            row=row,
            raw_line=line,
        ) from exc


class RecordLoader:
    """Reads ``EmpID, ProjectID, DateFrom, DateTo`` rows into employee profiles.

    A single malformed row invalidates the whole source: partial data must
    not produce a misleading pair.
    """

    def _add_row(self, profiles: dict[int, EmployeeProfile], fields: list[str], row: int, line: str) -> None:
        employee_id = _parse_int(fields[0], "employee id", row, line)
        project_id = _parse_int(fields[1], "project id", row, line)
        try:
            start_date = parse_date(fields[2], row=row)
            end_date = parse_date(fields[3], row=row)
        except InvalidDateFormat as exc:
            exc.raw_line = line
            raise

        profile = profiles.get(employee_id)
        if profile is None:
            profile = profiles[employee_id] = EmployeeProfile(employee_id=employee_id)
            logger.debug(
                "New employee with EmpID: %d, ProjectID: %d, start date: %s, end date: %s",
                employee_id,
                project_id,
                start_date,
                end_date,
            )
        else:
            logger.debug(
                "Existing employee with EmpID: %d, added project %d, start date: %s, end date: %s",
                employee_id,
                project_id,
                start_date,
                end_date,
            )
        profile.add_assignment(project_id, start_date, end_date)

    def read_profiles(self, source: Iterable[str]) -> list[EmployeeProfile]:
        """Parse ``source`` line by line, raising on the first problem."""
        lines: Iterator[str] = iter(source)
        profiles: dict[int, EmployeeProfile] = {}

        try:
            # Spreadsheet exports often start with a UTF-8 byte order mark.
            first_line = (next(lines, None) or "").lstrip(BOM).rstrip("\r\n")
            if not first_line:
                raise EmptyInput("Selected file is empty! Please choose another file.")

            fields = split_fields(first_line)
            if is_header(fields):
                logger.debug("Skipping header line")
            elif len(fields) == FIELD_COUNT:
                self._add_row(profiles, fields, 1, first_line)
            else:
                raise HeaderOrRowShapeError(
                    "The first line does not have the correct syntax, i.e. 4 comma separated values. "
                    "Please make sure that each row has exactly four values.",
                    row=1,
                    raw_line=first_line,
                )

            for row, line in enumerate(lines, start=2):
                line = line.rstrip("\r\n")
                fields = split_fields(line)
                if len(fields) != FIELD_COUNT:
                    raise RowShapeError(
                        f"Program execution terminated. Row {row} does not have the correct syntax. "
                        f"Row data: {line}",
                        row=row,
                        raw_line=line,
                    )
                self._add_row(profiles, fields, row, line)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceIOError("An error occurred while reading the selected file. Please try again.") from exc

        logger.info("Loaded %d employees", len(profiles))
        return list(profiles.values())

    def load(self, source: Iterable[str], reporter: ConditionReporter | None = None) -> list[EmployeeProfile]:
        """Parse ``source``; on any problem report it and return no profiles."""
        reporter = reporter or ConditionReporter(test_mode=True)
        try:
            return self.read_profiles(source)
        except RecordLoaderError as exc:
            reporter.report(exc.to_condition())
        except InvalidDateFormat as exc:
            reporter.report(exc.to_condition())
        return []

    def load_path(
        self,
        path: str | Path,
        reporter: ConditionReporter | None = None,
        encoding: str = "utf-8",
    ) -> list[EmployeeProfile]:
        reporter = reporter or ConditionReporter(test_mode=True)
        path = Path(path)
        try:
            with path.open(encoding=encoding) as source:
                return self.load(source, reporter)
        except FileNotFoundError:
            reporter.report(
                SourceNotFound(f"No such file {path.name} exists.").to_condition(),
            )
        except OSError:
            reporter.report(
                SourceIOError("An error occurred while reading the selected file. Please try again.").to_condition(),
            )
        return []


record_loader = RecordLoader()
