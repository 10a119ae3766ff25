from __future__ import annotations

import io
from datetime import date

import pytest

from employee_pairs.core.reporting import ConditionKind, ConditionReporter
from employee_pairs.services.record_loader import (
    EmptyInput,
    HeaderOrRowShapeError,
    InvalidNumberError,
    RecordLoader,
    RowShapeError,
    SourceIOError,
    is_header,
    split_fields,
)
from employee_pairs.services.date_utils import InvalidDateFormat

HEADER = "EmpID, ProjectID, DateFrom, DateTo\n"


@pytest.fixture
def loader():
    return RecordLoader()


def _source(text: str) -> io.StringIO:
    return io.StringIO(text)


class TestSplitAndHeader:
    def test_split_fields_uses_comma_space(self):
        assert split_fields("1, 2, 2020-01-01, 2020-02-01\n") == ["1", "2", "2020-01-01", "2020-02-01"]

    def test_split_fields_keeps_empty_trailing_field(self):
        assert split_fields("1, 2, 2020-01-01, \r\n") == ["1", "2", "2020-01-01", ""]

    def test_header_detection_is_case_insensitive(self):
        assert is_header(["empid", "PROJECTID", " DateFrom", "dateTo "])

    def test_header_needs_exact_tokens_in_order(self):
        assert not is_header(["ProjectID", "EmpID", "DateFrom", "DateTo"])
        assert not is_header(["EmpID", "ProjectID", "DateFrom"])


class TestReadProfiles:
    def test_groups_rows_by_employee_in_first_seen_order(self, loader):
        profiles = loader.read_profiles(
            _source(
                HEADER
                + "5, 10, 2020-01-01, 2020-01-31\n"
                + "3, 10, 2020-01-15, 2020-02-15\n"
                + "5, 11, 2020-03-01, 2020-03-31\n"
            )
        )

        assert [p.employee_id for p in profiles] == [5, 3]
        assert [a.project_id for a in profiles[0].assignments] == [10, 11]
        assert profiles[0].assignments[1].start_date == date(2020, 3, 1)
        assert profiles[1].assignments[0].end_date == date(2020, 2, 15)

    def test_first_line_without_header_is_data(self, loader):
        profiles = loader.read_profiles(_source("1, 10, 2020-01-01, 2020-01-31\n2, 10, 2020-01-15, 2020-02-15\n"))

        assert [p.employee_id for p in profiles] == [1, 2]

    def test_header_only_yields_no_profiles(self, loader):
        assert loader.read_profiles(_source(HEADER)) == []

    def test_empty_and_null_dates(self, loader):
        profiles = loader.read_profiles(_source("1, 10, , NULL\n"))

        assignment = profiles[0].assignments[0]
        assert assignment.start_date is None
        assert assignment.end_date == date.today()

    def test_empty_source_raises(self, loader):
        with pytest.raises(EmptyInput, match="empty"):
            loader.read_profiles(_source(""))

    def test_byte_order_mark_before_header_is_ignored(self, loader):
        profiles = loader.read_profiles(_source("\ufeff" + HEADER + "1, 10, 2020-01-01, 2020-01-31\n"))

        assert [p.employee_id for p in profiles] == [1]

    def test_byte_order_mark_before_first_data_row_is_ignored(self, loader):
        profiles = loader.read_profiles(_source("\ufeff7, 10, 2020-01-01, 2020-01-31\n"))

        assert profiles[0].employee_id == 7

    def test_byte_order_mark_alone_is_empty(self, loader):
        with pytest.raises(EmptyInput):
            loader.read_profiles(_source("\ufeff\n"))

    def test_empty_first_line_raises(self, loader):
        with pytest.raises(EmptyInput):
            loader.read_profiles(_source("\n1, 10, 2020-01-01, 2020-01-31\n"))

    def test_first_line_with_wrong_field_count_raises(self, loader):
        with pytest.raises(HeaderOrRowShapeError, match="4 comma separated values") as exc_info:
            loader.read_profiles(_source("1, 10, 2020-01-01\n"))

        assert exc_info.value.row == 1

    @pytest.mark.parametrize(
        "bad_line",
        ["2, 10, 2020-01-15", "2, 10, 2020-01-15, 2020-02-15, extra", "", "2,10,2020-01-15,2020-02-15"],
    )
    def test_later_row_with_wrong_field_count_raises_with_position(self, loader, bad_line):
        text = HEADER + "1, 10, 2020-01-01, 2020-01-31\n" + bad_line + "\n3, 10, 2020-01-01, 2020-01-31\n"

        with pytest.raises(RowShapeError) as exc_info:
            loader.read_profiles(_source(text))

        assert exc_info.value.row == 3
        assert exc_info.value.raw_line == bad_line
        assert "Row 3" in str(exc_info.value)

    def test_non_numeric_id_raises(self, loader):
        with pytest.raises(InvalidNumberError, match="employee id 'abc'") as exc_info:
            loader.read_profiles(_source(HEADER + "abc, 10, 2020-01-01, 2020-01-31\n"))

        assert exc_info.value.row == 2

    def test_bad_date_raises_with_row_and_line(self, loader):
        line = "2, 10, 2020/01/15, 2020-02-15"

        with pytest.raises(InvalidDateFormat) as exc_info:
            loader.read_profiles(_source(HEADER + "1, 10, 2020-01-01, 2020-01-31\n" + line + "\n"))

        assert exc_info.value.row == 3
        assert exc_info.value.raw_line == line

    def test_read_failure_becomes_source_io_error(self, loader):
        def broken_source():
            yield HEADER
            raise OSError("disk gone")

        with pytest.raises(SourceIOError):
            loader.read_profiles(broken_source())


class TestLoad:
    def test_success_reports_nothing(self, loader, reporter):
        profiles = loader.load(_source(HEADER + "1, 10, 2020-01-01, 2020-01-31\n"), reporter)

        assert len(profiles) == 1
        assert reporter.conditions == []

    def test_empty_input_is_reported(self, loader, reporter):
        assert loader.load(_source(""), reporter) == []
        assert reporter.kinds == [ConditionKind.EMPTY_INPUT]

    def test_malformed_row_aborts_whole_load(self, loader, reporter):
        text = HEADER + "1, 10, 2020-01-01, 2020-01-31\n2, 10, 2020-01-15, 2020-02-15\n3, 10\n"

        assert loader.load(_source(text), reporter) == []
        condition = reporter.conditions[0]
        assert condition.kind == ConditionKind.ROW_SHAPE
        assert condition.row == 4
        assert condition.raw_line == "3, 10"

    def test_invalid_date_is_reported(self, loader, reporter):
        assert loader.load(_source("1, 10, 2020-13-01, 2020-01-31\n"), reporter) == []
        assert reporter.conditions[0].kind == ConditionKind.INVALID_DATE_FORMAT
        assert reporter.conditions[0].row == 1

    def test_defaults_to_silent_reporter(self, loader):
        assert loader.load(_source("")) == []


class TestLoadPath:
    def test_reads_file(self, loader, reporter, fixture_path):
        profiles = loader.load_path(fixture_path("employees-with-overlap.txt"), reporter)

        assert [p.employee_id for p in profiles] == [18, 19, 20, 21]
        assert reporter.conditions == []

    def test_reads_file_saved_with_byte_order_mark(self, loader, reporter, write_records):
        path = write_records(HEADER + "1, 10, 2020-01-01, 2020-01-31\n", encoding="utf-8-sig")

        profiles = loader.load_path(path, reporter)

        assert [p.employee_id for p in profiles] == [1]
        assert reporter.conditions == []

    def test_missing_file_is_reported(self, loader, reporter, tmp_path):
        assert loader.load_path(tmp_path / "missing.txt", reporter) == []
        condition = reporter.conditions[0]
        assert condition.kind == ConditionKind.SOURCE_NOT_FOUND
        assert "missing.txt" in condition.message

    def test_directory_is_an_io_error(self, loader, reporter, tmp_path):
        assert loader.load_path(tmp_path, reporter) == []
        assert reporter.kinds == [ConditionKind.SOURCE_IO_ERROR]

    def test_undecodable_file_is_an_io_error(self, loader, reporter, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\x00\x81, 10, 2020-01-01, 2020-01-31\n")

        assert loader.load_path(path, reporter) == []
        assert reporter.kinds == [ConditionKind.SOURCE_IO_ERROR]

    def test_five_field_row_in_file(self, loader, reporter, write_records):
        path = write_records(HEADER + "1, 10, 2020-01-01, 2020-01-31, 9\n")

        assert loader.load_path(path, reporter) == []
        assert reporter.conditions[0].row == 2

    def test_file_is_closed_after_failure(self, loader, write_records, monkeypatch):
        path = write_records("1, 10\n")
        opened = []
        original_open = type(path).open

        def tracking_open(self, *args, **kwargs):
            handle = original_open(self, *args, **kwargs)
            opened.append(handle)
            return handle

        monkeypatch.setattr(type(path), "open", tracking_open)
        loader.load_path(path, ConditionReporter(test_mode=True))

        assert len(opened) == 1
        assert opened[0].closed
