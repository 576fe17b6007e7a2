from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.catering_payroll.catering_payroll.core.enums import RowErrorCode, RowStatus, RowWarningCode, WorkLogSource
from src.catering_payroll.catering_payroll.core.exceptions import BatchRejectedError, PersistenceError, ValidationError
from src.catering_payroll.catering_payroll.importing.service import WorkLogImportService
from src.catering_payroll.catering_payroll.staff.model import Staff


@pytest.fixture()
def service(staff_repo, events_repo, worklogs_repo):
    return WorkLogImportService(staff_repo, events_repo, worklogs_repo)


def _scheduled_row(**extra):
    row = {"staffName": "王小明", "date": "2024-01-15", "clockOut": "14:00"}
    row.update(extra)
    return row


def test_scheduled_row_uses_assembly_time(service):
    preview = service.preview([_scheduled_row(clockIn="09:40")])
    r = preview.results[0]

    assert r.status == RowStatus.VALID
    assert r.row == 1
    assert r.staff_id == 1
    assert r.event_id == 1
    assert r.event_name == "Wedding banquet"
    assert r.clock_in == "09:40"
    assert r.start_time == "09:00"
    assert r.hours == Decimal("5.0")
    assert r.overtime_minutes == 60
    assert r.overtime_intervals == 6
    assert r.overtime_pay == Decimal("300")
    assert r.total_salary == Decimal("2300")
    assert r.warning_code is None


def test_assignment_rate_overrides_staff_rate(service):
    r = service.preview([{"staffName": "陳大同", "date": "2024-01-15", "clockOut": "16:00"}]).results[0]

    assert r.start_time == "11:30"
    assert r.base_salary == Decimal("2500")
    assert r.hours == Decimal("4.5")
    assert r.overtime_pay == Decimal("150")
    assert r.total_salary == Decimal("2650")


def test_unscheduled_row_falls_back_to_clock_in_with_warning(service):
    r = service.preview(
        [{"staffName": "李美華", "date": "2024/1/16", "clockIn": "8:30", "clockOut": "13:10", "allowance": 100}]
    ).results[0]

    assert r.status == RowStatus.VALID
    assert r.date == "2024-01-16"
    assert r.start_time == "08:30"
    assert r.event_id is None
    assert r.warning_code == RowWarningCode.NO_MATCHING_SCHEDULE
    assert r.warning == "no matching schedule found"
    assert r.hours == Decimal("4.7")
    assert r.total_salary == Decimal("2100")


def test_event_without_assembly_time_uses_clock_in(service):
    r = service.preview([{"staffName": "王小明", "date": "2024-01-20", "clockIn": "10:00", "clockOut": "15:25"}]).results[0]

    assert r.status == RowStatus.VALID
    assert r.event_id == 3
    assert r.warning_code == RowWarningCode.NO_ASSEMBLY_TIME
    assert r.overtime_intervals == 8
    assert r.total_salary == Decimal("2400")


def test_event_without_assembly_time_and_no_clock_in_is_an_error(service):
    r = service.preview([{"staffName": "王小明", "date": "2024-01-20", "clockOut": "15:25"}]).results[0]

    assert r.status == RowStatus.ERROR
    assert r.error_code == RowErrorCode.MISSING_SHIFT_START


def test_warning_is_kept_on_error_rows(service):
    r = service.preview([{"staffName": "王小明", "date": "2024-01-20", "clockIn": "10:00"}]).results[0]

    assert r.status == RowStatus.ERROR
    assert r.error_code == RowErrorCode.INVALID_TIME
    assert r.warning_code == RowWarningCode.NO_ASSEMBLY_TIME


@pytest.mark.parametrize(
    "row, code",
    [
        ({"date": "2024-01-15", "clockOut": "14:00"}, RowErrorCode.MISSING_STAFF_NAME),
        ({"staffName": "路人甲", "date": "2024-01-15", "clockOut": "14:00"}, RowErrorCode.UNKNOWN_STAFF),
        ({"staffName": "王小明", "date": "2024-13-01", "clockOut": "14:00"}, RowErrorCode.INVALID_DATE),
        ({"staffName": "王小明", "date": "someday", "clockOut": "14:00"}, RowErrorCode.INVALID_DATE),
        ({"staffName": "李美華", "date": "2024-01-16", "clockIn": "early", "clockOut": "14:00"}, RowErrorCode.INVALID_TIME),
        ({"staffName": "李美華", "date": "2024-01-16", "clockOut": "14:00"}, RowErrorCode.MISSING_SHIFT_START),
        ({"staffName": "王小明", "date": "2024-01-15", "clockOut": "24:10"}, RowErrorCode.INVALID_TIME),
    ],
)
def test_row_errors(service, row, code):
    r = service.preview([row]).results[0]

    assert r.status == RowStatus.ERROR
    assert r.error_code == code
    assert r.total_salary == Decimal("0")


def test_unknown_staff_message_names_the_staff(service):
    r = service.preview([{"staffName": "路人甲", "date": "2024-01-15", "clockOut": "14:00"}]).results[0]

    assert r.error == "staff not found: 路人甲"


@pytest.mark.parametrize(
    "extra, message",
    [
        ({"overtimeRate": "-50"}, "overtime rate cannot be negative: -50"),
        ({"allowance": "-10"}, "allowance cannot be negative: -10"),
        ({"allowance": "1OO"}, "invalid amount: allowance=1OO"),
        ({"加班費率": "fast"}, "invalid amount: overtimeRate=fast"),
    ],
)
def test_bad_amount_fails_only_its_row(service, extra, message):
    ok, bad = service.preview([_scheduled_row(), _scheduled_row(**extra)]).results

    assert ok.status == RowStatus.VALID
    assert bad.status == RowStatus.ERROR
    assert bad.row == 2
    assert bad.error_code == RowErrorCode.INVALID_AMOUNT
    assert bad.error == message
    assert bad.total_salary == Decimal("0")


def test_confirm_with_bad_amount_is_rejected_not_zeroed(service, worklogs_repo):
    with pytest.raises(BatchRejectedError) as exc:
        service.confirm([_scheduled_row(allowance="1OO")])

    assert exc.value.results[0].error_code == RowErrorCode.INVALID_AMOUNT
    assert worklogs_repo.all() == []


def test_rows_keep_spreadsheet_line_numbers(service):
    results = service.preview([_scheduled_row(_line=1), _scheduled_row(_line=3)]).results

    assert [r.row for r in results] == [1, 3]


def test_sub_cent_inputs_keep_total_equal_to_parts(service):
    r = service.preview([_scheduled_row(allowance="0.004", overtimeRate="0.0005")]).results[0]

    assert r.overtime_pay == Decimal("0.00")
    assert r.allowance == Decimal("0.00")
    assert r.total_salary == Decimal("2000.00")
    assert r.total_salary == r.base_salary + r.overtime_pay + r.allowance


def test_spreadsheet_serial_cells(service):
    r = service.preview([{"員工姓名": "王小明", "日期": 45306, "下班時間": 0.5833333333}]).results[0]

    assert r.date == "2024-01-15"
    assert r.end_time == "14:00"
    assert r.total_salary == Decimal("2300")


def test_duplicate_names_need_an_explicit_staff_id(staff_repo, events_repo, worklogs_repo):
    staff_repo.add(Staff(staff_id=5, name="王小明", per_event_salary=Decimal("1500")))
    service = WorkLogImportService(staff_repo, events_repo, worklogs_repo)

    ambiguous, explicit = service.preview(
        [
            {"staffName": "王小明", "date": "2024-01-16", "clockIn": "09:00", "clockOut": "12:00"},
            {"staffName": "王小明", "staffId": 5, "date": "2024-01-16", "clockIn": "09:00", "clockOut": "12:00"},
        ]
    ).results

    assert ambiguous.error_code == RowErrorCode.AMBIGUOUS_STAFF
    assert explicit.status == RowStatus.VALID
    assert explicit.staff_id == 5
    assert explicit.total_salary == Decimal("1500")


def test_batch_and_row_overtime_rates(service):
    results = service.preview(
        [_scheduled_row(), _scheduled_row(overtimeRate="100")],
        overtime_rate=Decimal("60"),
    ).results

    assert results[0].overtime_pay == Decimal("360")
    assert results[1].overtime_pay == Decimal("600")


def test_preview_summary_and_no_persistence(service, events_repo, worklogs_repo):
    preview = service.preview(
        [
            _scheduled_row(),
            {"staffName": "李美華", "date": "2024-01-16", "clockIn": "08:30", "clockOut": "13:10"},
            {"staffName": "路人甲", "date": "2024-01-15", "clockOut": "14:00"},
        ]
    )
    s = preview.summary

    assert [r.row for r in preview.results] == [1, 2, 3]
    assert (s.total, s.valid, s.errors, s.warnings) == (3, 2, 1, 1)
    assert s.total_salary == Decimal("4300")
    assert preview.to_dict()["preview"] is True
    assert preview.to_dict()["config"]["overtimeRate"] == Decimal("50")
    assert worklogs_repo.all() == []
    assert events_repo.list_calls == 1


def test_confirm_rejects_whole_batch_when_any_row_fails(service, worklogs_repo):
    rows = [
        _scheduled_row(),
        {"staffName": "陳大同", "date": "2024-01-15", "clockOut": "16:00"},
        {"staffName": "路人甲", "date": "2024-01-15", "clockOut": "14:00"},
        {"staffName": "李美華", "date": "2024-01-16", "clockIn": "08:30", "clockOut": "13:10"},
        {"staffName": "王小明", "date": "2024-01-20", "clockIn": "10:00", "clockOut": "15:25"},
    ]

    with pytest.raises(BatchRejectedError) as exc:
        service.confirm(rows)

    assert exc.value.summary == {"valid": 4, "errors": 1}
    assert exc.value.results[2].row == 3
    assert exc.value.results[2].error_code == RowErrorCode.UNKNOWN_STAFF
    assert worklogs_repo.create_many_calls == 0
    assert worklogs_repo.all() == []


def test_confirm_persists_every_row_atomically(service, worklogs_repo):
    result = service.confirm(
        [
            _scheduled_row(notes="ok"),
            {"staffName": "李美華", "date": "2024-01-16", "clockIn": "08:30", "clockOut": "13:10", "allowance": 100},
        ]
    )

    assert result.imported == 2
    assert result.total_salary == Decimal("4400")
    assert result.to_dict() == {"success": True, "imported": 2, "totalSalary": Decimal("4400")}
    assert worklogs_repo.create_many_calls == 1

    first, second = worklogs_repo.all()
    assert first.work_date == date(2024, 1, 15)
    assert first.start_time == "09:00"
    assert first.event_id == 1
    assert first.source == WorkLogSource.IMPORT
    assert first.notes == "ok"
    assert second.event_id is None
    assert second.allowance == Decimal("100")
    assert second.notes is None


def test_store_failure_surfaces_as_persistence_error(service, worklogs_repo):
    worklogs_repo.fail_on_write = True

    with pytest.raises(PersistenceError):
        service.confirm([_scheduled_row()])

    assert worklogs_repo.all() == []


def test_empty_batch_is_rejected(service):
    with pytest.raises(ValidationError):
        service.preview([])
    with pytest.raises(ValidationError):
        service.confirm([])
