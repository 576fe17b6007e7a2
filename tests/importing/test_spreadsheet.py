import io

import pytest

from src.catering_payroll.catering_payroll.core.exceptions import ValidationError
from src.catering_payroll.catering_payroll.importing.parser import LINE_KEY
from src.catering_payroll.catering_payroll.importing.spreadsheet import read_rows


def _csv(text):
    return io.BytesIO(text.encode("utf-8"))


def test_blank_rows_are_dropped_but_still_counted():
    rows = read_rows(
        _csv("員工姓名,日期,下班時間\n王小明,2024/1/15,14:00\n,,\n\n李美華,2024/1/16,13:00\n"),
        filename="timesheet.csv",
    )

    assert [r["員工姓名"] for r in rows] == ["王小明", "李美華"]
    assert [r[LINE_KEY] for r in rows] == [1, 4]


def test_empty_cells_become_none():
    rows = read_rows(_csv("staffName,date,clockIn,clockOut\n王小明,2024-01-15,,14:00\n"), filename="a.csv")

    assert rows[0]["clockIn"] is None
    assert rows[0]["clockOut"] == "14:00"


def test_unknown_suffix_is_rejected():
    with pytest.raises(ValidationError):
        read_rows(_csv("x"), filename="notes.pdf")
