"""Tolerant boundary between raw spreadsheet rows and ``ImportRow``.

Header names vary between exports (English API keys, the Chinese column
titles of the office template), so each field is read through an alias list.
Nothing here raises on bad data; bad values surface later as row errors.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.validators import first_present, optional_decimal, optional_int, text_or_default
from .model import ImportRow

# set by the spreadsheet reader so results point at the sheet's own row numbers
LINE_KEY = "_line"

STAFF_NAME_KEYS = ("staffName", "staff_name", "員工姓名", "姓名")
STAFF_ID_KEYS = ("staffId", "staff_id", "員工編號")
DATE_KEYS = ("date", "日期")
CLOCK_IN_KEYS = ("clockIn", "clock_in", "startTime", "start_time", "集合時間", "上班時間")
CLOCK_OUT_KEYS = ("clockOut", "clock_out", "endTime", "end_time", "下班時間")
ALLOWANCE_KEYS = ("allowance", "補助", "雜費")
OVERTIME_RATE_KEYS = ("overtimeRate", "overtime_rate", "加班費率")
NOTES_KEYS = ("notes", "備註")

_ALL_KEYS = (
    STAFF_NAME_KEYS
    + STAFF_ID_KEYS
    + DATE_KEYS
    + CLOCK_IN_KEYS
    + CLOCK_OUT_KEYS
    + ALLOWANCE_KEYS
    + OVERTIME_RATE_KEYS
    + NOTES_KEYS
)


def _amount(raw: Mapping[str, Any], keys: Sequence[str], default: Optional[Decimal], bad: list[str]):
    value = first_present(raw, keys)
    parsed = optional_decimal(value)
    if value is not None and parsed is None:
        bad.append(f"{keys[0]}={value}")
    return default if parsed is None else parsed


def parse_row(raw: Mapping[str, Any]) -> ImportRow:
    bad: list[str] = []
    allowance = _amount(raw, ALLOWANCE_KEYS, Decimal("0"), bad)
    overtime_rate = _amount(raw, OVERTIME_RATE_KEYS, None, bad)
    return ImportRow(
        staff_name=text_or_default(first_present(raw, STAFF_NAME_KEYS)),
        staff_id=optional_int(first_present(raw, STAFF_ID_KEYS)),
        date_raw=first_present(raw, DATE_KEYS),
        clock_in_raw=first_present(raw, CLOCK_IN_KEYS),
        clock_out_raw=first_present(raw, CLOCK_OUT_KEYS),
        allowance=allowance,
        overtime_rate=overtime_rate,
        notes=text_or_default(first_present(raw, NOTES_KEYS)),
        bad_amounts=tuple(bad),
        line=optional_int(raw.get(LINE_KEY)),
    )


def is_blank_row(raw: Mapping[str, Any]) -> bool:
    """True when none of the known columns carries a value (trailing sheet rows)."""
    return first_present(raw, _ALL_KEYS) is None


def parse_rows(raws: Iterable[Mapping[str, Any]]) -> list[ImportRow]:
    return [parse_row(r) for r in raws]

