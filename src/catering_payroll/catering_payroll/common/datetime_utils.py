"""Date/time normalization for loosely formatted spreadsheet cells.

Every ``normalize_*`` function is total: it returns a canonical string when the
input is recognized and the cleaned input otherwise, so callers decide validity
with ``is_valid_date`` / ``is_valid_time`` instead of catching exceptions.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

import pandas as pd

from ..core.constants import (
    EXCEL_EPOCH_OFFSET_DAYS,
    EXCEL_SERIAL_MAX,
    EXCEL_SERIAL_MIN,
    MINUTES_PER_DAY,
)
from ..core.exceptions import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SLASH_DATE_RE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_CLOCK_SECONDS_RE = re.compile(r"^(\d{1,2}):(\d{2}):\d{2}$")
_VALID_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

_UNIX_EPOCH = date(1970, 1, 1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is pd.NaT


def _to_float(text: str) -> float | None:
    try:
        num = float(text)
    except ValueError:
        return None
    return None if math.isnan(num) else num


def format_minutes(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def normalize_time(value: Any) -> str:
    """Return ``HH:mm`` for clock strings and fractional-day serials.

    ``9:05`` becomes ``09:05``; ``0.375`` (a spreadsheet time cell) becomes
    ``09:00``. Anything else comes back stripped but otherwise untouched.
    """
    if _is_blank(value):
        return ""
    if isinstance(value, datetime):
        return value.strftime("%H:%M")
    if isinstance(value, time):
        return value.strftime("%H:%M")

    cleaned = str(value).strip()
    if not cleaned:
        return ""

    m = _CLOCK_RE.match(cleaned) or _CLOCK_SECONDS_RE.match(cleaned)
    if m:
        return f"{int(m.group(1)):02d}:{m.group(2)}"

    num = _to_float(cleaned)
    if num is not None and 0 <= num < 1:
        # half-up, not banker's rounding
        total_minutes = math.floor(num * MINUTES_PER_DAY + 0.5)
        return format_minutes(total_minutes)

    return cleaned


def normalize_date(value: Any) -> str:
    """Return ``YYYY-MM-DD`` for ISO, ``YYYY/M/D``, serial and free-form dates."""
    if _is_blank(value):
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    cleaned = str(value).strip()
    if not cleaned:
        return ""

    if _ISO_DATE_RE.match(cleaned):
        return cleaned

    m = _SLASH_DATE_RE.match(cleaned)
    if m:
        y, mo, d = m.groups()
        return f"{y}-{int(mo):02d}-{int(d):02d}"

    num = _to_float(cleaned)
    if num is not None:
        if EXCEL_SERIAL_MIN < num < EXCEL_SERIAL_MAX:
            days = math.floor(num - EXCEL_EPOCH_OFFSET_DAYS)
            return (_UNIX_EPOCH + timedelta(days=days)).isoformat()
        return cleaned

    try:
        parsed = pd.to_datetime(cleaned, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return cleaned
    if parsed is pd.NaT or pd.isna(parsed):
        return cleaned
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC")
    return parsed.strftime("%Y-%m-%d")


def is_valid_date(value: str) -> bool:
    """Canonical shape and a real calendar day (``2026-02-30`` is rejected)."""
    if not value or not _ISO_DATE_RE.match(value):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def is_valid_time(value: str) -> bool:
    return bool(value) and bool(_VALID_TIME_RE.match(value))


def to_minutes(value: str) -> int:
    """Minutes since midnight for a canonical ``HH:mm`` string."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def parse_date_param(value: Any, field_name: str, *, required: bool = False) -> date | None:
    """Parse an optional ``YYYY-MM-DD`` query/body value for the HTTP layer."""
    text = "" if value is None else str(value).strip()
    if not text:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    if not is_valid_date(text):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    return parse_iso_date(text)
