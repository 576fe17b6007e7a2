from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative(value: Decimal, field_name: str) -> Decimal:
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def first_present(row: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """Return the first alias whose cell is not blank, else None.

    Spreadsheet exports disagree on header names, so each logical field is
    looked up under several keys in priority order.
    """
    for key in aliases:
        if key not in row:
            continue
        value = row[key]
        if value is None:
            continue
        if isinstance(value, float) and math.isnan(value):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def text_or_default(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def decimal_or_default(value: Any, default: Optional[Decimal]) -> Optional[Decimal]:
    """Parse a money-ish cell; blanks and garbage fall back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return default
        return Decimal(str(value))
    text = str(value).strip().replace(",", "")
    if not text:
        return default
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return default
    return parsed if parsed.is_finite() else default


def parse_decimal(value: Any, field_name: str) -> Decimal:
    """Strict variant for API payloads: reject anything that is not a number."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not parsed.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return parsed


def optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if math.isnan(value) or not value.is_integer():
            return None
        return int(value)
    text = str(value).strip()
    if not text.isdigit():
        return None
    return int(text)


def optional_decimal(value: Any) -> Optional[Decimal]:
    """Like ``decimal_or_default`` but blanks and garbage give None."""
    return decimal_or_default(value, None)
