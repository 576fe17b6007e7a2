from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from ..core.enums import RowErrorCode, RowStatus, RowWarningCode


@dataclass(frozen=True)
class ImportRow:
    """One spreadsheet line after field-alias resolution, before normalization.

    ``bad_amounts`` holds ``field=raw`` for money cells that were filled in
    but could not be read as numbers; their parsed value is the default.
    """

    staff_name: str
    date_raw: Any
    clock_out_raw: Any
    clock_in_raw: Any = None
    staff_id: Optional[int] = None
    allowance: Decimal = Decimal("0")
    overtime_rate: Optional[Decimal] = None
    notes: str = ""
    bad_amounts: tuple[str, ...] = ()
    line: Optional[int] = None  # data row number in the source sheet, blank rows included


@dataclass
class PreviewRow:
    """Validated/derived output of one ImportRow.

    For rows that are not in ERROR, ``total_salary == base_salary +
    overtime_pay + allowance``.
    """

    row: int
    staff_name: str
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    clock_in: str = ""
    staff_id: Optional[int] = None
    event_id: Optional[int] = None
    event_name: Optional[str] = None
    hours: Decimal = Decimal("0")
    base_salary: Decimal = Decimal("0")
    overtime_minutes: int = 0
    overtime_intervals: int = 0
    overtime_rate: Decimal = Decimal("0")
    overtime_pay: Decimal = Decimal("0")
    allowance: Decimal = Decimal("0")
    total_salary: Decimal = Decimal("0")
    notes: str = ""
    status: RowStatus = RowStatus.PENDING
    error_code: Optional[RowErrorCode] = None
    error: Optional[str] = None
    warning_code: Optional[RowWarningCode] = None
    warning: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == RowStatus.VALID

    @property
    def has_warning(self) -> bool:
        return self.warning_code is not None

    def fail(self, code: RowErrorCode, message: str) -> "PreviewRow":
        self.status = RowStatus.ERROR
        self.error_code = code
        self.error = message
        return self

    def warn(self, code: RowWarningCode, message: str) -> "PreviewRow":
        self.warning_code = code
        self.warning = message
        return self

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "staffName": self.staff_name,
            "staffId": self.staff_id,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "clockIn": self.clock_in,
            "eventId": self.event_id,
            "eventName": self.event_name,
            "hours": self.hours,
            "baseSalary": self.base_salary,
            "overtimeMinutes": self.overtime_minutes,
            "overtimeIntervals": self.overtime_intervals,
            "overtimeRate": self.overtime_rate,
            "overtimePay": self.overtime_pay,
            "allowance": self.allowance,
            "totalSalary": self.total_salary,
            "notes": self.notes,
            "status": self.status.value,
            "errorCode": self.error_code.value if self.error_code else None,
            "error": self.error,
            "warningCode": self.warning_code.value if self.warning_code else None,
            "warning": self.warning,
        }


@dataclass(frozen=True)
class ImportSummary:
    total: int
    valid: int
    errors: int
    warnings: int
    total_salary: Decimal

    @classmethod
    def of(cls, results: list[PreviewRow]) -> "ImportSummary":
        valid = [r for r in results if r.is_valid]
        return cls(
            total=len(results),
            valid=len(valid),
            errors=sum(1 for r in results if r.status == RowStatus.ERROR),
            warnings=sum(1 for r in results if r.has_warning),
            total_salary=sum((r.total_salary for r in valid), Decimal("0")),
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "valid": self.valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "totalSalary": self.total_salary,
        }


@dataclass(frozen=True)
class ImportPreview:
    results: list[PreviewRow]
    summary: ImportSummary
    config: dict = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return self.summary.errors > 0

    def to_dict(self) -> dict:
        return {
            "preview": True,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
            "config": self.config,
        }


@dataclass(frozen=True)
class ImportResult:
    imported: int
    total_salary: Decimal
    work_log_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"success": True, "imported": self.imported, "totalSalary": self.total_salary}
