from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import WorkLogSource


@dataclass(frozen=True)
class NewWorkLog:
    """Insert payload for one payroll record."""

    staff_id: int
    work_date: date
    start_time: str
    end_time: str
    hours: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    allowance: Decimal
    total_salary: Decimal
    source: WorkLogSource
    event_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class WorkLog:
    """Persisted payroll record (domain entity)."""

    work_log_id: int
    staff_id: int
    work_date: date
    start_time: str
    end_time: str
    hours: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    allowance: Decimal
    total_salary: Decimal
    source: WorkLogSource
    event_id: Optional[int] = None
    notes: Optional[str] = None
    staff_name: Optional[str] = None
    event_name: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.work_log_id,
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "hours": self.hours,
            "eventId": self.event_id,
            "eventName": self.event_name,
            "baseSalary": self.base_salary,
            "overtimePay": self.overtime_pay,
            "allowance": self.allowance,
            "totalSalary": self.total_salary,
            "source": self.source.value,
            "notes": self.notes,
        }
