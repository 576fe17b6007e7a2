from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..core.enums import GroupBy
from ..core.exceptions import ValidationError
from ..worklogs.model import WorkLog
from ..worklogs.repository import WorkLogRepository

_TENTH = Decimal("0.1")


@dataclass(frozen=True)
class Totals:
    count: int
    total_hours: Decimal
    total_base_salary: Decimal
    total_overtime_pay: Decimal
    total_allowance: Decimal
    total_salary: Decimal

    @classmethod
    def of(cls, logs: Iterable[WorkLog]) -> "Totals":
        logs = list(logs)
        zero = Decimal("0")
        return cls(
            count=len(logs),
            total_hours=sum((w.hours for w in logs), zero).quantize(_TENTH, rounding=ROUND_HALF_UP),
            total_base_salary=sum((w.base_salary for w in logs), zero),
            total_overtime_pay=sum((w.overtime_pay for w in logs), zero),
            total_allowance=sum((w.allowance for w in logs), zero),
            total_salary=sum((w.total_salary for w in logs), zero),
        )

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "totalHours": self.total_hours,
            "totalBaseSalary": self.total_base_salary,
            "totalOvertimePay": self.total_overtime_pay,
            "totalAllowance": self.total_allowance,
            "totalSalary": self.total_salary,
        }


@dataclass(frozen=True)
class GroupSummary:
    key: str
    label: str
    totals: Totals
    items: list[WorkLog]

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            **self.totals.to_dict(),
            "items": [w.to_dict() for w in self.items],
        }


@dataclass(frozen=True)
class SalaryReport:
    group_by: GroupBy
    groups: list[GroupSummary]
    grand_total: Totals
    start: Optional[date] = None
    end: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "groupBy": self.group_by.value,
            "groups": [g.to_dict() for g in self.groups],
            "grandTotal": self.grand_total.to_dict(),
            "dateRange": {
                "start": self.start.strftime("%Y-%m-%d") if self.start else None,
                "end": self.end.strftime("%Y-%m-%d") if self.end else None,
            },
        }


def group_key(log: WorkLog, group_by: GroupBy) -> str:
    if group_by == GroupBy.STAFF:
        return str(log.staff_id)
    day = log.work_date.strftime("%Y-%m-%d")
    if group_by == GroupBy.MONTH:
        return day[:7]
    return day


class PayrollReportService:
    """Salary report over persisted work logs, bucketed by staff, date or month."""

    def __init__(self, worklogs: WorkLogRepository):
        self._worklogs = worklogs

    def build_salary_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        staff_id: Optional[int] = None,
        group_by: GroupBy = GroupBy.STAFF,
    ) -> SalaryReport:
        if start and end and start > end:
            raise ValidationError("start date must not be after end date")

        logs = list(self._worklogs.list_range(start=start, end=end, staff_id=staff_id))

        buckets: dict[str, list[WorkLog]] = {}
        for w in logs:
            buckets.setdefault(group_key(w, group_by), []).append(w)

        groups: list[GroupSummary] = []
        for key, items in buckets.items():
            # staff buckets are labelled with the name from their first row
            label = (items[0].staff_name or key) if group_by == GroupBy.STAFF else key
            groups.append(GroupSummary(key=key, label=label, totals=Totals.of(items), items=items))

        return SalaryReport(
            group_by=group_by,
            groups=groups,
            grand_total=Totals.of(logs),
            start=start,
            end=end,
        )
