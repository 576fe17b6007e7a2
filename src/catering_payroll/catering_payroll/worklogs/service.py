from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import is_valid_time, normalize_time
from ..common.validators import require_non_negative
from ..core.enums import WorkLogSource
from ..core.exceptions import NotFoundError, ValidationError
from ..events.repository import EventRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator, round_money
from ..payroll.config import SalaryConfig
from ..staff.repository import StaffRepository
from .model import NewWorkLog, WorkLog
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)

_UNSET = object()


class WorkLogService:
    """Manual entry and adjustment of persisted payroll records."""

    def __init__(
        self,
        worklogs: WorkLogRepository,
        staff: StaffRepository,
        events: Optional[EventRepository] = None,
        *,
        salary_config: Optional[SalaryConfig] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._worklogs = worklogs
        self._staff = staff
        self._events = events
        self._config = salary_config or SalaryConfig()
        self._calculator = calculator or StandardPayrollCalculator()

    def create_manual(
        self,
        *,
        staff_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        allowance: Decimal = Decimal("0"),
        overtime_rate: Optional[Decimal] = None,
        event_id: Optional[int] = None,
        notes: Optional[str] = None,
        source: WorkLogSource = WorkLogSource.MANUAL,
    ) -> WorkLog:
        if source == WorkLogSource.IMPORT:
            raise ValidationError("imported records must go through the import workflow")

        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise NotFoundError(f"staff not found: #{staff_id}")

        start = normalize_time(start_time)
        end = normalize_time(end_time)
        if not is_valid_time(start) or not is_valid_time(end):
            raise ValidationError(f"invalid time: {start_time} - {end_time} (expected HH:mm)")

        require_non_negative(allowance, "allowance")
        if overtime_rate is not None:
            require_non_negative(overtime_rate, "overtime_rate")

        if event_id is not None and self._events is not None and not self._events.get_by_id(int(event_id)):
            raise NotFoundError(f"event not found: #{event_id}")

        calc = self._calculator.calculate(
            start_time=start,
            end_time=end,
            base_rate=staff.per_event_salary,
            config=self._config.with_rate(overtime_rate),
            allowance=allowance,
        )

        work_log_id = self._worklogs.create(
            NewWorkLog(
                staff_id=staff.staff_id,
                work_date=work_date,
                start_time=start,
                end_time=end,
                hours=calc.hours,
                base_salary=calc.base_salary,
                overtime_pay=calc.overtime_pay,
                allowance=calc.allowance,
                total_salary=calc.total_salary,
                source=source,
                event_id=event_id,
                notes=(notes or "").strip() or None,
            )
        )
        logger.info(
            "work log #%s created for staff #%s on %s (total=%s, source=%s)",
            work_log_id, staff.staff_id, work_date, calc.total_salary, source.value,
        )
        return self.get(work_log_id)

    def adjust(
        self,
        *,
        work_log_id: int,
        overtime_pay: Optional[Decimal] = None,
        allowance: Optional[Decimal] = None,
        notes=_UNSET,
    ) -> WorkLog:
        """Override overtime pay and/or allowance; the total is always recomputed."""
        existing = self.get(work_log_id)

        new_overtime = existing.overtime_pay if overtime_pay is None else round_money(require_non_negative(overtime_pay, "overtime_pay"))
        new_allowance = existing.allowance if allowance is None else round_money(require_non_negative(allowance, "allowance"))
        new_notes = existing.notes if notes is _UNSET else ((notes or "").strip() or None)
        total = existing.base_salary + new_overtime + new_allowance

        self._worklogs.update_amounts(
            work_log_id=existing.work_log_id,
            overtime_pay=new_overtime,
            allowance=new_allowance,
            total_salary=total,
            notes=new_notes,
        )
        logger.info(
            "work log #%s adjusted: overtime %s -> %s, allowance %s -> %s",
            existing.work_log_id, existing.overtime_pay, new_overtime, existing.allowance, new_allowance,
        )
        return self.get(existing.work_log_id)

    def get(self, work_log_id: int) -> WorkLog:
        log = self._worklogs.get_by_id(int(work_log_id))
        if not log:
            raise NotFoundError(f"work log not found: #{work_log_id}")
        return log

    def list(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        staff_id: Optional[int] = None,
    ) -> Sequence[WorkLog]:
        if start and end and start > end:
            raise ValidationError("start date must not be after end date")
        return self._worklogs.list_range(start=start, end=end, staff_id=staff_id, newest_first=True)

    def delete(self, work_log_id: int) -> None:
        if not self._worklogs.delete(int(work_log_id)):
            raise NotFoundError(f"work log not found: #{work_log_id}")
