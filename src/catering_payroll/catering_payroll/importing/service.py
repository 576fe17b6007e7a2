from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import is_valid_date, is_valid_time, normalize_date, normalize_time, parse_iso_date
from ..core.enums import RowErrorCode, RowStatus, WorkLogSource
from ..core.exceptions import BatchRejectedError, PersistenceError, ValidationError
from ..events.repository import EventRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.config import SalaryConfig
from ..payroll.shift_source import ShiftSourceResolver
from ..staff.repository import StaffRepository
from ..staff.resolver import StaffResolver
from ..worklogs.model import NewWorkLog
from ..worklogs.repository import WorkLogRepository
from .model import ImportPreview, ImportResult, ImportRow, ImportSummary, PreviewRow
from .parser import parse_rows

logger = logging.getLogger(__name__)


def evaluate_row(
    index: int,
    row: ImportRow,
    *,
    staff: StaffResolver,
    shifts: ShiftSourceResolver,
    config: SalaryConfig,
    calculator: PayrollCalculator,
) -> PreviewRow:
    """Run one row through normalize -> staff -> shift source -> validate -> calculate.

    Pure with respect to storage: everything it needs is pre-loaded in the
    resolvers, so preview and confirm cannot disagree.
    """
    day = normalize_date(row.date_raw)
    clock_in = normalize_time(row.clock_in_raw)
    end_time = normalize_time(row.clock_out_raw)

    out = PreviewRow(
        row=index,
        staff_name=row.staff_name,
        date=day,
        clock_in=clock_in,
        start_time=clock_in,
        end_time=end_time,
        notes=row.notes,
    )

    match = staff.resolve(row.staff_name, staff_id=row.staff_id)
    if not match.ok:
        return out.fail(match.error_code, match.error)
    out.staff_id = match.staff_id
    out.staff_name = match.name

    if not is_valid_date(day):
        raw = "" if row.date_raw is None else str(row.date_raw)
        return out.fail(RowErrorCode.INVALID_DATE, f"invalid date: {raw}")

    source = shifts.resolve(day=day, staff_id=match.staff_id, clock_in=clock_in)
    out.event_id = source.event_id
    out.event_name = source.event_name
    if source.warning_code:
        out.warn(source.warning_code, source.warning)
    if source.error_code:
        return out.fail(source.error_code, source.error)
    out.start_time = source.start_time

    if not is_valid_time(end_time):
        return out.fail(RowErrorCode.INVALID_TIME, f"invalid time: {out.start_time} - {end_time or '(missing clock-out)'}")

    if row.bad_amounts:
        return out.fail(RowErrorCode.INVALID_AMOUNT, f"invalid amount: {', '.join(row.bad_amounts)}")
    if row.allowance < 0:
        return out.fail(RowErrorCode.INVALID_AMOUNT, f"allowance cannot be negative: {row.allowance}")
    if row.overtime_rate is not None and row.overtime_rate < 0:
        return out.fail(RowErrorCode.INVALID_AMOUNT, f"overtime rate cannot be negative: {row.overtime_rate}")

    base_rate = source.rate_override if source.rate_override is not None else match.base_rate
    row_config = config.with_rate(row.overtime_rate)
    calc = calculator.calculate(
        start_time=out.start_time,
        end_time=end_time,
        base_rate=base_rate,
        config=row_config,
        allowance=row.allowance,
    )

    out.hours = calc.hours
    out.base_salary = calc.base_salary
    out.overtime_minutes = calc.overtime_minutes
    out.overtime_intervals = calc.overtime_intervals
    out.overtime_rate = row_config.overtime_rate
    out.overtime_pay = calc.overtime_pay
    out.allowance = calc.allowance
    out.total_salary = calc.total_salary
    out.status = RowStatus.VALID
    return out


class WorkLogImportService:
    """Two-phase timesheet import: ``preview`` reports, ``confirm`` commits.

    Both run the same evaluation. ``confirm`` persists only when every row is
    valid, and then writes all rows in a single atomic call.
    """

    def __init__(
        self,
        staff: StaffRepository,
        events: EventRepository,
        worklogs: WorkLogRepository,
        *,
        salary_config: Optional[SalaryConfig] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._staff = staff
        self._events = events
        self._worklogs = worklogs
        self._config = salary_config or SalaryConfig()
        self._calculator = calculator or StandardPayrollCalculator()

    @property
    def salary_config(self) -> SalaryConfig:
        return self._config

    def evaluate(self, raws: Sequence[Mapping[str, Any]], *, overtime_rate: Optional[Decimal] = None) -> ImportPreview:
        if not raws:
            raise ValidationError("no rows to import")

        rows = parse_rows(raws)
        config = self._config.with_rate(overtime_rate)

        staff = StaffResolver.load(self._staff)
        shifts = ShiftSourceResolver.prefetch(self._events, self._candidate_dates(rows))

        results = [
            evaluate_row(row.line or i, row, staff=staff, shifts=shifts, config=config, calculator=self._calculator)
            for i, row in enumerate(rows, start=1)
        ]
        return ImportPreview(results=results, summary=ImportSummary.of(results), config=config.to_dict())

    def preview(self, raws: Sequence[Mapping[str, Any]], *, overtime_rate: Optional[Decimal] = None) -> ImportPreview:
        preview = self.evaluate(raws, overtime_rate=overtime_rate)
        s = preview.summary
        logger.info(
            "import preview: total=%d valid=%d errors=%d warnings=%d salary=%s",
            s.total, s.valid, s.errors, s.warnings, s.total_salary,
        )
        return preview

    def confirm(self, raws: Sequence[Mapping[str, Any]], *, overtime_rate: Optional[Decimal] = None) -> ImportResult:
        preview = self.evaluate(raws, overtime_rate=overtime_rate)
        s = preview.summary

        if preview.has_errors:
            logger.warning("import rejected: %d of %d rows in error", s.errors, s.total)
            raise BatchRejectedError(
                "batch contains invalid rows; fix them and resubmit",
                results=preview.results,
                summary={"valid": s.valid, "errors": s.errors},
            )

        items = [self._to_new_worklog(r) for r in preview.results]
        try:
            ids = self._worklogs.create_many(items)
        except Exception as e:
            logger.exception("import aborted: atomic write of %d work logs failed", len(items))
            raise PersistenceError("import failed while saving; nothing was saved") from e

        logger.info("import committed: %d work logs, salary=%s", len(ids), s.total_salary)
        return ImportResult(imported=len(ids), total_salary=s.total_salary, work_log_ids=list(ids))

    @staticmethod
    def _candidate_dates(rows: Iterable[ImportRow]) -> set[str]:
        out: set[str] = set()
        for r in rows:
            d = normalize_date(r.date_raw)
            if is_valid_date(d):
                out.add(d)
        return out

    @staticmethod
    def _to_new_worklog(r: PreviewRow) -> NewWorkLog:
        return NewWorkLog(
            staff_id=int(r.staff_id),
            work_date=parse_iso_date(r.date),
            start_time=r.start_time,
            end_time=r.end_time,
            hours=r.hours,
            base_salary=r.base_salary,
            overtime_pay=r.overtime_pay,
            allowance=r.allowance,
            total_salary=r.total_salary,
            source=WorkLogSource.IMPORT,
            event_id=r.event_id,
            notes=r.notes or None,
        )
