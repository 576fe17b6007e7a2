from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...common.datetime_utils import to_minutes
from ...core.constants import MINUTES_PER_DAY
from ..config import SalaryConfig
from .base import PayrollCalculator, SalaryBreakdown

_TENTH = Decimal("0.1")
_CENT = Decimal("0.01")


def round_hours(minutes: int) -> Decimal:
    """Minutes -> hours to the nearest tenth (6-minute units, halves round up)."""
    return (Decimal(minutes) / Decimal(60)).quantize(_TENTH, rounding=ROUND_HALF_UP)


def round_money(amount: Decimal) -> Decimal:
    """Amounts are stored as DECIMAL(10, 2); round each part before it is summed."""
    return Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Flat per-shift rate plus tiered overtime.

    - end before start means the shift ended after midnight (one wrap only)
    - short shifts still earn the full base rate
    - overtime accrues per whole interval past the base hours; the remainder is unpaid
    """

    def worked_minutes(self, start_time: str, end_time: str) -> int:
        start = to_minutes(start_time)
        end = to_minutes(end_time)
        if end < start:
            end += MINUTES_PER_DAY
        return end - start

    def calculate(
        self,
        *,
        start_time: str,
        end_time: str,
        base_rate: Decimal,
        config: SalaryConfig,
        allowance: Decimal = Decimal("0"),
    ) -> SalaryBreakdown:
        minutes = self.worked_minutes(start_time, end_time)

        overtime_minutes = 0
        overtime_intervals = 0
        if minutes > config.base_minutes:
            overtime_minutes = minutes - config.base_minutes
            overtime_intervals = overtime_minutes // config.overtime_interval
        base_salary = round_money(base_rate)
        overtime_pay = round_money(overtime_intervals * config.overtime_rate)
        allowance = round_money(allowance)

        return SalaryBreakdown(
            minutes=minutes,
            hours=round_hours(minutes),
            overtime_minutes=overtime_minutes,
            overtime_intervals=overtime_intervals,
            base_salary=base_salary,
            overtime_pay=overtime_pay,
            allowance=allowance,
            total_salary=base_salary + overtime_pay + allowance,
        )
