from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ..config import SalaryConfig


@dataclass(frozen=True)
class SalaryBreakdown:
    minutes: int
    hours: Decimal
    overtime_minutes: int
    overtime_intervals: int
    base_salary: Decimal
    overtime_pay: Decimal
    allowance: Decimal
    total_salary: Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, start_time: str, end_time: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def calculate(
        self,
        *,
        start_time: str,
        end_time: str,
        base_rate: Decimal,
        config: SalaryConfig,
        allowance: Decimal = Decimal("0"),
    ) -> SalaryBreakdown:
        raise NotImplementedError
