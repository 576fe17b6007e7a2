from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.validators import parse_decimal
from ..core.constants import (
    DEFAULT_BASE_HOURS,
    DEFAULT_OVERTIME_INTERVAL_MINUTES,
    DEFAULT_OVERTIME_RATE,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class SalaryConfig:
    """Overtime policy value passed explicitly into every calculation.

    ``base_hours`` are covered by the flat per-shift rate; time beyond that
    earns ``overtime_rate`` per full ``overtime_interval`` minutes.
    """

    base_hours: int = DEFAULT_BASE_HOURS
    overtime_interval: int = DEFAULT_OVERTIME_INTERVAL_MINUTES
    overtime_rate: Decimal = Decimal(DEFAULT_OVERTIME_RATE)

    def __post_init__(self):
        if self.base_hours < 0:
            raise ValidationError("base_hours cannot be negative")
        if self.overtime_interval <= 0:
            raise ValidationError("overtime_interval must be positive")
        if self.overtime_rate < 0:
            raise ValidationError("overtime_rate cannot be negative")

    @property
    def base_minutes(self) -> int:
        return int(self.base_hours) * 60

    def with_rate(self, rate: Optional[Decimal]) -> "SalaryConfig":
        if rate is None or rate == self.overtime_rate:
            return self
        return replace(self, overtime_rate=rate)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SalaryConfig":
        """Build from the ``SALARY_CONFIG`` settings dict; missing keys keep defaults."""
        data = data or {}
        return cls(
            base_hours=int(data.get("base_hours", DEFAULT_BASE_HOURS)),
            overtime_interval=int(data.get("overtime_interval", DEFAULT_OVERTIME_INTERVAL_MINUTES)),
            overtime_rate=parse_decimal(data.get("overtime_rate", DEFAULT_OVERTIME_RATE), "overtime_rate"),
        )

    def to_dict(self) -> dict:
        return {
            "baseHours": self.base_hours,
            "overtimeInterval": self.overtime_interval,
            "overtimeRate": self.overtime_rate,
        }
