from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import Skill
from ..events.model import ConflictingEvent


@dataclass(frozen=True)
class AvailabilityRecord:
    """Explicit (staff, date) availability; no record means available."""

    availability_id: int
    staff_id: int
    day: date
    available: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.availability_id,
            "staffId": self.staff_id,
            "date": self.day.strftime("%Y-%m-%d"),
            "available": self.available,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class StaffAvailability:
    staff_id: int
    name: str
    phone: Optional[str]
    skill: Skill
    per_event_salary: Decimal
    is_available: bool
    unavailable_reason: Optional[str] = None
    conflicts: tuple[ConflictingEvent, ...] = field(default_factory=tuple)

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> dict:
        return {
            "id": self.staff_id,
            "name": self.name,
            "phone": self.phone,
            "skill": self.skill.value,
            "perEventSalary": self.per_event_salary,
            "isAvailable": self.is_available,
            "unavailableReason": self.unavailable_reason,
            "hasConflict": self.has_conflict,
            "conflicts": [
                {"eventId": c.event_id, "eventTitle": c.event_name, "startTime": c.start_time}
                for c in self.conflicts
            ],
        }


@dataclass(frozen=True)
class AvailabilityReport:
    day: date
    available: list[StaffAvailability]
    unavailable: list[StaffAvailability]
    conflicting: list[StaffAvailability]

    @property
    def total(self) -> int:
        return len(self.available) + len(self.unavailable) + len(self.conflicting)

    def to_dict(self) -> dict:
        return {
            "date": self.day.strftime("%Y-%m-%d"),
            "available": [s.to_dict() for s in self.available],
            "unavailable": [s.to_dict() for s in self.unavailable],
            "conflicting": [s.to_dict() for s in self.conflicting],
            "summary": {
                "total": self.total,
                "available": len(self.available),
                "unavailable": len(self.unavailable),
                "conflicting": len(self.conflicting),
            },
        }
