from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import Skill, StaffStatus


@dataclass(frozen=True)
class Staff:
    """Roster entry. Maintained by the back office; read-only here."""

    staff_id: int
    name: str
    per_event_salary: Decimal
    status: StaffStatus = StaffStatus.ACTIVE
    skill: Skill = Skill.BOTH
    phone: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == StaffStatus.ACTIVE
