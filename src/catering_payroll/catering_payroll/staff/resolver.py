from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import RowErrorCode
from .model import Staff
from .repository import StaffRepository


@dataclass(frozen=True)
class StaffMatch:
    staff_id: Optional[int] = None
    name: str = ""
    base_rate: Decimal = Decimal("0")
    error_code: Optional[RowErrorCode] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_code is None


class StaffResolver:
    """Exact, case-sensitive name -> staff lookup built once per batch.

    Inactive staff are matched too (old timesheets still reference them).
    A name shared by several staff is ambiguous and only an explicit staff id
    can resolve it.
    """

    def __init__(self, roster: Sequence[Staff]):
        by_name: dict[str, list[Staff]] = defaultdict(list)
        for s in roster:
            by_name[s.name].append(s)
        self._by_name = dict(by_name)
        self._by_id = {s.staff_id: s for s in roster}

    @classmethod
    def load(cls, staff: StaffRepository) -> "StaffResolver":
        return cls(staff.list_all())

    @property
    def ambiguous_names(self) -> list[str]:
        return sorted(name for name, matches in self._by_name.items() if len(matches) > 1)

    def resolve(self, name: str, *, staff_id: Optional[int] = None) -> StaffMatch:
        if staff_id is not None:
            s = self._by_id.get(staff_id)
            if s is None:
                return StaffMatch(
                    name=name,
                    error_code=RowErrorCode.UNKNOWN_STAFF,
                    error=f"staff not found: #{staff_id}",
                )
            return StaffMatch(staff_id=s.staff_id, name=s.name, base_rate=s.per_event_salary)

        if not name:
            return StaffMatch(error_code=RowErrorCode.MISSING_STAFF_NAME, error="missing staff name")

        matches = self._by_name.get(name)
        if not matches:
            return StaffMatch(name=name, error_code=RowErrorCode.UNKNOWN_STAFF, error=f"staff not found: {name}")
        if len(matches) > 1:
            ids = ", ".join(f"#{s.staff_id}" for s in matches)
            return StaffMatch(
                name=name,
                error_code=RowErrorCode.AMBIGUOUS_STAFF,
                error=f"staff name is ambiguous: {name} ({ids}); provide a staff id",
            )

        s = matches[0]
        return StaffMatch(staff_id=s.staff_id, name=s.name, base_rate=s.per_event_salary)
