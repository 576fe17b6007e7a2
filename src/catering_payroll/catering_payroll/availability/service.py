from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.enums import Skill
from ..core.exceptions import NotFoundError, ValidationError
from ..events.repository import EventRepository
from ..events.service import same_day_conflicts
from ..staff.repository import StaffRepository
from .model import AvailabilityRecord, AvailabilityReport, StaffAvailability
from .repository import AvailabilityRepository

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Who can work on a given day.

    Every active staff member lands in exactly one bucket:
    - unavailable: explicitly blocked for the day (wins over any booking)
    - conflicting: available but already booked on an event that day
    - available: neither
    """

    def __init__(self, availability: AvailabilityRepository, staff: StaffRepository, events: EventRepository):
        self._availability = availability
        self._staff = staff
        self._events = events

    def resolve(self, day: date, *, skill: Optional[Skill] = None) -> AvailabilityReport:
        roster = self._staff.list_active(skill=skill)
        records = {r.staff_id: r for r in self._availability.list_for_date(day)}
        events = list(self._events.list_for_dates([day]))

        available: list[StaffAvailability] = []
        unavailable: list[StaffAvailability] = []
        conflicting: list[StaffAvailability] = []

        for s in roster:
            rec = records.get(s.staff_id)
            is_available = rec is None or rec.available
            entry = StaffAvailability(
                staff_id=s.staff_id,
                name=s.name,
                phone=s.phone,
                skill=s.skill,
                per_event_salary=s.per_event_salary,
                is_available=is_available,
                unavailable_reason=rec.reason if rec else None,
                conflicts=tuple(same_day_conflicts(events, staff_id=s.staff_id)),
            )

            if not entry.is_available:
                unavailable.append(entry)
            elif entry.has_conflict:
                conflicting.append(entry)
            else:
                available.append(entry)

        return AvailabilityReport(day=day, available=available, unavailable=unavailable, conflicting=conflicting)

    def set_availability(
        self,
        *,
        staff_id: int,
        day: date,
        available: bool,
        reason: Optional[str] = None,
    ) -> AvailabilityRecord:
        if not self._staff.get_by_id(int(staff_id)):
            raise NotFoundError(f"staff not found: #{staff_id}")

        reason = (reason or "").strip() or None
        record = self._availability.upsert(staff_id=int(staff_id), day=day, available=bool(available), reason=reason)
        logger.info("availability for staff #%s on %s set to %s", staff_id, day, "available" if available else "unavailable")
        return record

    def list_for_staff(
        self,
        *,
        staff_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AvailabilityRecord]:
        if start and end and start > end:
            raise ValidationError("start date must not be after end date")
        return self._availability.list_for_staff(staff_id=int(staff_id), start=start, end=end)

    def clear(self, *, staff_id: int, day: date) -> None:
        if not self._availability.delete(staff_id=int(staff_id), day=day):
            raise NotFoundError(f"no availability record for staff #{staff_id} on {day.isoformat()}")
