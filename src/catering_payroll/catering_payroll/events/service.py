from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.validators import require_non_negative
from ..core.exceptions import ConflictError, NotFoundError
from ..staff.repository import StaffRepository
from .model import ConflictingEvent, Event
from .repository import EventRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentResult:
    assignment_id: int
    event_id: int
    staff_id: int
    salary: Optional[Decimal]
    conflicts: list[ConflictingEvent]


def same_day_conflicts(events: list[Event], *, staff_id: int, exclude_event_id: Optional[int] = None) -> list[ConflictingEvent]:
    """Events in ``events`` that already have ``staff_id`` booked."""
    out: list[ConflictingEvent] = []
    for ev in events:
        if exclude_event_id is not None and ev.event_id == exclude_event_id:
            continue
        if any(a.staff_id == staff_id for a in ev.assignments):
            out.append(
                ConflictingEvent(
                    event_id=ev.event_id,
                    event_name=ev.name,
                    event_date=ev.event_date,
                    start_time=ev.start_time,
                )
            )
    return out


class EventStaffService:
    def __init__(self, events: EventRepository, staff: StaffRepository):
        self._events = events
        self._staff = staff

    def assign(
        self,
        *,
        event_id: int,
        staff_id: int,
        salary: Optional[Decimal] = None,
        role: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> AssignmentResult:
        """Book a staff member on an event.

        Same-day bookings elsewhere do not block the assignment; they are
        returned so the scheduler can decide.
        """
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError(f"event not found: #{event_id}")

        if not self._staff.get_by_id(int(staff_id)):
            raise NotFoundError(f"staff not found: #{staff_id}")

        if self._events.get_assignment(event_id=event.event_id, staff_id=int(staff_id)):
            raise ConflictError("staff is already assigned to this event")

        if salary is not None:
            require_non_negative(salary, "salary")

        conflicts = self.conflicts_on(event.event_date, staff_id=int(staff_id), exclude_event_id=event.event_id)

        assignment_id = self._events.create_assignment(
            event_id=event.event_id,
            staff_id=int(staff_id),
            salary=salary,
            role=role,
            notes=(notes or "").strip() or None,
        )
        if conflicts:
            logger.info(
                "staff #%s assigned to event #%s with %d same-day conflict(s)",
                staff_id, event.event_id, len(conflicts),
            )

        return AssignmentResult(
            assignment_id=assignment_id,
            event_id=event.event_id,
            staff_id=int(staff_id),
            salary=salary,
            conflicts=conflicts,
        )

    def conflicts_on(self, day: date, *, staff_id: int, exclude_event_id: Optional[int] = None) -> list[ConflictingEvent]:
        events = list(self._events.list_for_dates([day]))
        return same_day_conflicts(events, staff_id=staff_id, exclude_event_id=exclude_event_id)
