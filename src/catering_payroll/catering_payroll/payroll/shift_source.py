from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import is_valid_time, parse_iso_date
from ..core.enums import RowErrorCode, RowWarningCode
from ..events.model import Event
from ..events.repository import EventRepository


@dataclass(frozen=True)
class ScheduledShift:
    event_id: int
    event_name: str
    start_time: Optional[str]
    assigned_rate: Optional[Decimal]


@dataclass(frozen=True)
class ShiftSource:
    start_time: str = ""
    event_id: Optional[int] = None
    event_name: Optional[str] = None
    rate_override: Optional[Decimal] = None
    warning_code: Optional[RowWarningCode] = None
    warning: Optional[str] = None
    error_code: Optional[RowErrorCode] = None
    error: Optional[str] = None

    @property
    def from_schedule(self) -> bool:
        return self.event_id is not None


def _sort_key(ev: Event) -> tuple:
    # earliest assembly time wins; events without one go last
    return (ev.start_time is None, ev.start_time or "", ev.event_id)


class ShiftSourceResolver:
    """Decide where a row's shift start comes from.

    Event assignments are authoritative: the event's assembly time is the
    start and an assignment pay override replaces the staff base rate. Only
    when no assignment exists does the row's own clock-in count.
    """

    def __init__(self, schedule: dict[tuple[str, int], ScheduledShift]):
        self._schedule = schedule

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "ShiftSourceResolver":
        schedule: dict[tuple[str, int], ScheduledShift] = {}
        for ev in sorted(events, key=_sort_key):
            day = ev.event_date.isoformat()
            for a in ev.assignments:
                schedule.setdefault(
                    (day, a.staff_id),
                    ScheduledShift(
                        event_id=ev.event_id,
                        event_name=ev.name,
                        start_time=ev.start_time,
                        assigned_rate=a.salary,
                    ),
                )
        return cls(schedule)

    @classmethod
    def prefetch(cls, events: EventRepository, dates: Iterable[str]) -> "ShiftSourceResolver":
        """One lookup for all distinct valid dates of a batch."""
        wanted: set[date] = set()
        for d in dates:
            try:
                wanted.add(parse_iso_date(d))
            except (TypeError, ValueError):
                continue
        if not wanted:
            return cls({})
        return cls.from_events(events.list_for_dates(sorted(wanted)))

    def lookup(self, day: str, staff_id: int) -> Optional[ScheduledShift]:
        return self._schedule.get((day, staff_id))

    def resolve(self, *, day: str, staff_id: int, clock_in: str) -> ShiftSource:
        scheduled = self.lookup(day, staff_id)
        usable_clock_in = clock_in if is_valid_time(clock_in) else ""

        if scheduled is not None:
            if scheduled.start_time and is_valid_time(scheduled.start_time):
                return ShiftSource(
                    start_time=scheduled.start_time,
                    event_id=scheduled.event_id,
                    event_name=scheduled.event_name,
                    rate_override=scheduled.assigned_rate,
                )
            if usable_clock_in:
                return ShiftSource(
                    start_time=usable_clock_in,
                    event_id=scheduled.event_id,
                    event_name=scheduled.event_name,
                    rate_override=scheduled.assigned_rate,
                    warning_code=RowWarningCode.NO_ASSEMBLY_TIME,
                    warning=f"event '{scheduled.event_name}' has no assembly time; clock-in used",
                )
            return ShiftSource(
                event_id=scheduled.event_id,
                event_name=scheduled.event_name,
                error_code=RowErrorCode.MISSING_SHIFT_START,
                error=f"event '{scheduled.event_name}' has no assembly time and no clock-in was given",
            )

        if usable_clock_in:
            return ShiftSource(
                start_time=usable_clock_in,
                warning_code=RowWarningCode.NO_MATCHING_SCHEDULE,
                warning="no matching schedule found",
            )

        if clock_in:
            return ShiftSource(
                start_time=clock_in,
                error_code=RowErrorCode.INVALID_TIME,
                error=f"invalid clock-in time: {clock_in}",
            )

        return ShiftSource(
            error_code=RowErrorCode.MISSING_SHIFT_START,
            error="no matching schedule found and no clock-in time",
        )
