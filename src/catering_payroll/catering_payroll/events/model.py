from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class EventAssignment:
    """A staff member booked on an event; at most one per (event, staff)."""

    assignment_id: int
    event_id: int
    staff_id: int
    salary: Optional[Decimal] = None  # per-assignment pay override
    role: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Event:
    event_id: int
    name: str
    event_date: date
    start_time: Optional[str] = None  # assembly time, HH:mm
    assignments: tuple[EventAssignment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ConflictingEvent:
    event_id: int
    event_name: str
    event_date: date
    start_time: Optional[str] = None
