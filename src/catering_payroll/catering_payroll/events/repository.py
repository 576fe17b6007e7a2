from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Protocol, Sequence

from .model import Event, EventAssignment


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_for_dates(self, dates: Iterable[date]) -> Sequence[Event]:
        """Events held on any of ``dates`` with their assignments attached."""

        raise NotImplementedError

    def get_assignment(self, *, event_id: int, staff_id: int) -> Optional[EventAssignment]:
        raise NotImplementedError

    def create_assignment(
        self,
        *,
        event_id: int,
        staff_id: int,
        salary: Optional[Decimal] = None,
        role: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Insert an assignment. Returns assignment_id.

        The store enforces uniqueness on (event_id, staff_id).
        """

        raise NotImplementedError
