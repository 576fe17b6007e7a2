from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AvailabilityRecord


class AvailabilityRepository(Protocol):
    def list_for_date(self, day: date) -> Sequence[AvailabilityRecord]:
        raise NotImplementedError

    def list_for_staff(
        self,
        *,
        staff_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AvailabilityRecord]:
        raise NotImplementedError

    def upsert(self, *, staff_id: int, day: date, available: bool, reason: Optional[str] = None) -> AvailabilityRecord:
        """Create or replace the record for (staff_id, day).

        Relies on the store's unique key on (staff_id, day) so concurrent
        writers cannot create duplicates.
        """

        raise NotImplementedError

    def delete(self, *, staff_id: int, day: date) -> bool:
        raise NotImplementedError
