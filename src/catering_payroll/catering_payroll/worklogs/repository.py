from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import NewWorkLog, WorkLog


class WorkLogRepository(Protocol):
    def create(self, item: NewWorkLog) -> int:
        raise NotImplementedError

    def create_many(self, items: Sequence[NewWorkLog]) -> list[int]:
        """Insert every item in one transaction.

        Either all rows are committed or none are; a failure re-raises after
        rollback. Returns the new ids in input order.
        """

        raise NotImplementedError

    def get_by_id(self, work_log_id: int) -> Optional[WorkLog]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        staff_id: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[WorkLog]:
        """Work logs joined with staff/event names, ordered by date then start time."""

        raise NotImplementedError

    def update_amounts(
        self,
        *,
        work_log_id: int,
        overtime_pay: Decimal,
        allowance: Decimal,
        total_salary: Decimal,
        notes: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete(self, work_log_id: int) -> bool:
        raise NotImplementedError
