from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_hhmm
from .model import Event, EventAssignment
from .repository import EventRepository


def _to_assignment(r: dict) -> EventAssignment:
    salary = r.get("salary")
    return EventAssignment(
        assignment_id=int(r["assignment_id"]),
        event_id=int(r["event_id"]),
        staff_id=int(r["staff_id"]),
        salary=Decimal(salary) if salary is not None else None,
        role=r.get("role"),
        notes=r.get("notes"),
    )


def _to_event(r: dict, assignments: Sequence[EventAssignment] = ()) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        name=r["name"],
        event_date=r["event_date"],
        start_time=mysql_time_to_hhmm(r.get("start_time")),
        assignments=tuple(assignments),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT event_id, name, event_date, start_time FROM events WHERE event_id=%s",
                (int(event_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            cur.execute(
                """
                SELECT assignment_id, event_id, staff_id, salary, role, notes
                FROM event_staff
                WHERE event_id=%s
                ORDER BY assignment_id ASC
                """,
                (int(event_id),),
            )
            return _to_event(r, [_to_assignment(a) for a in fetchall(cur)])

    def list_for_dates(self, dates: Iterable[date]) -> Sequence[Event]:
        wanted = sorted(set(dates))
        if not wanted:
            return []

        placeholders = ", ".join(["%s"] * len(wanted))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, name, event_date, start_time
                FROM events
                WHERE event_date IN ({placeholders})
                ORDER BY event_date ASC, start_time ASC, event_id ASC
                """,
                tuple(wanted),
            )
            event_rows = fetchall(cur)
            if not event_rows:
                return []

            ids = [int(r["event_id"]) for r in event_rows]
            id_placeholders = ", ".join(["%s"] * len(ids))
            cur.execute(
                f"""
                SELECT assignment_id, event_id, staff_id, salary, role, notes
                FROM event_staff
                WHERE event_id IN ({id_placeholders})
                ORDER BY assignment_id ASC
                """,
                tuple(ids),
            )
            by_event: dict[int, list[EventAssignment]] = {}
            for a in fetchall(cur):
                assignment = _to_assignment(a)
                by_event.setdefault(assignment.event_id, []).append(assignment)

            return [_to_event(r, by_event.get(int(r["event_id"]), [])) for r in event_rows]

    def get_assignment(self, *, event_id: int, staff_id: int) -> Optional[EventAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, event_id, staff_id, salary, role, notes
                FROM event_staff
                WHERE event_id=%s AND staff_id=%s
                """,
                (int(event_id), int(staff_id)),
            )
            r = fetchone(cur)
            return _to_assignment(r) if r else None

    def create_assignment(
        self,
        *,
        event_id: int,
        staff_id: int,
        salary: Optional[Decimal] = None,
        role: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO event_staff(event_id, staff_id, salary, role, notes)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(event_id), int(staff_id), salary, role, notes),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            # uq_event_staff lost a race with a concurrent assign
            raise ConflictError("staff is already assigned to this event") from e
