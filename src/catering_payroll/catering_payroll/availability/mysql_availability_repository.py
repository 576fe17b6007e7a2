from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AvailabilityRecord
from .repository import AvailabilityRepository


def _to_record(r: dict) -> AvailabilityRecord:
    return AvailabilityRecord(
        availability_id=int(r["availability_id"]),
        staff_id=int(r["staff_id"]),
        day=r["avail_date"],
        available=bool(r["available"]),
        reason=r.get("reason"),
    )


class MySQLAvailabilityRepository(AvailabilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, day: date) -> Sequence[AvailabilityRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT availability_id, staff_id, avail_date, available, reason FROM staff_availability WHERE avail_date=%s",
                (day,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_staff(
        self,
        *,
        staff_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AvailabilityRecord]:
        clauses = ["staff_id=%s"]
        params: list[object] = [int(staff_id)]
        if start is not None:
            clauses.append("avail_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("avail_date <= %s")
            params.append(end)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT availability_id, staff_id, avail_date, available, reason
                FROM staff_availability
                WHERE {where}
                ORDER BY avail_date ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert(self, *, staff_id: int, day: date, available: bool, reason: Optional[str] = None) -> AvailabilityRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_availability(staff_id, avail_date, available, reason)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE available=VALUES(available), reason=VALUES(reason)
                """,
                (int(staff_id), day, bool(available), reason),
            )
            cur.execute(
                "SELECT availability_id, staff_id, avail_date, available, reason FROM staff_availability WHERE staff_id=%s AND avail_date=%s",
                (int(staff_id), day),
            )
            return _to_record(fetchone(cur))

    def delete(self, *, staff_id: int, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff_availability WHERE staff_id=%s AND avail_date=%s", (int(staff_id), day))
            return cur.rowcount > 0
