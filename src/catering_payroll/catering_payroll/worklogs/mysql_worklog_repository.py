from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import WorkLogSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_hhmm
from .model import NewWorkLog, WorkLog
from .repository import WorkLogRepository

_SELECT = """
    SELECT
        w.work_log_id, w.staff_id, w.work_date, w.start_time, w.end_time, w.hours,
        w.base_salary, w.overtime_pay, w.allowance, w.total_salary,
        w.source, w.event_id, w.notes, w.created_at,
        s.name AS staff_name,
        e.name AS event_name
    FROM work_logs w
    JOIN staff s ON s.staff_id = w.staff_id
    LEFT JOIN events e ON e.event_id = w.event_id
"""

_INSERT = """
    INSERT INTO work_logs(
        staff_id, work_date, start_time, end_time, hours,
        base_salary, overtime_pay, allowance, total_salary,
        source, event_id, notes
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _params(item: NewWorkLog) -> tuple:
    return (
        int(item.staff_id),
        item.work_date,
        item.start_time,
        item.end_time,
        item.hours,
        item.base_salary,
        item.overtime_pay,
        item.allowance,
        item.total_salary,
        item.source.value,
        item.event_id,
        item.notes,
    )


def _to_worklog(r: dict) -> WorkLog:
    return WorkLog(
        work_log_id=int(r["work_log_id"]),
        staff_id=int(r["staff_id"]),
        work_date=r["work_date"],
        start_time=mysql_time_to_hhmm(r["start_time"]) or "",
        end_time=mysql_time_to_hhmm(r["end_time"]) or "",
        hours=Decimal(r["hours"]),
        base_salary=Decimal(r["base_salary"]),
        overtime_pay=Decimal(r["overtime_pay"]),
        allowance=Decimal(r["allowance"]),
        total_salary=Decimal(r["total_salary"]),
        source=WorkLogSource(r["source"]),
        event_id=r.get("event_id"),
        notes=r.get("notes"),
        staff_name=r.get("staff_name"),
        event_name=r.get("event_name"),
        created_at=r.get("created_at"),
    )


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, item: NewWorkLog) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _params(item))
            return int(cur.lastrowid)

    def create_many(self, items: Sequence[NewWorkLog]) -> list[int]:
        # Row-by-row inside one transaction so every lastrowid is known;
        # db_cursor rolls the whole batch back on any failure.
        ids: list[int] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for item in items:
                cur.execute(_INSERT, _params(item))
                ids.append(int(cur.lastrowid))
        return ids

    def get_by_id(self, work_log_id: int) -> Optional[WorkLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE w.work_log_id=%s", (int(work_log_id),))
            r = fetchone(cur)
            return _to_worklog(r) if r else None

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        staff_id: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[WorkLog]:
        clauses: list[str] = []
        params: list[object] = []
        if start is not None:
            clauses.append("w.work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("w.work_date <= %s")
            params.append(end)
        if staff_id is not None:
            clauses.append("w.staff_id = %s")
            params.append(int(staff_id))

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        order = "DESC" if newest_first else "ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT}{where} ORDER BY w.work_date {order}, w.start_time {order}, w.work_log_id {order}",
                tuple(params),
            )
            return [_to_worklog(r) for r in fetchall(cur)]

    def update_amounts(
        self,
        *,
        work_log_id: int,
        overtime_pay: Decimal,
        allowance: Decimal,
        total_salary: Decimal,
        notes: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_logs
                SET overtime_pay=%s, allowance=%s, total_salary=%s, notes=%s
                WHERE work_log_id=%s
                """,
                (overtime_pay, allowance, total_salary, notes, int(work_log_id)),
            )
            return cur.rowcount > 0

    def delete(self, work_log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_logs WHERE work_log_id=%s", (int(work_log_id),))
            return cur.rowcount > 0
