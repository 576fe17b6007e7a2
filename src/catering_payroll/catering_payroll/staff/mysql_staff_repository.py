from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Skill, StaffStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Staff
from .repository import StaffRepository

_COLUMNS = "staff_id, name, per_event_salary, status, skill, phone"


def _to_staff(r: dict) -> Staff:
    return Staff(
        staff_id=int(r["staff_id"]),
        name=r["name"],
        per_event_salary=Decimal(r["per_event_salary"] or 0),
        status=StaffStatus(r["status"]),
        skill=Skill(r["skill"]),
        phone=r.get("phone"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE staff_id=%s", (int(staff_id),))
            r = fetchone(cur)
            return _to_staff(r) if r else None

    def list_all(self) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY staff_id ASC")
            return [_to_staff(r) for r in fetchall(cur)]

    def list_active(self, *, skill: Optional[Skill] = None) -> Sequence[Staff]:
        clauses = ["status=%s"]
        params: list[object] = [StaffStatus.ACTIVE.value]
        if skill is not None:
            clauses.append("skill=%s")
            params.append(skill.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE {where} ORDER BY name ASC", tuple(params))
            return [_to_staff(r) for r in fetchall(cur)]
