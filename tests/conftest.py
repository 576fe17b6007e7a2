from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from src.catering_payroll.catering_payroll.availability.model import AvailabilityRecord
from src.catering_payroll.catering_payroll.core.enums import Skill, StaffStatus
from src.catering_payroll.catering_payroll.events.model import Event, EventAssignment
from src.catering_payroll.catering_payroll.staff.model import Staff
from src.catering_payroll.catering_payroll.worklogs.model import WorkLog


class FakeStaffRepo:
    def __init__(self, staff):
        self._staff = list(staff)

    def add(self, s: Staff) -> None:
        self._staff.append(s)

    def get_by_id(self, staff_id):
        return next((s for s in self._staff if s.staff_id == int(staff_id)), None)

    def list_all(self):
        return list(self._staff)

    def list_active(self, *, skill=None):
        out = [s for s in self._staff if s.status == StaffStatus.ACTIVE]
        if skill is not None:
            out = [s for s in out if s.skill == skill]
        return sorted(out, key=lambda s: s.name)


class FakeEventRepo:
    def __init__(self, events):
        self._events = {e.event_id: e for e in events}
        self._next_assignment_id = 100
        self.list_calls = 0

    def get_by_id(self, event_id):
        return self._events.get(int(event_id))

    def list_for_dates(self, dates):
        self.list_calls += 1
        wanted = set(dates)
        return [e for e in self._events.values() if e.event_date in wanted]

    def get_assignment(self, *, event_id, staff_id):
        ev = self._events.get(int(event_id))
        if not ev:
            return None
        return next((a for a in ev.assignments if a.staff_id == int(staff_id)), None)

    def create_assignment(self, *, event_id, staff_id, salary=None, role=None, notes=None):
        aid = self._next_assignment_id
        self._next_assignment_id += 1
        ev = self._events[int(event_id)]
        a = EventAssignment(assignment_id=aid, event_id=ev.event_id, staff_id=int(staff_id), salary=salary, role=role, notes=notes)
        self._events[ev.event_id] = replace(ev, assignments=ev.assignments + (a,))
        return aid


class FakeWorkLogRepo:
    def __init__(self, staff_repo=None, *, fail_on_write=False):
        self._staff_repo = staff_repo
        self._logs: dict[int, WorkLog] = {}
        self._next_id = 1
        self.fail_on_write = fail_on_write
        self.create_many_calls = 0

    def _store(self, item) -> int:
        wid = self._next_id
        self._next_id += 1
        staff = self._staff_repo.get_by_id(item.staff_id) if self._staff_repo else None
        self._logs[wid] = WorkLog(
            work_log_id=wid,
            staff_id=item.staff_id,
            work_date=item.work_date,
            start_time=item.start_time,
            end_time=item.end_time,
            hours=item.hours,
            base_salary=item.base_salary,
            overtime_pay=item.overtime_pay,
            allowance=item.allowance,
            total_salary=item.total_salary,
            source=item.source,
            event_id=item.event_id,
            notes=item.notes,
            staff_name=staff.name if staff else None,
            created_at=datetime(2024, 2, 1, 9, 0, 0),
        )
        return wid

    def create(self, item):
        return self._store(item)

    def create_many(self, items):
        self.create_many_calls += 1
        if self.fail_on_write:
            raise RuntimeError("connection lost")
        return [self._store(i) for i in items]

    def get_by_id(self, work_log_id):
        return self._logs.get(int(work_log_id))

    def list_range(self, *, start=None, end=None, staff_id=None, newest_first=False):
        out = [
            w
            for w in self._logs.values()
            if (start is None or w.work_date >= start)
            and (end is None or w.work_date <= end)
            and (staff_id is None or w.staff_id == staff_id)
        ]
        return sorted(out, key=lambda w: (w.work_date, w.start_time, w.work_log_id), reverse=newest_first)

    def update_amounts(self, *, work_log_id, overtime_pay, allowance, total_salary, notes):
        w = self._logs.get(int(work_log_id))
        if not w:
            return False
        self._logs[w.work_log_id] = replace(
            w, overtime_pay=overtime_pay, allowance=allowance, total_salary=total_salary, notes=notes
        )
        return True

    def delete(self, work_log_id):
        return self._logs.pop(int(work_log_id), None) is not None

    def all(self):
        return list(self._logs.values())


class FakeAvailabilityRepo:
    def __init__(self, records=()):
        self._records: dict[tuple[int, date], AvailabilityRecord] = {(r.staff_id, r.day): r for r in records}
        self._next_id = 100

    def list_for_date(self, day):
        return [r for (_, d), r in self._records.items() if d == day]

    def list_for_staff(self, *, staff_id, start=None, end=None):
        out = [
            r
            for (sid, d), r in self._records.items()
            if sid == staff_id and (start is None or d >= start) and (end is None or d <= end)
        ]
        return sorted(out, key=lambda r: r.day)

    def upsert(self, *, staff_id, day, available, reason=None):
        existing = self._records.get((staff_id, day))
        if existing:
            rec = replace(existing, available=available, reason=reason)
        else:
            rec = AvailabilityRecord(availability_id=self._next_id, staff_id=staff_id, day=day, available=available, reason=reason)
            self._next_id += 1
        self._records[(staff_id, day)] = rec
        return rec

    def delete(self, *, staff_id, day):
        return self._records.pop((staff_id, day), None) is not None


def _roster() -> list[Staff]:
    return [
        Staff(staff_id=1, name="王小明", per_event_salary=Decimal("2000"), skill=Skill.FRONT, phone="0912-000-001"),
        Staff(staff_id=2, name="李美華", per_event_salary=Decimal("1800"), skill=Skill.HOT),
        Staff(staff_id=3, name="陳大同", per_event_salary=Decimal("2200"), skill=Skill.BOTH),
        Staff(staff_id=4, name="林志強", per_event_salary=Decimal("1600"), status=StaffStatus.INACTIVE),
    ]


def _schedule() -> list[Event]:
    # 2024-01-15: staff 1 at 09:00 (base rate), staff 3 at 11:30 (rate override 2500)
    # 2024-01-20: staff 1 on an event with no assembly time
    return [
        Event(
            event_id=1,
            name="Wedding banquet",
            event_date=date(2024, 1, 15),
            start_time="09:00",
            assignments=(EventAssignment(assignment_id=1, event_id=1, staff_id=1),),
        ),
        Event(
            event_id=2,
            name="Corporate lunch",
            event_date=date(2024, 1, 15),
            start_time="11:30",
            assignments=(EventAssignment(assignment_id=2, event_id=2, staff_id=3, salary=Decimal("2500")),),
        ),
        Event(
            event_id=3,
            name="Year-end party",
            event_date=date(2024, 1, 20),
            start_time=None,
            assignments=(EventAssignment(assignment_id=3, event_id=3, staff_id=1),),
        ),
    ]


@pytest.fixture()
def staff_repo():
    return FakeStaffRepo(_roster())


@pytest.fixture()
def events_repo():
    return FakeEventRepo(_schedule())


@pytest.fixture()
def worklogs_repo(staff_repo):
    return FakeWorkLogRepo(staff_repo)


@pytest.fixture()
def availability_repo():
    return FakeAvailabilityRepo()
