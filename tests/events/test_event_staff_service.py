from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.catering_payroll.catering_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.catering_payroll.catering_payroll.events.service import EventStaffService


@pytest.fixture()
def service(events_repo, staff_repo):
    return EventStaffService(events_repo, staff_repo)


def test_assign_without_conflicts(service, events_repo):
    result = service.assign(event_id=1, staff_id=2, role="kitchen")

    assert result.event_id == 1
    assert result.conflicts == []
    assert events_repo.get_assignment(event_id=1, staff_id=2).role == "kitchen"


def test_same_day_booking_is_reported_not_blocked(service):
    result = service.assign(event_id=2, staff_id=1, salary=Decimal("2600"))

    assert result.salary == Decimal("2600")
    assert [c.event_id for c in result.conflicts] == [1]
    assert result.conflicts[0].start_time == "09:00"


def test_double_assignment_is_a_conflict(service):
    with pytest.raises(ConflictError):
        service.assign(event_id=1, staff_id=1)


def test_unknown_event_or_staff(service):
    with pytest.raises(NotFoundError):
        service.assign(event_id=99, staff_id=1)
    with pytest.raises(NotFoundError):
        service.assign(event_id=1, staff_id=99)


def test_negative_salary_is_rejected(service):
    with pytest.raises(ValidationError):
        service.assign(event_id=1, staff_id=2, salary=Decimal("-1"))


def test_conflicts_on_can_exclude_an_event(service):
    assert [c.event_id for c in service.conflicts_on(date(2024, 1, 15), staff_id=1)] == [1]
    assert service.conflicts_on(date(2024, 1, 15), staff_id=1, exclude_event_id=1) == []
