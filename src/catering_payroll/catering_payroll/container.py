from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .availability.mysql_availability_repository import MySQLAvailabilityRepository
from .availability.repository import AvailabilityRepository
from .availability.service import AvailabilityService
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventStaffService
from .importing.service import WorkLogImportService
from .payroll.config import SalaryConfig
from .payroll.service import PayrollReportService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .worklogs.mysql_worklog_repository import MySQLWorkLogRepository
from .worklogs.repository import WorkLogRepository
from .worklogs.service import WorkLogService


@dataclass(frozen=True)
class Container:
    staff_repo: StaffRepository
    events_repo: EventRepository
    worklogs_repo: WorkLogRepository
    availability_repo: AvailabilityRepository

    salary_config: SalaryConfig
    import_service: WorkLogImportService
    worklog_service: WorkLogService
    availability_service: AvailabilityService
    event_staff_service: EventStaffService
    payroll_report_service: PayrollReportService


def wire(
    *,
    staff_repo: StaffRepository,
    events_repo: EventRepository,
    worklogs_repo: WorkLogRepository,
    availability_repo: AvailabilityRepository,
    salary_config: Optional[SalaryConfig] = None,
) -> Container:
    """Assemble services over any set of repositories (MySQL or in-memory)."""
    salary_config = salary_config or SalaryConfig()

    return Container(
        staff_repo=staff_repo,
        events_repo=events_repo,
        worklogs_repo=worklogs_repo,
        availability_repo=availability_repo,
        salary_config=salary_config,
        import_service=WorkLogImportService(staff_repo, events_repo, worklogs_repo, salary_config=salary_config),
        worklog_service=WorkLogService(worklogs_repo, staff_repo, events_repo, salary_config=salary_config),
        availability_service=AvailabilityService(availability_repo, staff_repo, events_repo),
        event_staff_service=EventStaffService(events_repo, staff_repo),
        payroll_report_service=PayrollReportService(worklogs_repo),
    )


def build_container(*, db_config: dict, salary_config: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return wire(
        staff_repo=MySQLStaffRepository(conn),
        events_repo=MySQLEventRepository(conn),
        worklogs_repo=MySQLWorkLogRepository(conn),
        availability_repo=MySQLAvailabilityRepository(conn),
        salary_config=SalaryConfig.from_mapping(salary_config),
    )
