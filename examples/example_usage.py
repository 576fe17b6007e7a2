"""Example: drive the service layer directly (no Flask).

Previews a two-row timesheet and prints this month's salary report.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.catering_payroll.catering_payroll.container import build_container
from src.catering_payroll.catering_payroll.core.enums import GroupBy


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, salary_config=getattr(settings, "SALARY_CONFIG", None))

    rows = [
        {"員工姓名": "王小明", "日期": "2024/1/15", "下班時間": "14:00"},
        {"staffName": "李美華", "date": "2024-01-15", "clockIn": "08:30", "clockOut": "13:10"},
    ]
    print(container.import_service.preview(rows).to_dict())

    today = date.today()
    report = container.payroll_report_service.build_salary_report(
        start=today.replace(day=1), end=today, group_by=GroupBy.STAFF
    )
    print(report.to_dict())


if __name__ == "__main__":
    main()
