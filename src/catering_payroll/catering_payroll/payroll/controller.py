from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_date_param
from ..common.validators import optional_int
from ..core.enums import GroupBy
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/reports/salary", methods=["GET"], endpoint="api_salary_report")
    def api_salary_report():
        group_s = (request.args.get("groupBy") or GroupBy.STAFF.value).strip().lower()
        try:
            group_by = GroupBy(group_s)
        except ValueError:
            raise ValidationError("groupBy must be one of: staff, date, month")

        report = container.payroll_report_service.build_salary_report(
            start=parse_date_param(request.args.get("startDate"), "startDate"),
            end=parse_date_param(request.args.get("endDate"), "endDate"),
            staff_id=optional_int(request.args.get("staffId")),
            group_by=group_by,
        )
        return jsonify(report.to_dict())
