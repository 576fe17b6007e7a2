from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_date_param
from ..common.validators import optional_int, parse_decimal
from ..core.enums import WorkLogSource
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.worklog_service

    @app.route("/api/v1/worklogs", methods=["GET"], endpoint="api_worklogs_list")
    def api_worklogs_list():
        logs = svc.list(
            start=parse_date_param(request.args.get("startDate"), "startDate"),
            end=parse_date_param(request.args.get("endDate"), "endDate"),
            staff_id=optional_int(request.args.get("staffId")),
        )
        return jsonify([w.to_dict() for w in logs])

    @app.route("/api/v1/worklogs", methods=["POST"], endpoint="api_worklogs_create")
    def api_worklogs_create():
        data = request.get_json(silent=True) or {}

        staff_id = optional_int(data.get("staffId"))
        if staff_id is None:
            raise ValidationError("staffId is required")

        try:
            source = WorkLogSource(str(data.get("source") or WorkLogSource.MANUAL.value).upper())
        except ValueError:
            raise ValidationError("source must be MANUAL or SYSTEM")

        rate = data.get("overtimeRate")
        log = svc.create_manual(
            staff_id=staff_id,
            work_date=parse_date_param(data.get("date"), "date", required=True),
            start_time=str(data.get("startTime") or ""),
            end_time=str(data.get("endTime") or ""),
            allowance=parse_decimal(data.get("allowance", 0), "allowance"),
            overtime_rate=parse_decimal(rate, "overtimeRate") if rate is not None else None,
            event_id=optional_int(data.get("eventId")),
            notes=data.get("notes"),
            source=source,
        )
        return jsonify(log.to_dict()), 201

    @app.route("/api/v1/worklogs/<int:work_log_id>", methods=["GET"], endpoint="api_worklogs_get")
    def api_worklogs_get(work_log_id: int):
        return jsonify(svc.get(work_log_id).to_dict())

    @app.route("/api/v1/worklogs/<int:work_log_id>", methods=["PATCH"], endpoint="api_worklogs_adjust")
    def api_worklogs_adjust(work_log_id: int):
        data = request.get_json(silent=True) or {}

        kwargs: dict = {}
        if data.get("overtimePay") is not None:
            kwargs["overtime_pay"] = parse_decimal(data["overtimePay"], "overtimePay")
        if data.get("allowance") is not None:
            kwargs["allowance"] = parse_decimal(data["allowance"], "allowance")
        if "notes" in data:
            kwargs["notes"] = data.get("notes")

        return jsonify(svc.adjust(work_log_id=work_log_id, **kwargs).to_dict())

    @app.route("/api/v1/worklogs/<int:work_log_id>", methods=["DELETE"], endpoint="api_worklogs_delete")
    def api_worklogs_delete(work_log_id: int):
        svc.delete(work_log_id)
        return jsonify({"success": True})
