from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_int, parse_decimal
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/events/<int:event_id>/staff", methods=["POST"], endpoint="api_event_staff_assign")
    def api_event_staff_assign(event_id: int):
        data = request.get_json(silent=True) or {}

        staff_id = optional_int(data.get("staffId"))
        if staff_id is None:
            raise ValidationError("staffId is required")
        salary = data.get("salary")

        result = container.event_staff_service.assign(
            event_id=event_id,
            staff_id=staff_id,
            salary=parse_decimal(salary, "salary") if salary is not None else None,
            role=data.get("role"),
            notes=data.get("notes"),
        )
        return jsonify(
            {
                "eventStaff": {
                    "id": result.assignment_id,
                    "eventId": result.event_id,
                    "staffId": result.staff_id,
                    "salary": result.salary,
                },
                "conflicts": [
                    {
                        "eventId": c.event_id,
                        "eventName": c.event_name,
                        "date": c.event_date.strftime("%Y-%m-%d"),
                        "startTime": c.start_time,
                    }
                    for c in result.conflicts
                ],
            }
        ), 201
