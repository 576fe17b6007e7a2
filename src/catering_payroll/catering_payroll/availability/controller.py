from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_date_param
from ..core.enums import Skill
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.availability_service

    @app.route("/api/v1/availability", methods=["GET"], endpoint="api_availability")
    def api_availability():
        day = parse_date_param(request.args.get("date"), "date", required=True)

        skill_s = (request.args.get("skill") or "").strip().upper()
        # unknown skills are ignored rather than rejected
        skill = Skill(skill_s) if skill_s in Skill.__members__ else None

        return jsonify(svc.resolve(day, skill=skill).to_dict())

    @app.route("/api/v1/staff/<int:staff_id>/availability", methods=["GET"], endpoint="api_staff_availability_list")
    def api_staff_availability_list(staff_id: int):
        records = svc.list_for_staff(
            staff_id=staff_id,
            start=parse_date_param(request.args.get("startDate"), "startDate"),
            end=parse_date_param(request.args.get("endDate"), "endDate"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/v1/staff/<int:staff_id>/availability", methods=["POST"], endpoint="api_staff_availability_set")
    def api_staff_availability_set(staff_id: int):
        data = request.get_json(silent=True) or {}
        available = data.get("available")
        if not isinstance(available, bool):
            raise ValidationError("available must be true or false")

        record = svc.set_availability(
            staff_id=staff_id,
            day=parse_date_param(data.get("date"), "date", required=True),
            available=available,
            reason=data.get("reason"),
        )
        return jsonify(record.to_dict())

    @app.route("/api/v1/staff/<int:staff_id>/availability", methods=["DELETE"], endpoint="api_staff_availability_delete")
    def api_staff_availability_delete(staff_id: int):
        svc.clear(staff_id=staff_id, day=parse_date_param(request.args.get("date"), "date", required=True))
        return jsonify({"success": True})
