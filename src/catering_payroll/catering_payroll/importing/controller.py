from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.validators import parse_decimal
from ..core.exceptions import ValidationError
from ..container import Container
from .spreadsheet import read_rows


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _batch_rate(value: Any) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    rate = parse_decimal(value, "overtimeRate")
    if rate < 0:
        raise ValidationError("overtimeRate cannot be negative")
    return rate


def register(app: Flask, container: Container) -> None:
    def _run(rows, *, confirm: bool, overtime_rate: Optional[Decimal]):
        svc = container.import_service
        if confirm:
            return jsonify(svc.confirm(rows, overtime_rate=overtime_rate).to_dict()), 200
        return jsonify(svc.preview(rows, overtime_rate=overtime_rate).to_dict()), 200

    @app.route("/api/v1/worklogs/import", methods=["POST"], endpoint="api_worklogs_import")
    def api_worklogs_import():
        data = request.get_json(silent=True) or {}
        rows = data.get("rows")
        if not isinstance(rows, list) or not rows:
            raise ValidationError("no rows to import")
        if not all(isinstance(r, dict) for r in rows):
            raise ValidationError("each row must be an object")

        return _run(rows, confirm=_truthy(data.get("confirm", False)), overtime_rate=_batch_rate(data.get("overtimeRate")))

    @app.route("/api/v1/worklogs/import/upload", methods=["POST"], endpoint="api_worklogs_import_upload")
    def api_worklogs_import_upload():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("file is required")

        rows = read_rows(upload.stream, filename=upload.filename)
        if not rows:
            raise ValidationError("no rows to import")

        return _run(
            rows,
            confirm=_truthy(request.form.get("confirm")),
            overtime_rate=_batch_rate(request.form.get("overtimeRate")),
        )
