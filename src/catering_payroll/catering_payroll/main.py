from __future__ import annotations

import importlib
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider

from config import get_settings_module

from .availability.controller import register as register_availability
from .container import Container, build_container
from .core.exceptions import (
    BatchRejectedError,
    ConflictError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .events.controller import register as register_events
from .importing.controller import register as register_importing
from .payroll.controller import register as register_payroll
from .worklogs.controller import register as register_worklogs

REPO_ROOT = Path(__file__).resolve().parents[3]


class MoneyJSONProvider(DefaultJSONProvider):
    """Render Decimal amounts as JSON numbers (integers when whole)."""

    @staticmethod
    def default(o: Any) -> Any:
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        return DefaultJSONProvider.default(o)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(BatchRejectedError)
    def _batch_rejected(e: BatchRejectedError):
        return jsonify({"error": str(e), "results": [r.to_dict() for r in e.results], "summary": e.summary}), 400

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return jsonify({"error": str(e)}), 409

    @app.errorhandler(PersistenceError)
    def _persistence(e: PersistenceError):
        return jsonify({"error": str(e)}), 500

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # HTTP errors (404 route, 405 method) keep their own status
        code = getattr(e, "code", None)
        if isinstance(code, int) and 400 <= code < 500:
            return jsonify({"error": getattr(e, "description", str(e))}), code
        app.logger.exception("unhandled error")
        return jsonify({"error": "internal error"}), 500


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = MoneyJSONProvider(app)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        app.logger.info("settings=%s db=%s", settings_module, DBConfig.from_settings(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            app.logger.info("demo seed ready")

        container = build_container(db_config=db_config, salary_config=getattr(settings, "SALARY_CONFIG", None))

    _register_error_handlers(app)
    register_importing(app, container)
    register_worklogs(app, container)
    register_availability(app, container)
    register_events(app, container)
    register_payroll(app, container)

    return app
