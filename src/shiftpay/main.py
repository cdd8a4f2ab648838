from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .common.datetime_utils import parse_iso_date
from .container import Container, build_container
from .core.exceptions import ConflictError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from .database.connection import DBConfig
from .deductions.controller import register as register_deductions
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .payroll.model import PayrollPolicy
from .periods.controller import register as register_periods
from .settings import get_settings_module
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "error": message}), status

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return _error(str(e), 409)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return _error(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        return _error("Internal server error", 500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            logger.info("demo employees added: %d", ensure_demo_employees(db_config))

        container = build_container(
            db_config=db_config,
            policy=PayrollPolicy(overtime_multiplier=float(getattr(settings, "OVERTIME_MULTIPLIER", 1.5))),
            period_anchor=parse_iso_date(getattr(settings, "PAYROLL_PERIOD_ANCHOR", "2025-12-08")),
            period_days=int(getattr(settings, "PAYROLL_PERIOD_DAYS", 14)),
        )

    app.extensions["shiftpay"] = container
    _register_error_handlers(app)

    @app.route("/api/health", endpoint="health")
    def health():
        if container.conn is not None and not container.conn.ping():
            return jsonify({"status": "degraded", "database": "unreachable"}), 503
        return jsonify({"status": "ok"})

    register_employees(app, container)
    register_timesheets(app, container)
    register_deductions(app, container)
    register_periods(app, container)
    register_payroll(app, container)

    return app
