from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from .model import PayrollPeriod


def register(app: Flask, container: Container) -> None:
    @app.route("/api/periods/current", methods=["GET"], endpoint="periods_current")
    def periods_current():
        lock = container.period_service.get_lock()
        return ok(container.period_service.current_period(), locked=lock is not None)

    @app.route("/api/periods/lock", methods=["GET"], endpoint="periods_lock_get")
    def periods_lock_get():
        return ok(container.period_service.get_lock())

    @app.route("/api/periods/lock", methods=["POST"], endpoint="periods_lock")
    def periods_lock():
        body = json_body()
        period = PayrollPeriod.parse(body.get("start"), body.get("end"))
        lock = container.period_service.lock(period, locked_by=body.get("locked_by") or "")
        return ok(lock, status=201)

    @app.route("/api/periods/lock", methods=["DELETE"], endpoint="periods_unlock")
    def periods_unlock():
        container.period_service.unlock()
        return ok(None)
