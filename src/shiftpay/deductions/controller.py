from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import json_body, ok, period_from
from ..common.validators import require_int
from ..container import Container
from ..core.exceptions import ValidationError
from ..periods.model import PayrollPeriod
from .service import NewDeduction


def register(app: Flask, container: Container) -> None:
    def _recalculate(employee_id: int, period_start, period_end):
        return container.payroll_service.recalculate(employee_id, PayrollPeriod(start=period_start, end=period_end))

    @app.route("/api/deductions/<int:employee_id>", methods=["GET"], endpoint="deductions_list")
    def deductions_list(employee_id: int):
        period = period_from(request.args, container.period_service)
        return ok(container.deduction_service.list_for_period(employee_id, period), period=period)

    @app.route("/api/deductions/<int:employee_id>", methods=["PUT"], endpoint="deductions_replace")
    def deductions_replace(employee_id: int):
        body = json_body()
        period = period_from(body, container.period_service)
        rows = body.get("deductions", [])
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise ValidationError("deductions must be a list of objects")

        items = [
            NewDeduction(
                deduction_type=r.get("type") or r.get("deduction_type") or "other",
                amount=r.get("amount"),
                description=r.get("description"),
            )
            for r in rows
        ]
        saved = container.deduction_service.replace_for_period(employee_id=employee_id, period=period, items=items)
        return ok(saved, payroll=container.payroll_service.recalculate(employee_id, period))

    @app.route("/api/deductions/item/<int:deduction_id>", methods=["DELETE"], endpoint="deductions_delete")
    def deductions_delete(deduction_id: int):
        removed = container.deduction_service.delete(deduction_id)
        return ok(removed, payroll=_recalculate(removed.employee_id, removed.period_start, removed.period_end))

    @app.route("/api/advances", methods=["GET"], endpoint="advances_list")
    def advances_list():
        employee_id = request.args.get("employee_id")
        start = request.args.get("start")
        end = request.args.get("end")
        advances = container.advance_service.list(
            employee_id=require_int(employee_id, "employee_id") if employee_id else None,
            start=parse_iso_date(start) if start else None,
            end=parse_iso_date(end) if end else None,
        )
        return ok(advances)

    @app.route("/api/advances", methods=["POST"], endpoint="advances_issue")
    def advances_issue():
        body = json_body()
        employee_id = require_int(body.get("employee_id"), "employee_id")
        issued_on = body.get("date")
        period = period_from(body, container.period_service) if body.get("start") or body.get("period_start") else None

        issued = container.advance_service.issue(
            employee_id=employee_id,
            amount=body.get("amount"),
            date_issued=parse_iso_date(issued_on) if issued_on else now_local().date(),
            reason=body.get("reason"),
            period=period,
        )
        d = issued.deduction
        return ok(issued, status=201, payroll=_recalculate(employee_id, d.period_start, d.period_end))

    @app.route("/api/advances/<int:advance_id>", methods=["DELETE"], endpoint="advances_cancel")
    def advances_cancel(advance_id: int):
        removed = container.advance_service.cancel(advance_id)
        affected = {(d.employee_id, d.period_start, d.period_end) for d in removed}
        payroll = [_recalculate(*key) for key in sorted(affected)]
        return ok(removed, payroll=payroll)
