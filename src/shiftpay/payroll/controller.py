from __future__ import annotations

import csv
import io

from flask import Flask, request

from ..common.http import employee_ids_from, json_body, ok, period_from
from ..container import Container
from ..core.exceptions import ValidationError
from .report_service import REGISTER_FIELDS


def _truthy(value) -> bool:
    return str(value).lower() in {"1", "true", "yes"}


def register(app: Flask, container: Container) -> None:
    def _write_register_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REGISTER_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/payroll/<int:employee_id>/calculate", methods=["POST"], endpoint="payroll_calculate")
    def payroll_calculate(employee_id: int):
        period = period_from(json_body() or request.args, container.period_service)
        return ok(container.payroll_service.recalculate(employee_id, period))

    @app.route("/api/payroll/period", methods=["GET"], endpoint="payroll_period")
    def payroll_period():
        """Payroll of every (or the listed) employee for one period."""

        period = period_from(request.args, container.period_service)
        ids = employee_ids_from(request.args) or [e.employee_id for e in container.employees_repo.list_all()]
        entries = container.payroll_service.recalculate_bulk(ids, period, force=_truthy(request.args.get("refresh")))
        return ok(entries, period=period)

    @app.route("/api/payroll/mark-paid", methods=["POST"], endpoint="payroll_mark_paid")
    def payroll_mark_paid():
        body = json_body()
        ids = employee_ids_from(body)
        if not ids:
            raise ValidationError("employee_ids is required")
        period = period_from(body, container.period_service)
        return ok(container.payroll_service.mark_paid(ids, period))

    @app.route("/api/payroll/mark-unpaid", methods=["POST"], endpoint="payroll_mark_unpaid")
    def payroll_mark_unpaid():
        body = json_body()
        ids = employee_ids_from(body)
        if not ids:
            raise ValidationError("employee_ids is required")
        period = period_from(body, container.period_service)
        return ok(container.payroll_service.mark_unpaid(ids, period))

    @app.route("/api/payroll/entry/<int:entry_id>", methods=["GET"], endpoint="payroll_entry")
    def payroll_entry(entry_id: int):
        return ok(container.payroll_service.get_entry(entry_id))

    @app.route("/api/payroll/history/<int:employee_id>", methods=["GET"], endpoint="payroll_history")
    def payroll_history(employee_id: int):
        return ok(container.payroll_service.history(employee_id))

    @app.route("/api/payroll/register", methods=["GET"], endpoint="payroll_register")
    def payroll_register():
        period = period_from(request.args, container.period_service)
        ids = employee_ids_from(request.args) or None
        data = container.payroll_report_service.build_register(
            period,
            employee_ids=ids,
            refresh=_truthy(request.args.get("refresh")),
        )
        if request.args.get("format") == "csv":
            filename = f"payroll_{period.start:%Y%m%d}_{period.end:%Y%m%d}.csv"
            return _write_register_csv(data=data, filename=filename)
        return ok(data.rows, summary=data.summary)
