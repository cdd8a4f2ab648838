from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, ok, period_from
from ..container import Container
from ..core.enums import DayType
from ..core.exceptions import ValidationError
from .service import NewTimesheetEntry

logger = logging.getLogger(__name__)


def _parse_day_type(value) -> DayType:
    try:
        return DayType(value or DayType.WORK.value)
    except ValueError:
        raise ValidationError(f"Unknown day type: {value!r}")


def _parse_entries(rows) -> list[NewTimesheetEntry]:
    if not isinstance(rows, list):
        raise ValidationError("entries must be a list")
    items = []
    for row in rows:
        if not isinstance(row, dict):
            raise ValidationError("each entry must be an object")
        items.append(
            NewTimesheetEntry(
                work_date=parse_iso_date(row.get("date") or row.get("work_date")),
                clock_in=row.get("clock_in"),
                clock_out=row.get("clock_out"),
                break_minutes=row.get("break_minutes") or 0,
                day_type=_parse_day_type(row.get("day_type")),
                note=row.get("note"),
            )
        )
    return items


def register(app: Flask, container: Container) -> None:
    def _recalculate_for(employee_id: int, work_date):
        # The locked period wins over the cycle when it covers the day.
        period = container.period_service.period_containing(work_date)
        return container.payroll_service.recalculate_for_day(employee_id, work_date, period)

    @app.route("/api/timesheets/<int:employee_id>", methods=["GET"], endpoint="timesheets_get")
    def timesheets_get(employee_id: int):
        period = period_from(request.args, container.period_service)
        entries = container.timesheet_service.list_for_period(employee_id, period)
        return ok(entries, period=period)

    @app.route("/api/timesheets/<int:employee_id>", methods=["POST"], endpoint="timesheets_save")
    def timesheets_save(employee_id: int):
        body = json_body()
        items = _parse_entries(body.get("entries", []))
        saved = container.timesheet_service.save_entries(employee_id, items)

        payroll = {}
        for entry in sorted(saved, key=lambda e: e.work_date):
            result = _recalculate_for(employee_id, entry.work_date)
            payroll[result.period_start] = result
        logger.info("Saved %d timesheet entries for employee %s", len(saved), employee_id)
        return ok(saved, payroll=list(payroll.values()))

    @app.route("/api/timesheets/<int:employee_id>/clock-in", methods=["POST"], endpoint="timesheets_clock_in")
    def timesheets_clock_in(employee_id: int):
        entry = container.timesheet_service.clock_in(employee_id)
        return ok(entry, status=201, payroll=_recalculate_for(employee_id, entry.work_date))

    @app.route("/api/timesheets/<int:employee_id>/clock-out", methods=["POST"], endpoint="timesheets_clock_out")
    def timesheets_clock_out(employee_id: int):
        entry = container.timesheet_service.clock_out(employee_id)
        return ok(entry, payroll=_recalculate_for(employee_id, entry.work_date))

    @app.route("/api/timesheets/<int:employee_id>/<work_date>/break", methods=["PUT"], endpoint="timesheets_break")
    def timesheets_break(employee_id: int, work_date: str):
        day = parse_iso_date(work_date)
        entry = container.timesheet_service.update_break(employee_id, day, json_body().get("break_minutes"))
        return ok(entry, payroll=_recalculate_for(employee_id, day))

    @app.route("/api/timesheets/<int:employee_id>/<work_date>", methods=["DELETE"], endpoint="timesheets_void")
    def timesheets_void(employee_id: int, work_date: str):
        day = parse_iso_date(work_date)
        entry = container.timesheet_service.void_entry(employee_id, day)
        return ok(entry, payroll=_recalculate_for(employee_id, day))
