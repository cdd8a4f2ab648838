from datetime import date, time

from shiftpay.timesheets.model import TimesheetEntry


def test_register_has_row_per_employee_and_totals(container, timesheets_repo, period, fixed_now):
    timesheets_repo.upsert(
        TimesheetEntry(entry_id=None, employee_id=1, work_date=date(2025, 12, 9),
                       clock_in=time(9, 0), clock_out=time(19, 0), break_minutes=60)
    )
    container.payroll_service.mark_paid([3], period, now=fixed_now)

    data = container.payroll_report_service.build_register(period)

    assert [r["name"] for r in data.rows] == ["Ana", "Bruno", "Carla"]
    ana = data.rows[0]
    assert ana["worked_hours"] == "09:00"
    assert ana["overtime_hours"] == "01:00"
    assert ana["gross_pay"] == 950.0
    assert ana["status"] == "Unpaid"
    assert data.summary["employees"] == 3
    assert data.summary["gross_pay"] == 24950.0
    assert data.summary["paid"] == 1
    assert data.summary["period_start"] == "2025-12-08"


def test_register_can_be_limited_to_employees(container, period):
    data = container.payroll_report_service.build_register(period, employee_ids=[2])

    assert [r["employee_id"] for r in data.rows] == [2]
    assert data.rows[0]["gross_pay"] == 0.0
