from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time

import pytest

from shiftpay.core.enums import CompensationMode, DeductionStatus, DeductionType, EntryStatus, PaymentStatus
from shiftpay.deductions.model import Deduction
from shiftpay.employees.model import Employee
from shiftpay.payroll.model import PayrollEntry, PayrollPolicy
from shiftpay.payroll.recalculator import compute_payroll, merge_payroll_entry, recalculate_payroll
from shiftpay.timesheets.model import TimesheetEntry


def _entry(employee_id, day, clock_in, clock_out, break_minutes=0, **kw) -> TimesheetEntry:
    return TimesheetEntry(
        entry_id=None,
        employee_id=employee_id,
        work_date=day,
        clock_in=time.fromisoformat(clock_in) if clock_in else None,
        clock_out=time.fromisoformat(clock_out) if clock_out else None,
        break_minutes=break_minutes,
        **kw,
    )


def _deduction(employee_id, period, deduction_type, amount, **kw) -> Deduction:
    return Deduction(
        deduction_id=None,
        employee_id=employee_id,
        period_start=period.start,
        period_end=period.end,
        deduction_type=deduction_type,
        amount=amount,
        **kw,
    )


def test_hourly_pay_prices_regular_and_overtime_separately(hourly_employee, period):
    entries = [
        _entry(1, date(2025, 12, 8), "09:00", "17:00"),
        _entry(1, date(2025, 12, 9), "09:00", "19:00", 60),
    ]
    deductions = [
        _deduction(1, period, DeductionType.ADVANCE, 200),
        _deduction(1, period, DeductionType.LOAN, 100),
        _deduction(1, period, DeductionType.OTHER, 50),
    ]

    entry = recalculate_payroll(hourly_employee, entries, deductions, period=period)

    assert entry.compensation_mode == CompensationMode.HOURLY
    assert entry.working_days == 2
    assert entry.total_regular_minutes == 960
    assert entry.total_overtime_minutes == 60
    assert entry.total_billable_minutes == 1020
    assert entry.base_pay == 1600.0
    assert entry.overtime_pay == 150.0
    assert entry.gross_pay == 1750.0
    assert entry.advance_deductions == 200.0
    assert entry.loan_deductions == 100.0
    assert entry.total_deductions == 350.0
    assert entry.net_pay == 1400.0
    assert entry.status == PaymentStatus.UNPAID
    assert (entry.period_start, entry.period_end) == (period.start, period.end)
    assert [d.work_date for d in entry.days] == [date(2025, 12, 8), date(2025, 12, 9)]


def test_overtime_in_base_pay_policy_uses_billable_minutes(hourly_employee, period):
    entries = [_entry(1, date(2025, 12, 9), "09:00", "19:00", 60)]

    entry = recalculate_payroll(
        hourly_employee, entries, [], period=period, policy=PayrollPolicy(overtime_in_base_pay=True)
    )

    assert entry.base_pay == 900.0
    assert entry.overtime_pay == 150.0
    assert entry.gross_pay == 1050.0


def test_per_shift_pay_is_prorated_against_standard_day(per_shift_employee, period):
    entries = [
        _entry(2, date(2025, 12, 8), "09:00", "18:00", 60),
        _entry(2, date(2025, 12, 9), "09:00", "14:00"),
    ]

    entry = recalculate_payroll(per_shift_employee, entries, [], period=period)

    assert entry.compensation_mode == CompensationMode.PER_SHIFT
    assert entry.hourly_rate == 100.0
    assert entry.base_pay == 1300.0
    assert entry.overtime_pay == 0.0
    assert entry.gross_pay == 1300.0


def test_salary_overtime_uses_implied_hourly_rate(salaried_employee, period):
    entries = [_entry(3, date(2025, 12, 10), "09:00", "20:00")]

    entry = recalculate_payroll(salaried_employee, entries, [], period=period)

    assert entry.compensation_mode == CompensationMode.SALARY
    assert entry.hourly_rate == 100.0
    assert entry.total_overtime_minutes == 120
    assert entry.base_pay == 24000.0
    assert entry.overtime_pay == 300.0
    assert entry.gross_pay == 24300.0


def test_zero_entries_falls_back_to_salary_or_zero(hourly_employee, salaried_employee, period):
    salaried = recalculate_payroll(salaried_employee, [], [], period=period)
    hourly = recalculate_payroll(hourly_employee, [], [], period=period)

    assert salaried.working_days == 0
    assert salaried.gross_pay == 24000.0
    assert hourly.working_days == 0
    assert hourly.gross_pay == 0.0


def test_net_pay_is_never_negative(hourly_employee, period):
    entries = [_entry(1, date(2025, 12, 8), "09:00", "17:00")]
    deductions = [_deduction(1, period, DeductionType.LOAN, 1000)]

    entry = recalculate_payroll(hourly_employee, entries, deductions, period=period)

    assert entry.gross_pay == 800.0
    assert entry.total_deductions == 1000.0
    assert entry.net_pay == 0.0


def test_inactive_and_foreign_inputs_are_ignored(hourly_employee, period):
    entries = [
        _entry(1, date(2025, 12, 8), "09:00", "17:00"),
        _entry(1, date(2025, 12, 9), "09:00", "17:00", status=EntryStatus.VOIDED),
        _entry(1, date(2025, 12, 22), "09:00", "17:00"),
        _entry(2, date(2025, 12, 10), "09:00", "17:00"),
    ]
    deductions = [
        _deduction(1, period, DeductionType.OTHER, 10),
        _deduction(1, period, DeductionType.OTHER, 500, status=DeductionStatus.DELETED),
        _deduction(2, period, DeductionType.OTHER, 500),
    ]

    entry = recalculate_payroll(hourly_employee, entries, deductions, period=period)

    assert entry.working_days == 1
    assert entry.gross_pay == 800.0
    assert entry.total_deductions == 10.0


def test_entry_without_clock_out_counts_as_day_with_no_minutes(hourly_employee, period):
    entries = [_entry(1, date(2025, 12, 8), "09:00", None)]

    entry = recalculate_payroll(hourly_employee, entries, [], period=period)

    assert entry.working_days == 1
    assert entry.total_billable_minutes == 0
    assert entry.gross_pay == 0.0


def test_period_resolved_from_inputs_when_not_given(hourly_employee, period):
    deductions = [_deduction(1, period, DeductionType.OTHER, 5)]
    from_deductions = recalculate_payroll(hourly_employee, [], deductions)
    from_entries = recalculate_payroll(
        hourly_employee,
        [_entry(1, date(2025, 12, 9), "09:00", "10:00"), _entry(1, date(2025, 12, 11), "09:00", "10:00")],
        [],
    )

    assert (from_deductions.period_start, from_deductions.period_end) == (period.start, period.end)
    assert (from_entries.period_start, from_entries.period_end) == (date(2025, 12, 9), date(2025, 12, 11))


def test_recalculating_unpaid_entry_twice_is_idempotent(hourly_employee, period):
    entries = [_entry(1, date(2025, 12, 8), "09:00", "19:30", 30)]
    deductions = [_deduction(1, period, DeductionType.ADVANCE, 120)]

    first = recalculate_payroll(hourly_employee, entries, deductions, period=period)
    second = recalculate_payroll(hourly_employee, entries, deductions, first, period=period)

    assert second == first
    assert second.is_adjusted is False
    assert second.adjustment_amount == 0.0


def test_paid_entry_change_is_flagged_as_adjustment(period):
    employee = Employee(employee_id=9, name="Dora", salary=950.50)
    paid_at = datetime(2025, 12, 22, 10, 0)
    previous = PayrollEntry(
        employee_id=9,
        period_start=period.start,
        period_end=period.end,
        net_pay=1000.0,
        entry_id=42,
        status=PaymentStatus.PAID,
        paid_at=paid_at,
        paid_net_pay=1000.0,
    )

    entry = recalculate_payroll(employee, [], [], previous, period=period)

    assert entry.net_pay == 950.50
    assert entry.is_adjusted is True
    assert entry.adjustment_amount == pytest.approx(-49.50)
    assert entry.status == PaymentStatus.PAID
    assert entry.paid_at == paid_at
    assert entry.entry_id == 42
    assert entry.paid_net_pay == 1000.0


def test_paid_entry_without_snapshot_compares_against_stored_net_pay(period):
    employee = Employee(employee_id=9, name="Dora", salary=950.50)
    previous = PayrollEntry(employee_id=9, period_start=period.start, period_end=period.end, net_pay=1000.0,
                            status=PaymentStatus.PAID)

    entry = recalculate_payroll(employee, [], [], previous, period=period)

    assert entry.paid_net_pay == 1000.0
    assert entry.adjustment_amount == pytest.approx(-49.50)


def test_paid_entry_within_tolerance_is_not_adjusted(period):
    employee = Employee(employee_id=9, name="Dora", salary=950.50)
    previous = PayrollEntry(employee_id=9, period_start=period.start, period_end=period.end, net_pay=950.51,
                            status=PaymentStatus.PAID, paid_net_pay=950.51)

    entry = recalculate_payroll(employee, [], [], previous, period=period)

    assert entry.is_adjusted is False
    assert entry.adjustment_amount == 0.0


def test_merge_clears_stale_adjustment_on_unpaid_entry(hourly_employee, period):
    computed = compute_payroll(hourly_employee, [], [], period=period)
    stale = PayrollEntry(employee_id=1, period_start=period.start, entry_id=7, is_adjusted=True, adjustment_amount=12.0)

    merged = merge_payroll_entry(stale, computed)

    assert merged.entry_id == 7
    assert merged.is_adjusted is False
    assert merged.adjustment_amount == 0.0
    assert merged.period_end == period.end


def test_merge_without_existing_entry_builds_a_new_unpaid_entry(hourly_employee, period):
    computed = compute_payroll(hourly_employee, [], [], period=period)

    merged = merge_payroll_entry(None, computed)

    assert merged.entry_id is None
    assert merged.status == PaymentStatus.UNPAID
    assert replace(merged, status=PaymentStatus.PAID).is_paid
