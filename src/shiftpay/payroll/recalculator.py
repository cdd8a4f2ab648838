"""Payroll recalculation for one employee and one period.

Pure functions: nothing here reads storage or the clock, so recomputing with
the same inputs always yields the same PayrollEntry.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Iterable, Optional

from ..common.money import round_money
from ..core.enums import DeductionType
from ..deductions.model import Deduction
from ..employees.model import Employee
from ..periods.model import PayrollPeriod
from ..timesheets.model import TimesheetEntry
from .calculator.base import ShiftCalculator
from .calculator.standard_calculator import StandardShiftCalculator
from .factory import PayStrategyFactory
from .model import DayBreakdown, PayrollDerived, PayrollEntry, PayrollPolicy

_DEFAULT_POLICY = PayrollPolicy()


def _resolve_period(
    period: Optional[PayrollPeriod],
    previous: Optional[PayrollEntry],
    deductions: list[Deduction],
    entries: list[TimesheetEntry],
) -> Optional[PayrollPeriod]:
    if period is not None:
        return period
    if previous is not None and previous.period is not None:
        return previous.period
    if deductions:
        return PayrollPeriod(start=deductions[0].period_start, end=deductions[0].period_end)
    if entries:
        dates = [e.work_date for e in entries]
        return PayrollPeriod(start=min(dates), end=max(dates))
    return None


def _sum_amounts(deductions: Iterable[Deduction]) -> float:
    return round_money(sum(float(d.amount or 0) for d in deductions))


def compute_payroll(
    employee: Employee,
    timesheet_entries: Iterable[TimesheetEntry],
    deductions: Iterable[Deduction],
    *,
    period: Optional[PayrollPeriod] = None,
    previous: Optional[PayrollEntry] = None,
    calculator: Optional[ShiftCalculator] = None,
    policy: Optional[PayrollPolicy] = None,
) -> PayrollDerived:
    calculator = calculator or StandardShiftCalculator()
    policy = policy or _DEFAULT_POLICY

    entries = [e for e in timesheet_entries if e.is_active and e.employee_id == employee.employee_id]
    active_deductions = [d for d in deductions if d.is_active and d.employee_id == employee.employee_id]

    period = _resolve_period(period, previous, active_deductions, entries)
    if period is not None:
        entries = [e for e in entries if period.contains(e.work_date)]
    entries.sort(key=lambda e: e.work_date)

    days: list[DayBreakdown] = []
    for e in entries:
        hours = calculator.compute(e.clock_in, e.clock_out, e.break_minutes, employee.shift_end, e.day_type)
        days.append(
            DayBreakdown(
                work_date=e.work_date,
                day_type=e.day_type,
                billable_minutes=hours.billable_minutes,
                regular_minutes=hours.regular_minutes,
                overtime_minutes=hours.overtime_minutes,
                dinner_break_deduction=hours.dinner_break_deduction,
                night_status=hours.night_status,
            )
        )

    working_days = sum(1 for e in entries if e.is_working_day)
    billable = sum(d.billable_minutes for d in days)
    regular = sum(d.regular_minutes for d in days)
    overtime = sum(d.overtime_minutes for d in days)

    strategy = PayStrategyFactory(calculator).for_employee(employee, working_days=working_days)
    base = strategy.base_pay(
        employee,
        worked_minutes=billable if policy.overtime_in_base_pay else regular,
        working_days=working_days,
    )

    base_pay = round_money(base.amount)
    overtime_pay = round_money(overtime / 60 * base.hourly_rate * policy.overtime_multiplier)
    gross_pay = round_money(base_pay + overtime_pay)

    total_deductions = _sum_amounts(active_deductions)
    advance_deductions = _sum_amounts(d for d in active_deductions if d.deduction_type == DeductionType.ADVANCE)
    loan_deductions = _sum_amounts(d for d in active_deductions if d.deduction_type == DeductionType.LOAN)

    return PayrollDerived(
        employee_id=employee.employee_id,
        period_start=period.start if period else None,
        period_end=period.end if period else None,
        compensation_mode=base.mode,
        hourly_rate=round(base.hourly_rate, 4),
        base_pay=base_pay,
        overtime_pay=overtime_pay,
        gross_pay=gross_pay,
        total_deductions=total_deductions,
        advance_deductions=advance_deductions,
        loan_deductions=loan_deductions,
        net_pay=max(0.0, round_money(gross_pay - total_deductions)),
        working_days=working_days,
        total_billable_minutes=billable,
        total_regular_minutes=regular,
        total_overtime_minutes=overtime,
        days=tuple(days),
    )


def merge_payroll_entry(
    existing: Optional[PayrollEntry],
    computed: PayrollDerived,
    *,
    policy: Optional[PayrollPolicy] = None,
) -> PayrollEntry:
    """Overwrite derived fields, keep payment state.

    A Paid entry whose net pay moved by more than the tolerance since it was
    paid is flagged ``is_adjusted`` with the signed difference.
    """

    policy = policy or _DEFAULT_POLICY
    derived = {f.name: getattr(computed, f.name) for f in fields(computed)}

    if existing is None:
        return PayrollEntry(**derived)

    if not existing.is_paid:
        return replace(existing, **derived, is_adjusted=False, adjustment_amount=0.0)

    paid_net = existing.paid_net_pay if existing.paid_net_pay is not None else existing.net_pay
    delta = round_money(computed.net_pay - paid_net)
    adjusted = abs(delta) > policy.adjustment_tolerance
    return replace(
        existing,
        **derived,
        paid_net_pay=paid_net,
        is_adjusted=adjusted,
        adjustment_amount=delta if adjusted else 0.0,
    )


def recalculate_payroll(
    employee: Employee,
    timesheet_entries: Iterable[TimesheetEntry],
    deductions: Iterable[Deduction],
    previous: Optional[PayrollEntry] = None,
    *,
    period: Optional[PayrollPeriod] = None,
    calculator: Optional[ShiftCalculator] = None,
    policy: Optional[PayrollPolicy] = None,
) -> PayrollEntry:
    computed = compute_payroll(
        employee,
        timesheet_entries,
        deductions,
        period=period,
        previous=previous,
        calculator=calculator,
        policy=policy,
    )
    return merge_payroll_entry(previous, computed, policy=policy)
