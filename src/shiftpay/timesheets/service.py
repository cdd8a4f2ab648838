from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import ClockValue, now_local, parse_clock
from ..common.validators import require_minutes
from ..core.enums import DayType, EntryStatus
from ..core.exceptions import EmployeeNotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..periods.model import PayrollPeriod
from .model import TimesheetEntry
from .repository import TimesheetRepository


@dataclass(frozen=True)
class NewTimesheetEntry:
    """One row of a timesheet save request."""

    work_date: date
    clock_in: ClockValue = None
    clock_out: ClockValue = None
    break_minutes: int = 0
    day_type: DayType = DayType.WORK
    note: Optional[str] = None


def _clock_now(now: datetime) -> time:
    return time(now.hour, now.minute)


class TimesheetService:
    def __init__(self, timesheets: TimesheetRepository, employees: EmployeeRepository):
        self._timesheets = timesheets
        self._employees = employees

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFoundError(int(employee_id))
        return employee

    def _require_entry(self, employee_id: int, work_date: date) -> TimesheetEntry:
        entry = self._timesheets.get_for_employee_and_date(int(employee_id), work_date)
        if not entry or not entry.is_active:
            raise ValidationError("No timesheet entry found for this date")
        return entry

    def save_entries(self, employee_id: int, entries: Sequence[NewTimesheetEntry]) -> list[TimesheetEntry]:
        """Upsert a batch of entries, one per (employee, date)."""

        self._require_employee(employee_id)

        saved: list[TimesheetEntry] = []
        for item in entries:
            clock_in = parse_clock(item.clock_in)
            clock_out = parse_clock(item.clock_out)
            if clock_out and not clock_in:
                raise ValidationError(f"{item.work_date}: clock-out without clock-in")

            saved.append(
                self._timesheets.upsert(
                    TimesheetEntry(
                        entry_id=None,
                        employee_id=int(employee_id),
                        work_date=item.work_date,
                        clock_in=clock_in,
                        clock_out=clock_out,
                        break_minutes=require_minutes(item.break_minutes),
                        day_type=DayType(item.day_type),
                        status=EntryStatus.ACTIVE,
                        note=(item.note or "").strip() or None,
                    )
                )
            )
        return saved

    def clock_in(self, employee_id: int, *, now: datetime | None = None) -> TimesheetEntry:
        now = now or now_local()
        employee = self._require_employee(employee_id)

        existing = self._timesheets.get_for_employee_and_date(employee.employee_id, now.date())
        if existing and existing.is_active and existing.clock_in:
            raise ValidationError("Already clocked in today")

        return self._timesheets.upsert(
            TimesheetEntry(
                entry_id=existing.entry_id if existing else None,
                employee_id=employee.employee_id,
                work_date=now.date(),
                clock_in=_clock_now(now),
                clock_out=None,
                break_minutes=employee.break_minutes,
            )
        )

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> TimesheetEntry:
        """Close today's open entry, or yesterday's for a shift running past midnight."""

        now = now or now_local()
        self._require_employee(employee_id)

        for work_date in (now.date(), now.date() - timedelta(days=1)):
            entry = self._timesheets.get_for_employee_and_date(int(employee_id), work_date)
            if entry and entry.is_active and entry.clock_in and not entry.clock_out:
                return self._timesheets.upsert(replace(entry, clock_out=_clock_now(now)))

        today = self._timesheets.get_for_employee_and_date(int(employee_id), now.date())
        if today and today.is_active and today.clock_out:
            raise ValidationError("Already clocked out today")
        raise ValidationError("No timesheet entry found to clock out")

    def update_break(self, employee_id: int, work_date: date, minutes: int) -> TimesheetEntry:
        entry = self._require_entry(employee_id, work_date)
        return self._timesheets.upsert(replace(entry, break_minutes=require_minutes(minutes)))

    def void_entry(self, employee_id: int, work_date: date) -> TimesheetEntry:
        """Entries are never removed, only voided so they drop out of payroll."""

        entry = self._require_entry(employee_id, work_date)
        return self._timesheets.upsert(replace(entry, status=EntryStatus.VOIDED))

    def list_for_period(self, employee_id: int, period: PayrollPeriod) -> Sequence[TimesheetEntry]:
        return self._timesheets.list_for_period(
            employee_ids=[int(employee_id)],
            start_date=period.start,
            end_date=period.end,
        )
