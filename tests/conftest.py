from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from shiftpay.container import wire_container
from shiftpay.core.enums import AdvanceStatus, DeductionStatus, EntryStatus, PaymentStatus
from shiftpay.deductions.model import Advance, Deduction
from shiftpay.employees.model import Employee
from shiftpay.payroll.model import PayrollEntry
from shiftpay.periods.model import PayrollPeriod, PeriodLock
from shiftpay.timesheets.model import TimesheetEntry


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_many(self, employee_ids):
        return [self._by_id[i] for i in employee_ids if i in self._by_id]

    def list_all(self, *, active_only: bool = True):
        return [e for e in self._by_id.values() if e.is_active or not active_only]


class InMemoryTimesheets:
    def __init__(self):
        self._by_key: dict[tuple[int, date], TimesheetEntry] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimesheetEntry]:
        return self._by_key.get((employee_id, work_date))

    def list_for_period(self, *, employee_ids, start_date, end_date, status=EntryStatus.ACTIVE):
        items = [
            e
            for e in self._by_key.values()
            if e.employee_id in employee_ids
            and start_date <= e.work_date <= end_date
            and (status is None or e.status == status)
        ]
        return sorted(items, key=lambda e: (e.employee_id, e.work_date))

    def upsert(self, entry: TimesheetEntry) -> TimesheetEntry:
        key = (entry.employee_id, entry.work_date)
        existing = self._by_key.get(key)
        if existing:
            entry = replace(entry, entry_id=existing.entry_id)
        else:
            self._id += 1
            entry = replace(entry, entry_id=self._id)
        self._by_key[key] = entry
        return entry


class InMemoryDeductions:
    def __init__(self):
        self.items: dict[int, Deduction] = {}

    def get_by_id(self, deduction_id: int) -> Optional[Deduction]:
        return self.items.get(deduction_id)

    def list_for_period(self, *, employee_ids, period_start, period_end, status=DeductionStatus.ACTIVE):
        return [
            d
            for d in self.items.values()
            if d.employee_id in employee_ids
            and d.period_start == period_start
            and d.period_end == period_end
            and (status is None or d.status == status)
        ]

    def list_for_advance(self, advance_id: int):
        return [d for d in self.items.values() if d.linked_advance_id == advance_id]

    def create(self, deduction: Deduction) -> Deduction:
        created = replace(deduction, deduction_id=len(self.items) + 1)
        self.items[created.deduction_id] = created
        return created

    def set_status(self, deduction_id: int, status: DeductionStatus) -> bool:
        if deduction_id not in self.items:
            return False
        self.items[deduction_id] = replace(self.items[deduction_id], status=status)
        return True


class InMemoryAdvances:
    def __init__(self):
        self.items: dict[int, Advance] = {}

    def get_by_id(self, advance_id: int) -> Optional[Advance]:
        return self.items.get(advance_id)

    def list(self, *, employee_id: Optional[int] = None):
        items = [a for a in self.items.values() if employee_id is None or a.employee_id == employee_id]
        return sorted(items, key=lambda a: a.date_issued, reverse=True)

    def create(self, advance: Advance) -> Advance:
        created = replace(advance, advance_id=len(self.items) + 1)
        self.items[created.advance_id] = created
        return created

    def set_status(self, advance_id: int, status: AdvanceStatus) -> bool:
        if advance_id not in self.items:
            return False
        self.items[advance_id] = replace(self.items[advance_id], status=status)
        return True


class InMemoryPayroll:
    def __init__(self):
        self._by_key: dict[tuple[int, date], PayrollEntry] = {}
        self._id = 0
        self.saves = 0

    def get_by_id(self, entry_id: int) -> Optional[PayrollEntry]:
        return next((e for e in self._by_key.values() if e.entry_id == entry_id), None)

    def get_for_employee_and_period(self, employee_id: int, period_start: date) -> Optional[PayrollEntry]:
        return self._by_key.get((employee_id, period_start))

    def list_for_period(self, period_start: date, *, employee_ids=None):
        return [
            e
            for (employee_id, start), e in self._by_key.items()
            if start == period_start and (employee_ids is None or employee_id in employee_ids)
        ]

    def list_covering(self, employee_id: int, day: date):
        return sorted(
            (e for e in self._by_key.values() if e.employee_id == employee_id and e.period_start <= day <= e.period_end),
            key=lambda e: e.period_start,
        )

    def list_paid_for_employee(self, employee_id: int):
        items = [e for e in self._by_key.values() if e.employee_id == employee_id and e.status == PaymentStatus.PAID]
        return sorted(items, key=lambda e: e.period_start, reverse=True)

    def save(self, entry: PayrollEntry) -> PayrollEntry:
        self.saves += 1
        key = (entry.employee_id, entry.period_start)
        existing = self._by_key.get(key)
        if existing:
            entry = replace(entry, entry_id=existing.entry_id)
        elif entry.entry_id is None:
            self._id += 1
            entry = replace(entry, entry_id=self._id)
        self._by_key[key] = entry
        return entry


class InMemoryPeriodLocks:
    def __init__(self):
        self.lock: Optional[PeriodLock] = None

    def get(self) -> Optional[PeriodLock]:
        return self.lock

    def save(self, lock: Optional[PeriodLock]) -> None:
        self.lock = lock


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 12, 10, 18, 30)


@pytest.fixture
def period() -> PayrollPeriod:
    return PayrollPeriod(start=date(2025, 12, 8), end=date(2025, 12, 21))


@pytest.fixture
def hourly_employee() -> Employee:
    return Employee(employee_id=1, name="Ana", hourly_rate=100.0)


@pytest.fixture
def per_shift_employee() -> Employee:
    return Employee(
        employee_id=2,
        name="Bruno",
        per_shift_amount=800.0,
        shift_start=time(9, 0),
        shift_end=time(18, 0),
        break_minutes=60,
    )


@pytest.fixture
def salaried_employee() -> Employee:
    return Employee(employee_id=3, name="Carla", salary=24000.0)


@pytest.fixture
def employees_repo(hourly_employee, per_shift_employee, salaried_employee):
    return InMemoryEmployees([hourly_employee, per_shift_employee, salaried_employee])


@pytest.fixture
def timesheets_repo():
    return InMemoryTimesheets()


@pytest.fixture
def deductions_repo():
    return InMemoryDeductions()


@pytest.fixture
def advances_repo():
    return InMemoryAdvances()


@pytest.fixture
def payroll_repo():
    return InMemoryPayroll()


@pytest.fixture
def period_locks_repo():
    return InMemoryPeriodLocks()


@pytest.fixture
def container(employees_repo, timesheets_repo, deductions_repo, advances_repo, payroll_repo, period_locks_repo):
    return wire_container(
        employees_repo=employees_repo,
        timesheets_repo=timesheets_repo,
        deductions_repo=deductions_repo,
        advances_repo=advances_repo,
        payroll_repo=payroll_repo,
        period_locks_repo=period_locks_repo,
    )
