from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import PaymentStatus
from ..core.exceptions import EmployeeNotFoundError, NotFoundError
from ..deductions.model import Deduction
from ..deductions.repository import DeductionRepository
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..periods.model import PayrollPeriod
from ..timesheets.model import TimesheetEntry
from ..timesheets.repository import TimesheetRepository
from .calculator.base import ShiftCalculator
from .calculator.standard_calculator import StandardShiftCalculator
from .model import PayrollEntry, PayrollPolicy
from .recalculator import recalculate_payroll
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Use cases around stored payroll entries.

    Every read-recompute-write runs under one re-entrant lock so two requests
    cannot interleave and lose an update.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        timesheets: TimesheetRepository,
        deductions: DeductionRepository,
        payroll: PayrollRepository,
        *,
        calculator: Optional[ShiftCalculator] = None,
        policy: Optional[PayrollPolicy] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self._employees = employees
        self._timesheets = timesheets
        self._deductions = deductions
        self._payroll = payroll
        self._calculator = calculator or StandardShiftCalculator()
        self._policy = policy or PayrollPolicy()
        self._lock = lock or threading.RLock()

    def _recompute_and_save(
        self,
        employee: Employee,
        period: PayrollPeriod,
        entries: Sequence[TimesheetEntry],
        deductions: Sequence[Deduction],
        previous: Optional[PayrollEntry],
    ) -> PayrollEntry:
        entry = recalculate_payroll(
            employee,
            entries,
            deductions,
            previous,
            period=period,
            calculator=self._calculator,
            policy=self._policy,
        )
        if entry.is_adjusted and (previous is None or previous.adjustment_amount != entry.adjustment_amount):
            logger.warning(
                "Paid payroll for employee %s (%s..%s) changed by %.2f after payment",
                employee.employee_id, period.start, period.end, entry.adjustment_amount,
            )
        if previous is None:
            now = now_local()
            entry = replace(entry, created_at=now, updated_at=now)
        return self._payroll.save(entry)

    def recalculate(self, employee_id: int, period: PayrollPeriod) -> PayrollEntry:
        with self._lock:
            employee = self._employees.get_by_id(int(employee_id))
            if not employee:
                raise EmployeeNotFoundError(int(employee_id))

            logger.info("Recalculating payroll for employee %s (%s..%s)", employee_id, period.start, period.end)
            entries = self._timesheets.list_for_period(
                employee_ids=[employee.employee_id],
                start_date=period.start,
                end_date=period.end,
            )
            deductions = self._deductions.list_for_period(
                employee_ids=[employee.employee_id],
                period_start=period.start,
                period_end=period.end,
            )
            previous = self._payroll.get_for_employee_and_period(employee.employee_id, period.start)
            return self._recompute_and_save(employee, period, entries, deductions, previous)

    def recalculate_for_day(self, employee_id: int, day: date, period: PayrollPeriod) -> PayrollEntry:
        """Recompute ``period`` after an edit on ``day``.

        Other stored entries whose period also includes the day (a locked
        period overlapping the cycles, or the reverse) are refreshed too.
        """

        with self._lock:
            entry = self.recalculate(employee_id, period)
            for stored in self._payroll.list_covering(int(employee_id), day):
                if stored.period_start != period.start and stored.period is not None:
                    self.recalculate(employee_id, stored.period)
            return entry

    def recalculate_bulk(
        self,
        employee_ids: Sequence[int],
        period: PayrollPeriod,
        *,
        force: bool = False,
    ) -> list[PayrollEntry]:
        """Payroll for many employees at once.

        Stored entries are returned as-is unless ``force``; unknown employees
        are skipped. Timesheets and deductions are fetched in one batch.
        """

        ids = [int(i) for i in employee_ids]
        with self._lock:
            employees = {e.employee_id: e for e in self._employees.get_many(ids)}
            existing = {e.employee_id: e for e in self._payroll.list_for_period(period.start, employee_ids=ids)}

            to_calculate = [i for i in ids if i in employees and (force or i not in existing)]
            entries_by_employee: dict[int, list[TimesheetEntry]] = defaultdict(list)
            deductions_by_employee: dict[int, list[Deduction]] = defaultdict(list)
            if to_calculate:
                logger.info("Bulk payroll: recalculating %d of %d employees", len(to_calculate), len(ids))
                for t in self._timesheets.list_for_period(
                    employee_ids=to_calculate, start_date=period.start, end_date=period.end
                ):
                    entries_by_employee[t.employee_id].append(t)
                for d in self._deductions.list_for_period(
                    employee_ids=to_calculate, period_start=period.start, period_end=period.end
                ):
                    deductions_by_employee[d.employee_id].append(d)

            results: list[PayrollEntry] = []
            for employee_id in ids:
                if employee_id not in employees:
                    continue
                if employee_id in to_calculate:
                    results.append(
                        self._recompute_and_save(
                            employees[employee_id],
                            period,
                            entries_by_employee[employee_id],
                            deductions_by_employee[employee_id],
                            existing.get(employee_id),
                        )
                    )
                else:
                    results.append(existing[employee_id])
            return results

    def mark_paid(
        self,
        employee_ids: Sequence[int],
        period: PayrollPeriod,
        *,
        now: Optional[datetime] = None,
    ) -> list[PayrollEntry]:
        """Recompute, then record payment of the fresh net pay."""

        now = now or now_local()
        ids = [int(i) for i in employee_ids]
        with self._lock:
            known = {e.employee_id for e in self._employees.get_many(ids)}
            for employee_id in ids:
                if employee_id not in known:
                    raise EmployeeNotFoundError(employee_id)

            paid = []
            for employee_id in ids:
                entry = self.recalculate(employee_id, period)
                paid.append(
                    self._payroll.save(
                        replace(
                            entry,
                            status=PaymentStatus.PAID,
                            paid_at=now,
                            paid_net_pay=entry.net_pay,
                            is_adjusted=False,
                            adjustment_amount=0.0,
                            updated_at=now,
                        )
                    )
                )
            logger.info("Marked %d payroll entries paid for %s..%s", len(paid), period.start, period.end)
            return paid

    def mark_unpaid(
        self,
        employee_ids: Sequence[int],
        period: PayrollPeriod,
        *,
        now: Optional[datetime] = None,
    ) -> list[PayrollEntry]:
        """Reverse a payment. Employees without an entry for the period are skipped."""

        now = now or now_local()
        ids = [int(i) for i in employee_ids]
        with self._lock:
            reverted = []
            for entry in self._payroll.list_for_period(period.start, employee_ids=ids):
                reverted.append(
                    self._payroll.save(
                        replace(
                            entry,
                            status=PaymentStatus.UNPAID,
                            paid_at=None,
                            paid_net_pay=None,
                            is_adjusted=False,
                            adjustment_amount=0.0,
                            updated_at=now,
                        )
                    )
                )
            return reverted

    def get_entry(self, entry_id: int) -> PayrollEntry:
        entry = self._payroll.get_by_id(int(entry_id))
        if not entry:
            raise NotFoundError(f"Payroll entry {entry_id} not found")
        return entry

    def history(self, employee_id: int) -> Sequence[PayrollEntry]:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(int(employee_id))
        return self._payroll.list_paid_for_employee(int(employee_id))
