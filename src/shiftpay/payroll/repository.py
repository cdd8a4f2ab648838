from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import PayrollEntry


class PayrollRepository(Protocol):
    def get_by_id(self, entry_id: int) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def get_for_employee_and_period(self, employee_id: int, period_start: date) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def list_for_period(
        self,
        period_start: date,
        *,
        employee_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[PayrollEntry]:
        raise NotImplementedError

    def list_covering(self, employee_id: int, day: date) -> Sequence[PayrollEntry]:
        """Entries of the employee whose period includes ``day``."""

        raise NotImplementedError

    def list_paid_for_employee(self, employee_id: int) -> Sequence[PayrollEntry]:
        """Paid entries, newest period first."""

        raise NotImplementedError

    def save(self, entry: PayrollEntry) -> PayrollEntry:
        """Insert or replace the entry for (employee_id, period_start)."""

        raise NotImplementedError
