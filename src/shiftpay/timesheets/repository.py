from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EntryStatus
from .model import TimesheetEntry


class TimesheetRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimesheetEntry]:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        employee_ids: Sequence[int],
        start_date: date,
        end_date: date,
        status: Optional[EntryStatus] = EntryStatus.ACTIVE,
    ) -> Sequence[TimesheetEntry]:
        raise NotImplementedError

    def upsert(self, entry: TimesheetEntry) -> TimesheetEntry:
        """Insert or replace the entry for (employee_id, work_date)."""

        raise NotImplementedError
