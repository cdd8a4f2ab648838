from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import DayType, EntryStatus


@dataclass(frozen=True)
class TimesheetEntry:
    """Domain entity: one employee's clock record for one calendar day."""

    entry_id: Optional[int]
    employee_id: int
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    break_minutes: int = 0
    day_type: DayType = DayType.WORK
    status: EntryStatus = EntryStatus.ACTIVE
    note: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == EntryStatus.ACTIVE

    @property
    def is_working_day(self) -> bool:
        return self.clock_in is not None
