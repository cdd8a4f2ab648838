from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import CompensationMode


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee and the inputs needed to price their time.

    Note: plain data object; edits happen outside the payroll core.
    """

    employee_id: int
    name: str
    hourly_rate: Optional[float] = None
    per_shift_amount: Optional[float] = None
    salary: Optional[float] = None
    shift_start: time = time(9, 0)
    shift_end: time = time(18, 0)
    break_minutes: int = 0
    is_active: bool = True

    @property
    def compensation_mode(self) -> CompensationMode:
        if self.per_shift_amount:
            return CompensationMode.PER_SHIFT
        if self.hourly_rate:
            return CompensationMode.HOURLY
        return CompensationMode.SALARY
