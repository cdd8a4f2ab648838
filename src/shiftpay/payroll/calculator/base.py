from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...common.datetime_utils import ClockValue
from ...core.constants import DEFAULT_SHIFT_END
from ...core.enums import DayType, NightStatus


@dataclass(frozen=True)
class ShiftHours:
    """Minute breakdown of one shift. The default instance is the all-zero result."""

    total_minutes: int = 0
    billable_minutes: int = 0
    regular_minutes: int = 0
    overtime_minutes: int = 0
    night_status: Optional[NightStatus] = None
    dinner_break_deduction: int = 0


class ShiftCalculator(ABC):
    """Calculator interface (Strategy Pattern for shift hours)."""

    @abstractmethod
    def compute(
        self,
        clock_in: ClockValue,
        clock_out: ClockValue,
        break_minutes: int = 0,
        standard_shift_end: ClockValue = DEFAULT_SHIFT_END,
        day_type: DayType = DayType.WORK,
    ) -> ShiftHours:
        raise NotImplementedError
