from __future__ import annotations

from ...common.datetime_utils import ClockValue, clock_minutes, parse_clock
from ...core.constants import (
    DEFAULT_SHIFT_END,
    DINNER_WINDOW_END,
    DINNER_WINDOW_START,
    MINUTES_PER_DAY,
    NIGHT_SHIFT_THRESHOLD,
)
from ...core.enums import DayType, NightStatus
from .base import ShiftCalculator, ShiftHours


def _overlap(start: int, end: int, window_start: int, window_end: int) -> int:
    return max(0, min(end, window_end) - max(start, window_start))


class StandardShiftCalculator(ShiftCalculator):
    """Standard rules for a work day.

    - clock-out before clock-in means the shift ended the next day
    - time after the standard shift end is overtime
    - the dinner window is unpaid, taken from whichever side of the shift end it falls on
    - the configured break comes out of regular time first, then overtime
    """

    def __init__(
        self,
        *,
        dinner_start: ClockValue = DINNER_WINDOW_START,
        dinner_end: ClockValue = DINNER_WINDOW_END,
        night_threshold: ClockValue = NIGHT_SHIFT_THRESHOLD,
    ):
        self._dinner_start = clock_minutes(parse_clock(dinner_start))
        self._dinner_end = clock_minutes(parse_clock(dinner_end))
        self._night_threshold = clock_minutes(parse_clock(night_threshold))

    def _dinner_overlap(self, start: int, end: int) -> int:
        # A shift is shorter than a day, so at most the window and the next day's one apply.
        return sum(
            _overlap(start, end, self._dinner_start + offset, self._dinner_end + offset)
            for offset in (0, MINUTES_PER_DAY)
        )

    def compute(
        self,
        clock_in: ClockValue,
        clock_out: ClockValue,
        break_minutes: int = 0,
        standard_shift_end: ClockValue = DEFAULT_SHIFT_END,
        day_type: DayType = DayType.WORK,
    ) -> ShiftHours:
        start_t = parse_clock(clock_in)
        end_t = parse_clock(clock_out)
        if start_t is None or end_t is None:
            return ShiftHours()

        start = clock_minutes(start_t)
        end = clock_minutes(end_t)
        if end < start:
            end += MINUTES_PER_DAY

        total = end - start
        break_left = max(0, int(break_minutes or 0))

        if DayType(day_type) == DayType.TRAVEL:
            billable = max(0, total - break_left)
            return ShiftHours(
                total_minutes=total,
                billable_minutes=billable,
                regular_minutes=billable,
                night_status=NightStatus.TRAVEL,
            )

        cutoff = clock_minutes(parse_clock(standard_shift_end) or parse_clock(DEFAULT_SHIFT_END))
        regular_end = min(end, cutoff)
        overtime_start = max(start, cutoff)

        regular = max(0, regular_end - start) - self._dinner_overlap(start, regular_end)
        overtime = max(0, end - overtime_start) - self._dinner_overlap(overtime_start, end)

        taken = min(regular, break_left)
        regular -= taken
        break_left -= taken
        overtime = max(0, overtime - break_left)

        return ShiftHours(
            total_minutes=total,
            billable_minutes=regular + overtime,
            regular_minutes=regular,
            overtime_minutes=overtime,
            night_status=self._night_status(end),
            dinner_break_deduction=self._dinner_overlap(start, end),
        )

    def _night_status(self, end: int):
        if end > MINUTES_PER_DAY:
            return NightStatus.EXTENDED_NIGHT
        if end >= self._night_threshold:
            return NightStatus.NIGHT_SHIFT
        return None


_default_calculator = StandardShiftCalculator()


def compute_shift_hours(
    clock_in: ClockValue,
    clock_out: ClockValue,
    break_minutes: int = 0,
    standard_shift_end: ClockValue = DEFAULT_SHIFT_END,
    day_type: DayType = DayType.WORK,
) -> ShiftHours:
    """Shift breakdown with the standard 20:00-21:00 dinner window."""

    return _default_calculator.compute(clock_in, clock_out, break_minutes, standard_shift_end, day_type)
