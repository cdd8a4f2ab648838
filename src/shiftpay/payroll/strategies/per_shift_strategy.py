from __future__ import annotations

from ...core.constants import FALLBACK_DAILY_HOURS
from ...core.enums import CompensationMode
from ...employees.model import Employee
from ..calculator.base import ShiftCalculator
from .base import BasePay, PayStrategy


class PerShiftPayStrategy(PayStrategy):
    """Flat amount per shift, prorated against the employee's standard day.

    base = amount * days * (worked minutes / (standard billable minutes * days))
    """

    def __init__(self, calculator: ShiftCalculator):
        self._calculator = calculator

    def base_pay(self, employee: Employee, *, worked_minutes: int, working_days: int) -> BasePay:
        amount = float(employee.per_shift_amount or 0)
        standard = self._calculator.compute(
            employee.shift_start,
            employee.shift_end,
            employee.break_minutes,
            employee.shift_end,
        )
        standard_hours = standard.billable_minutes / 60
        hourly_rate = amount / (standard_hours or FALLBACK_DAILY_HOURS)

        flat = amount * working_days
        expected_minutes = standard.billable_minutes * working_days
        if expected_minutes > 0:
            pay = flat * (worked_minutes / expected_minutes)
        else:
            pay = flat

        return BasePay(amount=pay, hourly_rate=hourly_rate, mode=CompensationMode.PER_SHIFT)
