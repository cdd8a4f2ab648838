from __future__ import annotations

from dataclasses import dataclass, field

from ..employees.model import Employee
from .calculator.base import ShiftCalculator
from .calculator.standard_calculator import StandardShiftCalculator
from .strategies.base import PayStrategy
from .strategies.hourly_strategy import HourlyPayStrategy
from .strategies.per_shift_strategy import PerShiftPayStrategy
from .strategies.salary_strategy import SalaryPayStrategy


@dataclass
class PayStrategyFactory:
    """Factory Pattern: choose the pay strategy for an employee and period."""

    calculator: ShiftCalculator = field(default_factory=StandardShiftCalculator)

    def for_employee(self, employee: Employee, *, working_days: int) -> PayStrategy:
        # A per-shift employee with no shifts falls through to the other modes.
        if employee.per_shift_amount and working_days > 0:
            return PerShiftPayStrategy(self.calculator)
        if employee.hourly_rate:
            return HourlyPayStrategy()
        return SalaryPayStrategy()
