from __future__ import annotations

from ...core.enums import CompensationMode
from ...employees.model import Employee
from .base import BasePay, PayStrategy


class HourlyPayStrategy(PayStrategy):
    """Rate times hours worked."""

    def base_pay(self, employee: Employee, *, worked_minutes: int, working_days: int) -> BasePay:
        rate = float(employee.hourly_rate or 0)
        return BasePay(amount=rate * worked_minutes / 60, hourly_rate=rate, mode=CompensationMode.HOURLY)
