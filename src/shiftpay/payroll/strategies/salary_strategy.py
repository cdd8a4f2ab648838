from __future__ import annotations

from ...core.constants import SALARY_DAYS_PER_MONTH, SALARY_HOURS_PER_DAY
from ...core.enums import CompensationMode
from ...employees.model import Employee
from .base import BasePay, PayStrategy


class SalaryPayStrategy(PayStrategy):
    """Fixed salary regardless of hours; the implied rate only prices overtime."""

    def base_pay(self, employee: Employee, *, worked_minutes: int, working_days: int) -> BasePay:
        salary = float(employee.salary or 0)
        return BasePay(
            amount=salary,
            hourly_rate=salary / SALARY_DAYS_PER_MONTH / SALARY_HOURS_PER_DAY,
            mode=CompensationMode.SALARY,
        )
