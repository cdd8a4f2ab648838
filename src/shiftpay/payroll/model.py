from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import ADJUSTMENT_TOLERANCE, OVERTIME_MULTIPLIER
from ..core.enums import CompensationMode, DayType, NightStatus, PaymentStatus
from ..periods.model import PayrollPeriod


@dataclass(frozen=True)
class PayrollPolicy:
    """Product-level pay rules.

    ``overtime_in_base_pay`` False prices base pay on regular minutes only, so
    overtime minutes are paid once, at the overtime multiplier. True prices base
    pay on all billable minutes and adds the overtime premium on top.
    """

    overtime_multiplier: float = OVERTIME_MULTIPLIER
    overtime_in_base_pay: bool = False
    adjustment_tolerance: float = ADJUSTMENT_TOLERANCE


@dataclass(frozen=True)
class DayBreakdown:
    work_date: date
    day_type: DayType
    billable_minutes: int
    regular_minutes: int
    overtime_minutes: int
    dinner_break_deduction: int
    night_status: Optional[NightStatus] = None


@dataclass(frozen=True)
class PayrollDerived:
    """Everything recalculation produces for one (employee, period)."""

    employee_id: int
    period_start: Optional[date]
    period_end: Optional[date]
    compensation_mode: CompensationMode
    hourly_rate: float
    base_pay: float
    overtime_pay: float
    gross_pay: float
    total_deductions: float
    advance_deductions: float
    loan_deductions: float
    net_pay: float
    working_days: int
    total_billable_minutes: int
    total_regular_minutes: int
    total_overtime_minutes: int
    days: tuple[DayBreakdown, ...] = ()


@dataclass(frozen=True)
class PayrollEntry:
    """Stored payroll record, unique per (employee_id, period_start).

    Derived fields are rewritten on every recalculation; ``status``,
    ``paid_at``, ``paid_net_pay`` and timestamps only change through
    payment-status operations.
    """

    employee_id: int
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    compensation_mode: CompensationMode = CompensationMode.SALARY
    hourly_rate: float = 0.0
    base_pay: float = 0.0
    overtime_pay: float = 0.0
    gross_pay: float = 0.0
    total_deductions: float = 0.0
    advance_deductions: float = 0.0
    loan_deductions: float = 0.0
    net_pay: float = 0.0
    working_days: int = 0
    total_billable_minutes: int = 0
    total_regular_minutes: int = 0
    total_overtime_minutes: int = 0
    days: tuple[DayBreakdown, ...] = ()
    entry_id: Optional[int] = None
    status: PaymentStatus = PaymentStatus.UNPAID
    paid_at: Optional[datetime] = None
    paid_net_pay: Optional[float] = None
    is_adjusted: bool = False
    adjustment_amount: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    @property
    def period(self) -> Optional[PayrollPeriod]:
        if self.period_start is None or self.period_end is None:
            return None
        return PayrollPeriod(start=self.period_start, end=self.period_end)
