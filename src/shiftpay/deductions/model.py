from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AdvanceStatus, DeductionStatus, DeductionType


@dataclass(frozen=True)
class Deduction:
    """Domain entity: an amount withheld from one employee's pay for one period."""

    deduction_id: Optional[int]
    employee_id: int
    period_start: date
    period_end: date
    deduction_type: DeductionType
    amount: float
    description: Optional[str] = None
    status: DeductionStatus = DeductionStatus.ACTIVE
    linked_advance_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == DeductionStatus.ACTIVE


@dataclass(frozen=True)
class Advance:
    """Salary paid out ahead of payday; recovered through a linked deduction."""

    advance_id: Optional[int]
    employee_id: int
    amount: float
    date_issued: date
    reason: Optional[str] = None
    status: AdvanceStatus = AdvanceStatus.ISSUED
