from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_amount
from ..core.enums import AdvanceStatus, DeductionStatus, DeductionType
from ..core.exceptions import ConflictError, EmployeeNotFoundError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..periods.model import PayrollPeriod
from ..periods.service import PeriodService
from .model import Advance, Deduction
from .repository import AdvanceRepository, DeductionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedAdvance:
    advance: Advance
    deduction: Deduction


class AdvanceService:
    """Salary advances, each recovered by a linked advance-type deduction."""

    def __init__(
        self,
        advances: AdvanceRepository,
        deductions: DeductionRepository,
        employees: EmployeeRepository,
        periods: PeriodService,
    ):
        self._advances = advances
        self._deductions = deductions
        self._employees = employees
        self._periods = periods

    def issue(
        self,
        *,
        employee_id: int,
        amount: float,
        date_issued: date,
        reason: Optional[str] = None,
        period: Optional[PayrollPeriod] = None,
    ) -> IssuedAdvance:
        """Record the advance and deduct it in ``period``.

        Without an explicit period the advance lands in the locked period when
        that covers the issue date, otherwise in the issue date's cycle.
        """

        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(int(employee_id))

        amount = require_amount(amount)
        period = period or self._periods.period_containing(date_issued)

        advance = self._advances.create(
            Advance(
                advance_id=None,
                employee_id=int(employee_id),
                amount=amount,
                date_issued=date_issued,
                reason=(reason or "").strip() or None,
            )
        )
        deduction = self._deductions.create(
            Deduction(
                deduction_id=None,
                employee_id=int(employee_id),
                period_start=period.start,
                period_end=period.end,
                deduction_type=DeductionType.ADVANCE,
                amount=amount,
                description=f"Advance Salary - {date_issued.isoformat()}",
                linked_advance_id=advance.advance_id,
            )
        )
        logger.info(
            "Advance %s of %.2f issued to employee %s, deducted in %s..%s",
            advance.advance_id, amount, employee_id, period.start, period.end,
        )
        return IssuedAdvance(advance=advance, deduction=deduction)

    def cancel(self, advance_id: int) -> list[Deduction]:
        """Cancel the advance and soft-delete its deductions. Returns the deductions removed."""

        advance = self._advances.get_by_id(int(advance_id))
        if not advance:
            raise NotFoundError(f"Advance {advance_id} not found")
        if advance.status == AdvanceStatus.CANCELLED:
            raise ConflictError("Advance is already cancelled")

        self._advances.set_status(int(advance_id), AdvanceStatus.CANCELLED)

        removed = []
        for deduction in self._deductions.list_for_advance(int(advance_id)):
            if deduction.is_active:
                self._deductions.set_status(int(deduction.deduction_id), DeductionStatus.DELETED)
                removed.append(replace(deduction, status=DeductionStatus.DELETED))
        return removed

    def list(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Advance]:
        items = self._advances.list(employee_id=employee_id)
        if start and end:
            items = [a for a in items if start <= a.date_issued <= end]
        return items
