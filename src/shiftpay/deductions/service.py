from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.validators import require_amount
from ..core.enums import DeductionStatus, DeductionType
from ..core.exceptions import ConflictError, EmployeeNotFoundError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..periods.model import PayrollPeriod
from .model import Deduction
from .repository import DeductionRepository


@dataclass(frozen=True)
class NewDeduction:
    deduction_type: DeductionType
    amount: float
    description: Optional[str] = None


class DeductionService:
    """Ledger of amounts withheld from pay, per employee and period."""

    def __init__(self, deductions: DeductionRepository, employees: EmployeeRepository):
        self._deductions = deductions
        self._employees = employees

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(int(employee_id))

    @staticmethod
    def _parse_type(value) -> DeductionType:
        try:
            return DeductionType(value)
        except ValueError:
            raise ValidationError(f"Unknown deduction type: {value!r}")

    def add(
        self,
        *,
        employee_id: int,
        period: PayrollPeriod,
        deduction_type: DeductionType | str,
        amount: float,
        description: Optional[str] = None,
        linked_advance_id: Optional[int] = None,
    ) -> Deduction:
        self._require_employee(employee_id)
        return self._deductions.create(
            Deduction(
                deduction_id=None,
                employee_id=int(employee_id),
                period_start=period.start,
                period_end=period.end,
                deduction_type=self._parse_type(deduction_type),
                amount=require_amount(amount),
                description=(description or "").strip() or None,
                linked_advance_id=linked_advance_id,
            )
        )

    def replace_for_period(
        self,
        *,
        employee_id: int,
        period: PayrollPeriod,
        items: Sequence[NewDeduction],
    ) -> list[Deduction]:
        """Swap the manually entered deductions of a period for ``items``.

        Advance-linked deductions are left alone; they follow their advance.
        """

        self._require_employee(employee_id)
        parsed = [(self._parse_type(i.deduction_type), require_amount(i.amount), i.description) for i in items]

        for existing in self.list_for_period(employee_id, period):
            if existing.linked_advance_id is None:
                self._deductions.set_status(int(existing.deduction_id), DeductionStatus.DELETED)

        return [
            self.add(
                employee_id=employee_id,
                period=period,
                deduction_type=deduction_type,
                amount=amount,
                description=description,
            )
            for deduction_type, amount, description in parsed
        ]

    def delete(self, deduction_id: int) -> Deduction:
        """Soft-delete; the record stays for history."""

        deduction = self._deductions.get_by_id(int(deduction_id))
        if not deduction or not deduction.is_active:
            raise NotFoundError(f"Deduction {deduction_id} not found")
        if deduction.linked_advance_id is not None:
            raise ConflictError("Deduction belongs to an advance; cancel the advance instead")

        self._deductions.set_status(int(deduction_id), DeductionStatus.DELETED)
        return deduction

    def list_for_period(self, employee_id: int, period: PayrollPeriod) -> Sequence[Deduction]:
        return self._deductions.list_for_period(
            employee_ids=[int(employee_id)],
            period_start=period.start,
            period_end=period.end,
        )
