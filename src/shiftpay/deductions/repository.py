from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AdvanceStatus, DeductionStatus
from .model import Advance, Deduction


class DeductionRepository(Protocol):
    def get_by_id(self, deduction_id: int) -> Optional[Deduction]:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        employee_ids: Sequence[int],
        period_start: date,
        period_end: date,
        status: Optional[DeductionStatus] = DeductionStatus.ACTIVE,
    ) -> Sequence[Deduction]:
        raise NotImplementedError

    def list_for_advance(self, advance_id: int) -> Sequence[Deduction]:
        raise NotImplementedError

    def create(self, deduction: Deduction) -> Deduction:
        raise NotImplementedError

    def set_status(self, deduction_id: int, status: DeductionStatus) -> bool:
        raise NotImplementedError


class AdvanceRepository(Protocol):
    def get_by_id(self, advance_id: int) -> Optional[Advance]:
        raise NotImplementedError

    def list(self, *, employee_id: Optional[int] = None) -> Sequence[Advance]:
        raise NotImplementedError

    def create(self, advance: Advance) -> Advance:
        raise NotImplementedError

    def set_status(self, advance_id: int, status: AdvanceStatus) -> bool:
        raise NotImplementedError
