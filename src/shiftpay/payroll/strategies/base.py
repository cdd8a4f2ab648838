from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import CompensationMode
from ...employees.model import Employee


@dataclass(frozen=True)
class BasePay:
    """Pay before overtime, plus the hourly rate overtime is priced from."""

    amount: float
    hourly_rate: float
    mode: CompensationMode


class PayStrategy(ABC):
    """Strategy Pattern: encapsulate how base pay is derived for a compensation mode."""

    @abstractmethod
    def base_pay(self, employee: Employee, *, worked_minutes: int, working_days: int) -> BasePay:
        raise NotImplementedError
