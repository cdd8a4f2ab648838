from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = True) -> Sequence[Employee]:
        raise NotImplementedError
