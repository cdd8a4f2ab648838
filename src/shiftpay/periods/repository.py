from __future__ import annotations

from typing import Optional, Protocol

from .model import PeriodLock


class PeriodLockRepository(Protocol):
    def get(self) -> Optional[PeriodLock]:
        raise NotImplementedError

    def save(self, lock: Optional[PeriodLock]) -> None:
        """Store the lock, or clear it when ``lock`` is None."""

        raise NotImplementedError
