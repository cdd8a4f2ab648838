from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import PERIOD_ANCHOR, PERIOD_LENGTH_DAYS
from ..core.exceptions import ValidationError
from .model import PayrollPeriod, PeriodLock
from .repository import PeriodLockRepository

logger = logging.getLogger(__name__)


class PeriodService:
    """Resolves which payroll period a date belongs to.

    Periods are fixed-length cycles counted from an anchor date. An admin can
    pin the "current" period, which disables the automatic cycle until unlocked.
    """

    def __init__(
        self,
        locks: PeriodLockRepository,
        *,
        anchor: date = PERIOD_ANCHOR,
        length_days: int = PERIOD_LENGTH_DAYS,
    ):
        if length_days < 1:
            raise ValidationError("Period length must be at least one day")
        self._locks = locks
        self._anchor = anchor
        self._length_days = int(length_days)

    def period_for(self, day: date) -> PayrollPeriod:
        return PayrollPeriod.cycle_for(day, anchor=self._anchor, length_days=self._length_days)

    def period_containing(self, day: date) -> PayrollPeriod:
        """The locked period when it covers ``day``, otherwise the cycle of ``day``."""

        lock = self._locks.get()
        if lock and lock.period.contains(day):
            return lock.period
        return self.period_for(day)

    def current_period(self, today: date | None = None) -> PayrollPeriod:
        lock = self._locks.get()
        if lock:
            return lock.period
        return self.period_for(today or now_local().date())

    def get_lock(self) -> Optional[PeriodLock]:
        return self._locks.get()

    def lock(self, period: PayrollPeriod, *, locked_by: str, now: datetime | None = None) -> PeriodLock:
        lock = PeriodLock(
            period=period,
            locked_at=now or now_local(),
            locked_by=require_non_empty(locked_by, "locked_by"),
        )
        self._locks.save(lock)
        logger.info("Payroll period locked: %s to %s by %s", period.start, period.end, lock.locked_by)
        return lock

    def unlock(self) -> None:
        self._locks.save(None)
        logger.info("Payroll period unlocked")
