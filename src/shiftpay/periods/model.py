from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayrollPeriod:
    """Inclusive date range of one payroll cycle, identified by its start."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError("Period end cannot be before period start")

    @classmethod
    def parse(cls, start: str, end: str) -> "PayrollPeriod":
        return cls(start=parse_iso_date(start), end=parse_iso_date(end))

    @classmethod
    def cycle_for(cls, day: date, *, anchor: date, length_days: int) -> "PayrollPeriod":
        """The fixed-length cycle containing ``day``, counted from ``anchor``."""

        offset = (day - anchor).days // length_days
        start = anchor + timedelta(days=offset * length_days)
        return cls(start=start, end=start + timedelta(days=length_days - 1))

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class PeriodLock:
    """A manually pinned "current" period, overriding the automatic cycle."""

    period: PayrollPeriod
    locked_at: datetime
    locked_by: str
