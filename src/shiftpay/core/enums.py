from __future__ import annotations

from enum import Enum


class CompensationMode(str, Enum):
    """How an employee's base pay is derived."""

    PER_SHIFT = "per_shift"
    HOURLY = "hourly"
    SALARY = "salary"


class DayType(str, Enum):
    WORK = "Work"
    TRAVEL = "Travel"


class NightStatus(str, Enum):
    """Night classification of a single shift."""

    NIGHT_SHIFT = "Night Shift"
    EXTENDED_NIGHT = "Extended Night"
    TRAVEL = "Travel"


class EntryStatus(str, Enum):
    ACTIVE = "active"
    VOIDED = "voided"


class DeductionType(str, Enum):
    ADVANCE = "advance"
    LOAN = "loan"
    OTHER = "other"


class DeductionStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class AdvanceStatus(str, Enum):
    ISSUED = "issued"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
