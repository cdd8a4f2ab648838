from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union

from ..core.exceptions import ValidationError

ClockValue = Union[str, time, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: ClockValue) -> Optional[time]:
    """Parse an "HH:MM" / "HH:MM:SS" clock value.

    Empty strings and None mean "not recorded" and come back as None.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value

    v = str(value).strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def clock_minutes(value: time) -> int:
    """Minutes since midnight, seconds dropped."""
    return value.hour * 60 + value.minute


def now_local() -> datetime:
    """Wall-clock time of the workshop; services take an explicit ``now`` in tests."""
    return datetime.now()
