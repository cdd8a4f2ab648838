from datetime import date

import pytest

from shiftpay.core.exceptions import ValidationError
from shiftpay.periods.model import PayrollPeriod


@pytest.mark.parametrize(
    "day, start, end",
    [
        (date(2025, 12, 8), date(2025, 12, 8), date(2025, 12, 21)),
        (date(2025, 12, 21), date(2025, 12, 8), date(2025, 12, 21)),
        (date(2025, 12, 22), date(2025, 12, 22), date(2026, 1, 4)),
        (date(2025, 12, 7), date(2025, 11, 24), date(2025, 12, 7)),
    ],
)
def test_period_for_counts_fourteen_day_cycles(container, day, start, end):
    assert container.period_service.period_for(day) == PayrollPeriod(start=start, end=end)


def test_lock_overrides_current_period(container, fixed_now):
    locked = PayrollPeriod(start=date(2025, 11, 24), end=date(2025, 12, 7))

    assert container.period_service.current_period(fixed_now.date()).start == date(2025, 12, 8)

    lock = container.period_service.lock(locked, locked_by="admin", now=fixed_now)
    assert lock.locked_at == fixed_now
    assert container.period_service.current_period(fixed_now.date()) == locked
    assert container.period_service.get_lock() == lock

    container.period_service.unlock()
    assert container.period_service.get_lock() is None
    assert container.period_service.current_period(fixed_now.date()).start == date(2025, 12, 8)


def test_lock_requires_who(container):
    with pytest.raises(ValidationError):
        container.period_service.lock(PayrollPeriod(start=date(2025, 12, 8), end=date(2025, 12, 21)), locked_by=" ")


def test_period_validation():
    with pytest.raises(ValidationError):
        PayrollPeriod.parse("2025-12-21", "2025-12-08")
    with pytest.raises(ValidationError):
        PayrollPeriod.parse("2025-13-01", "2025-12-08")

    period = PayrollPeriod.parse("2025-12-08", "2025-12-21")
    assert period.days == 14
    assert period.contains(date(2025, 12, 21))
    assert not period.contains(date(2025, 12, 22))


def test_period_containing_prefers_lock_that_covers_the_day(container, fixed_now):
    locked = PayrollPeriod(start=date(2025, 12, 1), end=date(2025, 12, 14))
    service = container.period_service

    assert service.period_containing(date(2025, 12, 3)).start == date(2025, 11, 24)

    service.lock(locked, locked_by="admin", now=fixed_now)
    assert service.period_containing(date(2025, 12, 3)) == locked
    assert service.period_containing(date(2025, 12, 14)) == locked
    assert service.period_containing(date(2025, 12, 15)) == PayrollPeriod(
        start=date(2025, 12, 8), end=date(2025, 12, 21)
    )
