"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

MINUTES_PER_DAY = 24 * 60

DEFAULT_SHIFT_END = "18:00"

DINNER_WINDOW_START = "20:00"
DINNER_WINDOW_END = "21:00"
NIGHT_SHIFT_THRESHOLD = "20:00"

OVERTIME_MULTIPLIER = 1.5
SALARY_DAYS_PER_MONTH = 30
SALARY_HOURS_PER_DAY = 8
FALLBACK_DAILY_HOURS = 8

ADJUSTMENT_TOLERANCE = 0.01

PERIOD_ANCHOR = date(2025, 12, 8)
PERIOD_LENGTH_DAYS = 14

LOCKED_PERIOD_SETTING = "locked_payroll_period"
