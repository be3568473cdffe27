"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440

DEFAULT_HOURLY_WAGE = Decimal("1100")

DEFAULT_NIGHT_RATE = Decimal("0.25")
DEFAULT_NIGHT_START = "22:00"
DEFAULT_NIGHT_END = "05:00"

DEFAULT_OVERTIME_RATE = Decimal("0.25")
DEFAULT_OVERTIME_THRESHOLD_MINUTES = 480

DEFAULT_HOLIDAY_RATE = Decimal("0.35")

DEFAULT_TRANSPORT_PER_DAY = Decimal("0")

DEFAULT_HOLIDAY_COUNTRY = "JP"

MAX_PREMIUM_RATE = Decimal("2")
