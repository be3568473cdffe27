from __future__ import annotations

from decimal import Decimal

from ..core.constants import MAX_PREMIUM_RATE, MINUTES_PER_DAY
from ..core.exceptions import InvalidFormatError, ValidationError
from .time_utils import to_minutes


def require_positive(value: Decimal, field_name: str) -> Decimal:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return value


def require_rate(value: Decimal, field_name: str) -> Decimal:
    if value is None or not (0 <= value <= MAX_PREMIUM_RATE):
        raise ValidationError(f"{field_name} must be between 0 and {MAX_PREMIUM_RATE}")
    return value


def require_clock_time(value: str, field_name: str) -> str:
    try:
        to_minutes(value)
    except InvalidFormatError as exc:
        raise ValidationError(f"{field_name}: {exc}") from exc
    return value


def validate_policy(policy) -> None:
    """Range checks applied when a policy is written.

    The calculators never call this: they accept whatever policy they are given.
    """
    require_positive(policy.default_hourly_wage, "defaultHourlyWage")
    require_rate(policy.night.rate, "nightPremiumRate")
    require_clock_time(policy.night.window_start, "nightStart")
    require_clock_time(policy.night.window_end, "nightEnd")
    require_rate(policy.overtime.rate, "overtimePremiumRate")
    threshold = policy.overtime.daily_threshold_minutes
    if not (0 <= threshold <= MINUTES_PER_DAY):
        raise ValidationError(f"overtimeDailyThresholdMinutes must be between 0 and {MINUTES_PER_DAY}")
    require_rate(policy.holiday.rate, "holidayPremiumRate")
    if policy.transport.per_day_amount < 0:
        raise ValidationError("transportAllowancePerShift must not be negative")
