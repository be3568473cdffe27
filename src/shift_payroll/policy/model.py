from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..core import constants as c


def _decimal(value: Any, default: Decimal) -> Decimal:
    if value is None:
        return default
    return Decimal(str(value))


def _int(value: Any, default: int) -> int:
    if value is None:
        return default
    return int(value)


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)


@dataclass(frozen=True)
class NightPremium:
    enabled: bool = True
    rate: Decimal = c.DEFAULT_NIGHT_RATE
    window_start: str = c.DEFAULT_NIGHT_START
    window_end: str = c.DEFAULT_NIGHT_END


@dataclass(frozen=True)
class OvertimePremium:
    enabled: bool = True
    rate: Decimal = c.DEFAULT_OVERTIME_RATE
    daily_threshold_minutes: int = c.DEFAULT_OVERTIME_THRESHOLD_MINUTES


@dataclass(frozen=True)
class HolidayPremium:
    enabled: bool = True
    rate: Decimal = c.DEFAULT_HOLIDAY_RATE
    includes_weekend: bool = True


@dataclass(frozen=True)
class TransportAllowance:
    enabled: bool = False
    per_day_amount: Decimal = c.DEFAULT_TRANSPORT_PER_DAY


@dataclass(frozen=True)
class PayPolicy:
    """Organization pay rules, read-only input to the payroll calculators.

    Values are taken as given. Range checks belong to whoever writes the
    policy (see ``common.validators.validate_policy``).
    """

    default_hourly_wage: Decimal = c.DEFAULT_HOURLY_WAGE
    night: NightPremium = field(default_factory=NightPremium)
    overtime: OvertimePremium = field(default_factory=OvertimePremium)
    holiday: HolidayPremium = field(default_factory=HolidayPremium)
    transport: TransportAllowance = field(default_factory=TransportAllowance)

    @classmethod
    def default(cls) -> "PayPolicy":
        return cls()

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]]) -> "PayPolicy":
        """Build from an organization settings document, filling documented defaults."""
        if not settings:
            return cls.default()
        s = settings
        return cls(
            default_hourly_wage=_decimal(s.get("defaultHourlyWage"), c.DEFAULT_HOURLY_WAGE),
            night=NightPremium(
                enabled=_flag(s.get("nightPremiumEnabled"), True),
                rate=_decimal(s.get("nightPremiumRate"), c.DEFAULT_NIGHT_RATE),
                window_start=s.get("nightStart") or c.DEFAULT_NIGHT_START,
                window_end=s.get("nightEnd") or c.DEFAULT_NIGHT_END,
            ),
            overtime=OvertimePremium(
                enabled=_flag(s.get("overtimePremiumEnabled"), True),
                rate=_decimal(s.get("overtimePremiumRate"), c.DEFAULT_OVERTIME_RATE),
                daily_threshold_minutes=_int(
                    s.get("overtimeDailyThresholdMinutes"), c.DEFAULT_OVERTIME_THRESHOLD_MINUTES
                ),
            ),
            holiday=HolidayPremium(
                enabled=_flag(s.get("holidayPremiumEnabled"), True),
                rate=_decimal(s.get("holidayPremiumRate"), c.DEFAULT_HOLIDAY_RATE),
                includes_weekend=_flag(s.get("holidayIncludesWeekend"), True),
            ),
            transport=TransportAllowance(
                enabled=_flag(s.get("transportAllowanceEnabled"), False),
                per_day_amount=_decimal(s.get("transportAllowancePerShift"), c.DEFAULT_TRANSPORT_PER_DAY),
            ),
        )

    def to_settings(self) -> dict[str, Any]:
        return {
            "defaultHourlyWage": float(self.default_hourly_wage),
            "nightPremiumEnabled": self.night.enabled,
            "nightPremiumRate": float(self.night.rate),
            "nightStart": self.night.window_start,
            "nightEnd": self.night.window_end,
            "overtimePremiumEnabled": self.overtime.enabled,
            "overtimePremiumRate": float(self.overtime.rate),
            "overtimeDailyThresholdMinutes": self.overtime.daily_threshold_minutes,
            "holidayPremiumEnabled": self.holiday.enabled,
            "holidayPremiumRate": float(self.holiday.rate),
            "holidayIncludesWeekend": self.holiday.includes_weekend,
            "transportAllowanceEnabled": self.transport.enabled,
            "transportAllowancePerShift": float(self.transport.per_day_amount),
        }
