from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

import holidays

from ..core.constants import DEFAULT_HOLIDAY_COUNTRY


class HolidayLookup(Protocol):
    def is_public_holiday(self, day: date) -> bool:
        raise NotImplementedError

    def is_weekend(self, day: date) -> bool:
        raise NotImplementedError


class HolidayCalendar:
    """Public holidays for one country, backed by the ``holidays`` package."""

    def __init__(self, country: str = DEFAULT_HOLIDAY_COUNTRY, *, subdiv: Optional[str] = None):
        self.country = country
        self._holidays = holidays.country_holidays(country, subdiv=subdiv)

    def is_public_holiday(self, day: date) -> bool:
        return day in self._holidays

    def is_weekend(self, day: date) -> bool:
        # Saturday=5, Sunday=6
        return day.weekday() >= 5


_default_calendar: Optional[HolidayCalendar] = None


def default_calendar() -> HolidayCalendar:
    global _default_calendar
    if _default_calendar is None:
        _default_calendar = HolidayCalendar()
    return _default_calendar
