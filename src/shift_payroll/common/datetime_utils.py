from __future__ import annotations

from datetime import date, datetime


def date_key(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the next month (exclusive end)."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
