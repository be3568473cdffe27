from datetime import date

from shift_payroll.common.holiday_calendar import HolidayCalendar


def test_japanese_new_year_is_public_holiday():
    cal = HolidayCalendar("JP")
    assert cal.is_public_holiday(date(2025, 1, 1))
    assert not cal.is_public_holiday(date(2025, 1, 8))


def test_weekend_detection():
    cal = HolidayCalendar("JP")
    assert cal.is_weekend(date(2025, 3, 1))  # Saturday
    assert cal.is_weekend(date(2025, 3, 2))  # Sunday
    assert not cal.is_weekend(date(2025, 3, 3))
