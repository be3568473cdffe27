from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceRecord, ShiftRecord, TimecardRecord
from ...common.holiday_calendar import HolidayLookup
from .base import PayrollCalculator
from .shift_calculator import ShiftPayrollCalculator
from .timecard_calculator import TimecardPayrollCalculator


class CalculatorFactory:
    """Factory Pattern: choose the calculator matching the record type."""

    def __init__(self, holidays: Optional[HolidayLookup] = None, *, allow_overnight_shifts: bool = True):
        self._shift = ShiftPayrollCalculator(holidays, allow_overnight=allow_overnight_shifts)
        self._timecard = TimecardPayrollCalculator(holidays)

    def for_record(self, record: AttendanceRecord) -> PayrollCalculator:
        if isinstance(record, TimecardRecord):
            return self._timecard
        if isinstance(record, ShiftRecord):
            return self._shift
        raise TypeError(f"Unsupported attendance record type: {type(record)!r}")
