from __future__ import annotations

from typing import Optional

from ...attendance.model import ShiftRecord
from ...common.holiday_calendar import HolidayLookup
from ...common.time_utils import minutes_between, night_minutes_in_range, normalize_span, to_minutes
from ...policy.model import PayPolicy
from .base import PayrollCalculator


class ShiftPayrollCalculator(PayrollCalculator):
    """Wall-clock shifts: interval overlap on minute offsets.

    With ``allow_overnight`` an end earlier than the start is read as the next
    day (22:00-05:00 is 7 hours). Without it the naive same-day difference is
    used and such a shift counts as zero minutes.
    """

    def __init__(self, holidays: Optional[HolidayLookup] = None, *, allow_overnight: bool = True):
        super().__init__(holidays)
        self.allow_overnight = allow_overnight

    def measure(self, record: ShiftRecord, policy: PayPolicy) -> tuple[int, int, int]:
        if self.allow_overnight:
            start, end = normalize_span(record.start_time, record.end_time)
        else:
            start = to_minutes(record.start_time)
            end = start + minutes_between(record.start_time, record.end_time)
        worked = end - start

        night = 0
        if policy.night.enabled:
            night = night_minutes_in_range(
                start,
                end,
                to_minutes(policy.night.window_start),
                to_minutes(policy.night.window_end),
            )
        return worked, 0, night
