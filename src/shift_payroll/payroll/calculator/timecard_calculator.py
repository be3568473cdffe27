from __future__ import annotations

from ...attendance.model import TimecardRecord
from ...common.time_utils import minutes_between_timestamps, night_minutes_scan, total_break_minutes
from ...policy.model import PayPolicy
from .base import PayrollCalculator


class TimecardPayrollCalculator(PayrollCalculator):
    """Standard rule: (out - in) - closed breaks, not below 0.

    Night minutes are counted minute by minute and exclude time on break.
    A timecard without clock-out is still in progress and counts as zero.
    """

    def measure(self, record: TimecardRecord, policy: PayPolicy) -> tuple[int, int, int]:
        if record.clock_out_at is None:
            return 0, total_break_minutes(record.breaks), 0

        gross = minutes_between_timestamps(record.clock_in_at, record.clock_out_at)
        breaks = total_break_minutes(record.breaks)
        worked = max(0, gross - breaks)

        night = 0
        if policy.night.enabled:
            night = night_minutes_scan(
                record.clock_in_at,
                record.clock_out_at,
                policy.night.window_start,
                policy.night.window_end,
                record.breaks,
            )
        return worked, breaks, night
