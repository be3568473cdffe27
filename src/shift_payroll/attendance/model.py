from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from ..common.datetime_utils import date_key
from ..common.time_utils import to_minutes
from ..core.enums import RecordSource, RecordStatus


@dataclass(frozen=True)
class BreakPeriod:
    start_at: datetime
    end_at: Optional[datetime] = None


@dataclass(frozen=True)
class ShiftRecord:
    """Approved shift: wall-clock "HH:MM" start/end on one work date, no breaks."""

    record_id: str
    employee_id: str
    work_date: date
    start_time: str
    end_time: str
    status: RecordStatus = RecordStatus.APPROVED
    hourly_wage: Optional[Decimal] = None

    @property
    def source(self) -> RecordSource:
        return RecordSource.SHIFT

    @property
    def date_key(self) -> str:
        return date_key(self.work_date)

    @property
    def sort_key(self) -> tuple:
        return (self.work_date, to_minutes(self.start_time))


@dataclass(frozen=True)
class TimecardRecord:
    """Punched timecard day: clock-in/out timestamps plus break periods."""

    record_id: str
    employee_id: str
    work_date: date
    clock_in_at: Optional[datetime] = None
    clock_out_at: Optional[datetime] = None
    breaks: tuple[BreakPeriod, ...] = ()
    status: RecordStatus = RecordStatus.DRAFT
    hourly_wage: Optional[Decimal] = None
    note: Optional[str] = None

    @property
    def source(self) -> RecordSource:
        return RecordSource.TIMECARD

    @property
    def date_key(self) -> str:
        return date_key(self.work_date)

    @property
    def is_complete(self) -> bool:
        return self.clock_in_at is not None and self.clock_out_at is not None

    @property
    def sort_key(self) -> tuple:
        if self.clock_in_at is None:
            return (self.work_date, -1)
        return (self.work_date, self.clock_in_at.hour * 60 + self.clock_in_at.minute)


AttendanceRecord = Union[ShiftRecord, TimecardRecord]
