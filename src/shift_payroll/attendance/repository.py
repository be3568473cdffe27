from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import RecordSource, RecordStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_period(
        self,
        *,
        organization_id: str,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
        statuses: Optional[Iterable[RecordStatus]] = None,
        source: RecordSource = RecordSource.TIMECARD,
    ) -> Sequence[AttendanceRecord]:
        """Records of one source with start_date <= work_date < end_date."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        record_id: str,
        status: RecordStatus,
        source: RecordSource = RecordSource.TIMECARD,
        note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
