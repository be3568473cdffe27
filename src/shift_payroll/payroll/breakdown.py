from __future__ import annotations

from typing import Optional

from ..attendance.model import AttendanceRecord
from ..common.holiday_calendar import HolidayLookup
from ..policy.model import PayPolicy
from .calculator.factory import CalculatorFactory
from .model import PayBreakdown


def compute_breakdown(
    record: AttendanceRecord,
    policy: PayPolicy,
    *,
    holidays: Optional[HolidayLookup] = None,
    factory: Optional[CalculatorFactory] = None,
) -> PayBreakdown:
    """Pay components of a single record. Pure: same inputs give the same result."""
    factory = factory or CalculatorFactory(holidays)
    return factory.for_record(record).breakdown(record, policy)
