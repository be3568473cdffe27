from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...common.holiday_calendar import HolidayLookup, default_calendar
from ...core.constants import MINUTES_PER_HOUR
from ...policy.model import PayPolicy
from ..model import ZERO, PayBreakdown, as_decimal, round_amount

logger = logging.getLogger(__name__)


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Subclasses measure minutes for their record type; pricing of the
    measured minutes is shared here.
    """

    def __init__(self, holidays: Optional[HolidayLookup] = None):
        self._holidays = holidays or default_calendar()

    @abstractmethod
    def measure(self, record: AttendanceRecord, policy: PayPolicy) -> tuple[int, int, int]:
        """Return (worked_minutes, break_minutes, night_minutes)."""

        raise NotImplementedError

    def breakdown(self, record: AttendanceRecord, policy: PayPolicy) -> PayBreakdown:
        hourly = as_decimal(record.hourly_wage if record.hourly_wage is not None else policy.default_hourly_wage)
        worked, break_minutes, night = self.measure(record, policy)
        logger.debug(
            "record %s on %s: worked=%s break=%s night=%s", record.record_id, record.date_key, worked, break_minutes, night
        )
        return self.price(
            hourly=hourly,
            worked_minutes=worked,
            break_minutes=break_minutes,
            night_minutes=night,
            work_date=record.work_date,
            policy=policy,
        )

    def is_holiday(self, work_date: date, policy: PayPolicy) -> bool:
        rule = policy.holiday
        if not rule.enabled:
            return False
        if self._holidays.is_public_holiday(work_date):
            return True
        return rule.includes_weekend and self._holidays.is_weekend(work_date)

    def price(
        self,
        *,
        hourly: Decimal,
        worked_minutes: int,
        break_minutes: int,
        night_minutes: int,
        work_date: date,
        policy: PayPolicy,
    ) -> PayBreakdown:
        hours = Decimal(worked_minutes) / MINUTES_PER_HOUR
        base = hourly * hours

        night_amount = ZERO
        if policy.night.enabled:
            night_amount = hourly * (Decimal(night_minutes) / MINUTES_PER_HOUR) * as_decimal(policy.night.rate)

        overtime_minutes = 0
        overtime_amount = ZERO
        if policy.overtime.enabled:
            # Threshold applies to this record alone, not the calendar day.
            overtime_minutes = max(0, worked_minutes - policy.overtime.daily_threshold_minutes)
            overtime_amount = hourly * (Decimal(overtime_minutes) / MINUTES_PER_HOUR) * as_decimal(policy.overtime.rate)

        holiday = self.is_holiday(work_date, policy)
        holiday_amount = hourly * hours * as_decimal(policy.holiday.rate) if holiday else ZERO

        return PayBreakdown(
            worked_minutes=worked_minutes,
            break_minutes=break_minutes,
            night_minutes=night_minutes,
            overtime_minutes=overtime_minutes,
            hourly_wage=hourly,
            is_holiday=holiday,
            base_amount=base,
            night_amount=night_amount,
            overtime_amount=overtime_amount,
            holiday_amount=holiday_amount,
            total_amount=round_amount(base + night_amount + overtime_amount + holiday_amount),
        )
