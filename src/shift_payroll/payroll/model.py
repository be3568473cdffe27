from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import MonthlyReportStatus

ZERO = Decimal("0")


def as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_amount(value: Decimal) -> int:
    """Round a money amount half up to a whole currency unit."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PayBreakdown:
    """Pay components of one attendance record (transport excluded)."""

    worked_minutes: int
    break_minutes: int
    night_minutes: int
    overtime_minutes: int
    hourly_wage: Decimal
    is_holiday: bool
    base_amount: Decimal
    night_amount: Decimal
    overtime_amount: Decimal
    holiday_amount: Decimal
    total_amount: int


@dataclass
class PayTotals:
    """Mutable accumulator for summing breakdowns."""

    worked_minutes: int = 0
    break_minutes: int = 0
    night_minutes: int = 0
    overtime_minutes: int = 0
    base_amount: Decimal = ZERO
    night_amount: Decimal = ZERO
    overtime_amount: Decimal = ZERO
    holiday_amount: Decimal = ZERO

    def add(self, bd: PayBreakdown) -> None:
        self.worked_minutes += bd.worked_minutes
        self.break_minutes += bd.break_minutes
        self.night_minutes += bd.night_minutes
        self.overtime_minutes += bd.overtime_minutes
        self.base_amount += bd.base_amount
        self.night_amount += bd.night_amount
        self.overtime_amount += bd.overtime_amount
        self.holiday_amount += bd.holiday_amount

    @property
    def premium_sum(self) -> Decimal:
        return self.base_amount + self.night_amount + self.overtime_amount + self.holiday_amount


@dataclass(frozen=True)
class PayrollSummary:
    employee_id: Optional[str]
    days_worked: int
    record_count: int
    worked_minutes: int
    break_minutes: int
    night_minutes: int
    overtime_minutes: int
    base_amount: Decimal
    night_amount: Decimal
    overtime_amount: Decimal
    holiday_amount: Decimal
    transport_amount: Decimal
    grand_total: int
    all_approved: bool


@dataclass(frozen=True)
class DailyGroup:
    work_date: date
    records: tuple[AttendanceRecord, ...]
    worked_minutes: int
    break_minutes: int
    night_minutes: int
    overtime_minutes: int
    base_amount: Decimal
    night_amount: Decimal
    overtime_amount: Decimal
    holiday_amount: Decimal
    transport_amount: Decimal
    total_amount: int

    @property
    def date_key(self) -> str:
        return self.work_date.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class ChartPoint:
    day: int
    hours: float
    status: str


@dataclass(frozen=True)
class MonthlyReport:
    """Frozen monthly payroll snapshot for one employee."""

    organization_id: str
    employee_id: str
    year: int
    month: int
    days_worked: int
    total_work_minutes: int
    total_break_minutes: int
    total_night_minutes: int
    total_overtime_minutes: int
    base_wage: int
    night_premium: int
    overtime_premium: int
    holiday_premium: int
    transport_allowance: int
    total_amount: int
    record_count: int
    status: MonthlyReportStatus
    version: int
    created_at: datetime
    updated_at: datetime
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    reverted_at: Optional[datetime] = None
    reverted_by: Optional[str] = None
    revert_reason: Optional[str] = None

    @property
    def report_id(self) -> str:
        return monthly_report_id(self.organization_id, self.year, self.month, self.employee_id)


def monthly_report_id(organization_id: str, year: int, month: int, employee_id: str) -> str:
    return f"{organization_id}_{year}-{month:02d}_{employee_id}"


@dataclass(frozen=True)
class EmployeeEstimate:
    summary: PayrollSummary
    days: list[DailyGroup] = field(default_factory=list)
    chart: list[ChartPoint] = field(default_factory=list)
    report: Optional[MonthlyReport] = None


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
