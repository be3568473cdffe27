"""Fold per-record breakdowns into daily groups and per-employee summaries.

Transport allowance is granted once per calendar day worked, never per
record, so a split shift on one date earns a single day of transport.
Aggregation does not look at record status; callers filter first.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..common.holiday_calendar import HolidayLookup
from ..core.enums import RecordStatus
from ..policy.model import PayPolicy
from .calculator.factory import CalculatorFactory
from .model import ZERO, ChartPoint, DailyGroup, PayrollSummary, PayTotals, as_decimal, round_amount

_STATUS_PRIORITY = (RecordStatus.APPROVED, RecordStatus.PENDING, RecordStatus.REJECTED)


def transport_per_day(policy: PayPolicy, override: Optional[Decimal] = None) -> Decimal:
    if not policy.transport.enabled:
        return ZERO
    if override is not None:
        return as_decimal(override)
    return as_decimal(policy.transport.per_day_amount)


def aggregate(
    records: Iterable[AttendanceRecord],
    policy: PayPolicy,
    *,
    holidays: Optional[HolidayLookup] = None,
    transport_per_day_override: Optional[Decimal] = None,
    employee_id: Optional[str] = None,
    factory: Optional[CalculatorFactory] = None,
) -> PayrollSummary:
    """Summary for one employee over one period."""
    factory = factory or CalculatorFactory(holidays)
    records = list(records)

    totals = PayTotals()
    dates = set()
    for record in records:
        dates.add(record.work_date)
        totals.add(factory.for_record(record).breakdown(record, policy))

    days = len(dates)
    transport = days * transport_per_day(policy, transport_per_day_override)

    if employee_id is None and records:
        employee_id = records[0].employee_id

    return PayrollSummary(
        employee_id=employee_id,
        days_worked=days,
        record_count=len(records),
        worked_minutes=totals.worked_minutes,
        break_minutes=totals.break_minutes,
        night_minutes=totals.night_minutes,
        overtime_minutes=totals.overtime_minutes,
        base_amount=totals.base_amount,
        night_amount=totals.night_amount,
        overtime_amount=totals.overtime_amount,
        holiday_amount=totals.holiday_amount,
        transport_amount=transport,
        grand_total=round_amount(totals.premium_sum + transport),
        all_approved=bool(records) and all(r.status == RecordStatus.APPROVED for r in records),
    )


def aggregate_by_employee(
    records: Iterable[AttendanceRecord],
    policy: PayPolicy,
    *,
    holidays: Optional[HolidayLookup] = None,
    member_transport: Optional[Mapping[str, Decimal]] = None,
    factory: Optional[CalculatorFactory] = None,
) -> list[PayrollSummary]:
    factory = factory or CalculatorFactory(holidays)
    member_transport = member_transport or {}

    by_employee: dict[str, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        by_employee[record.employee_id].append(record)

    return [
        aggregate(
            items,
            policy,
            transport_per_day_override=member_transport.get(employee_id),
            employee_id=employee_id,
            factory=factory,
        )
        for employee_id, items in sorted(by_employee.items())
    ]


def group_by_date(
    records: Iterable[AttendanceRecord],
    policy: PayPolicy,
    *,
    holidays: Optional[HolidayLookup] = None,
    transport_per_day_override: Optional[Decimal] = None,
    factory: Optional[CalculatorFactory] = None,
) -> list[DailyGroup]:
    factory = factory or CalculatorFactory(holidays)
    daily_transport = transport_per_day(policy, transport_per_day_override)

    by_date: dict = defaultdict(list)
    for record in records:
        by_date[record.work_date].append(record)

    groups: list[DailyGroup] = []
    for work_date in sorted(by_date):
        items = sorted(by_date[work_date], key=lambda r: r.sort_key)
        totals = PayTotals()
        for record in items:
            totals.add(factory.for_record(record).breakdown(record, policy))
        groups.append(
            DailyGroup(
                work_date=work_date,
                records=tuple(items),
                worked_minutes=totals.worked_minutes,
                break_minutes=totals.break_minutes,
                night_minutes=totals.night_minutes,
                overtime_minutes=totals.overtime_minutes,
                base_amount=totals.base_amount,
                night_amount=totals.night_amount,
                overtime_amount=totals.overtime_amount,
                holiday_amount=totals.holiday_amount,
                transport_amount=daily_transport,
                total_amount=round_amount(totals.premium_sum + daily_transport),
            )
        )
    return groups


def dominant_status(statuses: Iterable[RecordStatus]) -> RecordStatus:
    present = set(statuses)
    for status in _STATUS_PRIORITY:
        if status in present:
            return status
    return RecordStatus.DRAFT


def chart_points(groups: Iterable[DailyGroup]) -> list[ChartPoint]:
    return [
        ChartPoint(
            day=g.work_date.day,
            hours=round(g.worked_minutes / 60, 1),
            status=dominant_status(r.status for r in g.records).value,
        )
        for g in groups
    ]
