from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.workflow import completed_drafts, ensure_transition
from ..common.datetime_utils import month_bounds, now_local
from ..common.holiday_calendar import HolidayLookup
from ..common.time_utils import format_minutes
from ..core.enums import MonthlyReportStatus, RecordSource, RecordStatus
from ..core.exceptions import NotFoundError
from ..policy.model import PayPolicy
from ..policy.repository import PolicyRepository
from .aggregation import aggregate, aggregate_by_employee, chart_points, group_by_date
from .calculator.factory import CalculatorFactory
from .model import EmployeeEstimate, MonthlyReport, PayrollSummary, ReportData, monthly_report_id, round_amount
from .repository import MonthlyReportRepository

logger = logging.getLogger(__name__)

ESTIMATE_STATUSES = (RecordStatus.DRAFT, RecordStatus.PENDING, RecordStatus.APPROVED)


class PayrollReportService:
    """Live estimates, the manager approval queue and frozen monthly reports.

    The calculation core stays pure; this service decides which records feed
    it (by status) and persists the results. Payroll reads timecards only;
    the shift schedule is priced separately by ``estimate_shifts``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        policies: PolicyRepository,
        reports: MonthlyReportRepository,
        *,
        holidays: Optional[HolidayLookup] = None,
        factory: Optional[CalculatorFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._policies = policies
        self._reports = reports
        self._factory = factory or CalculatorFactory(holidays)
        self._clock = clock

    def _policy(self, organization_id: str) -> PayPolicy:
        return self._policies.get_for_organization(organization_id) or PayPolicy.default()

    def _member_transport(self, organization_id: str, employee_id: str) -> Optional[Decimal]:
        return self._policies.get_member_transport(organization_id).get(employee_id)

    def _records(
        self,
        organization_id: str,
        employee_id: Optional[str],
        year: int,
        month: int,
        statuses,
        source: RecordSource = RecordSource.TIMECARD,
    ):
        start, end = month_bounds(year, month)
        return list(
            self._attendance.list_for_period(
                organization_id=organization_id,
                start_date=start,
                end_date=end,
                employee_id=employee_id,
                statuses=statuses,
                source=source,
            )
        )

    def estimate_for_employee(self, organization_id: str, employee_id: str, year: int, month: int) -> EmployeeEstimate:
        policy = self._policy(organization_id)
        transport = self._member_transport(organization_id, employee_id)
        records = self._records(organization_id, employee_id, year, month, ESTIMATE_STATUSES)

        summary = aggregate(
            records,
            policy,
            transport_per_day_override=transport,
            employee_id=employee_id,
            factory=self._factory,
        )
        days = group_by_date(records, policy, transport_per_day_override=transport, factory=self._factory)
        report = self._reports.get(monthly_report_id(organization_id, year, month, employee_id))
        return EmployeeEstimate(summary=summary, days=days, chart=chart_points(days), report=report)

    def estimate_shifts(self, organization_id: str, employee_id: str, year: int, month: int) -> EmployeeEstimate:
        """Projected pay for the approved shift schedule, kept apart from timecard payroll."""
        policy = self._policy(organization_id)
        transport = self._member_transport(organization_id, employee_id)
        shifts = self._records(
            organization_id, employee_id, year, month, (RecordStatus.APPROVED,), source=RecordSource.SHIFT
        )

        summary = aggregate(
            shifts,
            policy,
            transport_per_day_override=transport,
            employee_id=employee_id,
            factory=self._factory,
        )
        days = group_by_date(shifts, policy, transport_per_day_override=transport, factory=self._factory)
        return EmployeeEstimate(summary=summary, days=days, chart=chart_points(days))

    def list_applications(self, organization_id: str, year: int, month: int) -> list[PayrollSummary]:
        """Per-employee summaries of records waiting for approval."""
        policy = self._policy(organization_id)
        records = self._records(organization_id, None, year, month, (RecordStatus.PENDING,))
        return aggregate_by_employee(
            records,
            policy,
            member_transport=self._policies.get_member_transport(organization_id),
            factory=self._factory,
        )

    def _move(self, records, target: RecordStatus, note: Optional[str] = None) -> int:
        moved = 0
        for record in records:
            ensure_transition(record.status, target)
            if self._attendance.update_status(
                record_id=record.record_id, status=target, source=record.source, note=note
            ):
                moved += 1
        return moved

    def submit_month(self, organization_id: str, employee_id: str, year: int, month: int) -> int:
        """Submit completed drafts and reverted records for approval."""
        records = self._records(
            organization_id, employee_id, year, month, (RecordStatus.DRAFT, RecordStatus.REVERTED)
        )
        ready = completed_drafts(records) + [r for r in records if r.status == RecordStatus.REVERTED]
        moved = self._move(ready, RecordStatus.PENDING)
        logger.info("submitted %s record(s) for %s %04d-%02d", moved, employee_id, year, month)
        return moved

    def approve_month(
        self,
        organization_id: str,
        employee_id: str,
        year: int,
        month: int,
        *,
        approver_id: str,
    ) -> MonthlyReport:
        pending = self._records(organization_id, employee_id, year, month, (RecordStatus.PENDING,))
        moved = self._move(pending, RecordStatus.APPROVED)
        logger.info("approved %s record(s) for %s %04d-%02d by %s", moved, employee_id, year, month, approver_id)
        return self.freeze_monthly_report(organization_id, employee_id, year, month, approver_id=approver_id)

    def freeze_monthly_report(
        self,
        organization_id: str,
        employee_id: str,
        year: int,
        month: int,
        *,
        approver_id: str,
    ) -> MonthlyReport:
        """Snapshot all approved records; later policy changes do not touch it."""
        policy = self._policy(organization_id)
        approved = self._records(organization_id, employee_id, year, month, (RecordStatus.APPROVED,))
        summary = aggregate(
            approved,
            policy,
            transport_per_day_override=self._member_transport(organization_id, employee_id),
            employee_id=employee_id,
            factory=self._factory,
        )

        report_id = monthly_report_id(organization_id, year, month, employee_id)
        existing = self._reports.get(report_id)
        now = self._clock()
        report = MonthlyReport(
            organization_id=organization_id,
            employee_id=employee_id,
            year=year,
            month=month,
            days_worked=summary.days_worked,
            total_work_minutes=summary.worked_minutes,
            total_break_minutes=summary.break_minutes,
            total_night_minutes=summary.night_minutes,
            total_overtime_minutes=summary.overtime_minutes,
            base_wage=round_amount(summary.base_amount),
            night_premium=round_amount(summary.night_amount),
            overtime_premium=round_amount(summary.overtime_amount),
            holiday_premium=round_amount(summary.holiday_amount),
            transport_allowance=round_amount(summary.transport_amount),
            total_amount=summary.grand_total,
            record_count=summary.record_count,
            status=MonthlyReportStatus.CONFIRMED,
            version=(existing.version + 1) if existing else 1,
            created_at=existing.created_at if existing else now,
            updated_at=now,
            approved_at=now,
            approved_by=approver_id,
        )
        self._reports.save(report)
        logger.info("monthly report %s saved (version=%s total=%s)", report_id, report.version, report.total_amount)
        return report

    def reject_month(
        self,
        organization_id: str,
        employee_id: str,
        year: int,
        month: int,
        *,
        reason: str = "",
    ) -> int:
        pending = self._records(organization_id, employee_id, year, month, (RecordStatus.PENDING,))
        moved = self._move(pending, RecordStatus.REJECTED, note=reason or None)
        logger.info("rejected %s record(s) for %s %04d-%02d", moved, employee_id, year, month)
        return moved

    def revert_month(
        self,
        organization_id: str,
        employee_id: str,
        year: int,
        month: int,
        *,
        actor_id: str,
        reason: str = "",
    ) -> MonthlyReport:
        report_id = monthly_report_id(organization_id, year, month, employee_id)
        existing = self._reports.get(report_id)
        if not existing:
            raise NotFoundError(f"Monthly report {report_id} does not exist")

        now = self._clock()
        reverted = replace(
            existing,
            status=MonthlyReportStatus.REVERTED,
            reverted_at=now,
            reverted_by=actor_id,
            revert_reason=reason,
            updated_at=now,
        )
        self._reports.save(reverted)

        approved = self._records(organization_id, employee_id, year, month, (RecordStatus.APPROVED,))
        moved = self._move(approved, RecordStatus.REVERTED, note=reason or None)
        logger.info("reverted report %s and %s record(s) by %s", report_id, moved, actor_id)
        return reverted

    def build_attendance_report(
        self,
        organization_id: str,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
    ) -> ReportData:
        """Display rows for approved records in [start, end)."""
        policy = self._policy(organization_id)
        records = self._attendance.list_for_period(
            organization_id=organization_id,
            start_date=start,
            end_date=end,
            employee_id=employee_id,
            statuses=(RecordStatus.APPROVED,),
            source=RecordSource.TIMECARD,
        )

        out_rows: list[dict] = []
        by_employee: dict[str, list] = {}
        for r in records:
            bd = self._factory.for_record(r).breakdown(r, policy)
            out_rows.append(
                {
                    "employee_id": r.employee_id,
                    "work_date": r.date_key,
                    "worked_hours": format_minutes(bd.worked_minutes),
                    "break_minutes": bd.break_minutes,
                    "night_minutes": bd.night_minutes,
                    "overtime_minutes": bd.overtime_minutes,
                    "hourly_wage": bd.hourly_wage,
                    "total_amount": bd.total_amount,
                    "status": r.status.value,
                }
            )
            by_employee.setdefault(r.employee_id, []).append(r)

        member_transport = self._policies.get_member_transport(organization_id)
        summary = []
        for emp_id, items in by_employee.items():
            s = aggregate(
                items,
                policy,
                transport_per_day_override=member_transport.get(emp_id),
                employee_id=emp_id,
                factory=self._factory,
            )
            summary.append(
                {
                    "employee_id": emp_id,
                    "days_worked": s.days_worked,
                    "total_hours": format_minutes(s.worked_minutes),
                    "total_minutes": s.worked_minutes,
                    "grand_total": s.grand_total,
                }
            )

        summary.sort(key=lambda x: x["total_minutes"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
