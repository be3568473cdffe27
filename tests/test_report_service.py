from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from shift_payroll.attendance.model import BreakPeriod, ShiftRecord, TimecardRecord
from shift_payroll.core.enums import MonthlyReportStatus, RecordSource, RecordStatus
from shift_payroll.core.exceptions import NotFoundError
from shift_payroll.payroll.service import PayrollReportService
from shift_payroll.policy.model import PayPolicy

ORG = "org-1"


class FakeHolidays:
    def is_public_holiday(self, day):
        return False

    def is_weekend(self, day):
        return day.weekday() >= 5


class InMemoryAttendance:
    def __init__(self, records):
        self._records = {(r.source, r.record_id): r for r in records}
        self.last_args = None

    def list_for_period(
        self, *, organization_id, start_date, end_date, employee_id=None, statuses=None, source=RecordSource.TIMECARD
    ):
        self.last_args = {
            "organization_id": organization_id,
            "start_date": start_date,
            "end_date": end_date,
            "employee_id": employee_id,
            "statuses": statuses,
            "source": source,
        }
        wanted = set(statuses) if statuses is not None else None
        return [
            r
            for r in self._records.values()
            if r.source == source
            and start_date <= r.work_date < end_date
            and (employee_id is None or r.employee_id == employee_id)
            and (wanted is None or r.status in wanted)
        ]

    def update_status(self, *, record_id, status, source=RecordSource.TIMECARD, note=None):
        rec = self._records.get((source, record_id))
        if not rec:
            return False
        changes = {"status": status}
        if note is not None and isinstance(rec, TimecardRecord):
            changes["note"] = note
        self._records[(source, record_id)] = replace(rec, **changes)
        return True

    def status_of(self, record_id, source=RecordSource.TIMECARD):
        return self._records[(source, record_id)].status


class InMemoryPolicies:
    def __init__(self, policy=None, member_transport=None):
        self.policy = policy
        self.member_transport = member_transport or {}

    def get_for_organization(self, organization_id):
        return self.policy

    def save(self, organization_id, policy):
        self.policy = policy

    def get_member_transport(self, organization_id):
        return dict(self.member_transport)


class InMemoryReports:
    def __init__(self):
        self.saved = {}

    def get(self, report_id):
        return self.saved.get(report_id)

    def save(self, report):
        self.saved[report.report_id] = report


class StepClock:
    def __init__(self):
        self.now = datetime(2025, 4, 1, 10, 0)

    def __call__(self):
        return self.now


def _policy():
    return PayPolicy.from_settings(
        {"defaultHourlyWage": 1200, "transportAllowanceEnabled": True, "transportAllowancePerShift": 300}
    )


def _card(record_id, employee_id, day, start_hour, end_hour, status):
    return TimecardRecord(
        record_id,
        employee_id,
        day,
        clock_in_at=datetime(day.year, day.month, day.day, start_hour, 0),
        clock_out_at=datetime(day.year, day.month, day.day, end_hour, 0),
        status=status,
    )


def _records():
    return [
        _card("s-1", "emp-1", date(2025, 3, 3), 9, 12, RecordStatus.PENDING),
        _card("s-2", "emp-1", date(2025, 3, 3), 13, 18, RecordStatus.PENDING),
        _card("s-3", "emp-1", date(2025, 3, 4), 9, 10, RecordStatus.APPROVED),
        TimecardRecord(
            "tc-1",
            "emp-1",
            date(2025, 3, 5),
            clock_in_at=datetime(2025, 3, 5, 9, 0),
            clock_out_at=datetime(2025, 3, 5, 12, 0),
            status=RecordStatus.DRAFT,
        ),
        TimecardRecord(
            "tc-2",
            "emp-1",
            date(2025, 3, 6),
            clock_in_at=datetime(2025, 3, 6, 9, 0),
            breaks=(BreakPeriod(datetime(2025, 3, 6, 11, 0)),),
            status=RecordStatus.DRAFT,
        ),
        _card("s-4", "emp-1", date(2025, 3, 7), 9, 10, RecordStatus.REJECTED),
        _card("s-5", "emp-2", date(2025, 3, 3), 9, 11, RecordStatus.PENDING),
        _card("s-6", "emp-1", date(2025, 4, 1), 9, 10, RecordStatus.PENDING),
        # scheduled shifts for the same days; payroll must not count these
        ShiftRecord("sh-1", "emp-1", date(2025, 3, 3), "09:00", "17:00", status=RecordStatus.APPROVED),
        ShiftRecord("sh-2", "emp-1", date(2025, 3, 4), "9:00", "10:00", status=RecordStatus.APPROVED),
        ShiftRecord("sh-3", "emp-1", date(2025, 3, 5), "09:00", "12:00", status=RecordStatus.PENDING),
    ]


@pytest.fixture
def env():
    attendance = InMemoryAttendance(_records())
    policies = InMemoryPolicies(_policy(), {"emp-2": Decimal("500")})
    reports = InMemoryReports()
    clock = StepClock()
    svc = PayrollReportService(attendance, policies, reports, holidays=FakeHolidays(), clock=clock)
    return svc, attendance, policies, reports, clock


def test_estimate_excludes_rejected_and_other_months(env):
    svc, attendance, *_ = env

    est = svc.estimate_for_employee(ORG, "emp-1", 2025, 3)

    assert attendance.last_args["start_date"] == date(2025, 3, 1)
    assert attendance.last_args["end_date"] == date(2025, 4, 1)
    # s-1, s-2, s-3, tc-1, tc-2 (tc-2 has no clock-out yet)
    assert est.summary.record_count == 5
    assert est.summary.days_worked == 4
    assert est.summary.worked_minutes == 180 + 300 + 60 + 180
    assert est.summary.transport_amount == 4 * 300
    assert [d.day for d in est.chart] == [3, 4, 5, 6]
    assert est.report is None


def test_list_applications_groups_pending_by_employee(env):
    svc, *_ = env

    apps = svc.list_applications(ORG, 2025, 3)

    assert [a.employee_id for a in apps] == ["emp-1", "emp-2"]
    assert apps[0].worked_minutes == 480
    assert apps[0].transport_amount == 300
    assert apps[1].transport_amount == 500


def test_submit_month_moves_only_completed_drafts(env):
    svc, attendance, *_ = env

    moved = svc.submit_month(ORG, "emp-1", 2025, 3)

    assert moved == 1
    assert attendance.status_of("tc-1") == RecordStatus.PENDING
    assert attendance.status_of("tc-2") == RecordStatus.DRAFT


def test_approve_month_freezes_report(env):
    svc, attendance, _, reports, _ = env

    report = svc.approve_month(ORG, "emp-1", 2025, 3, approver_id="mgr-1")

    assert attendance.status_of("s-1") == RecordStatus.APPROVED
    assert attendance.status_of("s-2") == RecordStatus.APPROVED
    assert attendance.status_of("s-6") == RecordStatus.PENDING
    assert attendance.status_of("s-5") == RecordStatus.PENDING
    assert report.report_id == "org-1_2025-03_emp-1"
    assert report.status == MonthlyReportStatus.CONFIRMED
    assert report.version == 1
    assert report.record_count == 3
    assert report.days_worked == 2
    assert report.total_work_minutes == 540
    assert report.base_wage == 1200 * 9
    assert report.transport_allowance == 600
    assert report.total_amount == 1200 * 9 + 600
    assert report.approved_by == "mgr-1"
    assert reports.get(report.report_id) == report


def test_reapproval_bumps_version_and_keeps_created_at(env):
    svc, _, _, _, clock = env
    first = svc.approve_month(ORG, "emp-1", 2025, 3, approver_id="mgr-1")

    clock.now = datetime(2025, 4, 2, 9, 0)
    second = svc.freeze_monthly_report(ORG, "emp-1", 2025, 3, approver_id="mgr-2")

    assert second.version == 2
    assert second.created_at == first.created_at
    assert second.updated_at == datetime(2025, 4, 2, 9, 0)


def test_frozen_report_ignores_later_policy_change(env):
    svc, _, policies, reports, _ = env
    report = svc.approve_month(ORG, "emp-1", 2025, 3, approver_id="mgr-1")

    policies.policy = PayPolicy.from_settings({"defaultHourlyWage": 5000})

    assert reports.get(report.report_id).base_wage == 1200 * 9


def test_reject_month(env):
    svc, attendance, *_ = env

    moved = svc.reject_month(ORG, "emp-1", 2025, 3, reason="wrong hours")

    assert moved == 2
    assert attendance.status_of("s-1") == RecordStatus.REJECTED


def test_revert_then_resubmit(env):
    svc, attendance, _, reports, _ = env
    svc.approve_month(ORG, "emp-1", 2025, 3, approver_id="mgr-1")

    reverted = svc.revert_month(ORG, "emp-1", 2025, 3, actor_id="mgr-1", reason="fix")

    assert reverted.status == MonthlyReportStatus.REVERTED
    assert reverted.revert_reason == "fix"
    assert reports.get(reverted.report_id).status == MonthlyReportStatus.REVERTED
    assert attendance.status_of("s-3") == RecordStatus.REVERTED

    svc.submit_month(ORG, "emp-1", 2025, 3)

    assert attendance.status_of("s-3") == RecordStatus.PENDING
    assert attendance.status_of("s-1") == RecordStatus.PENDING


def test_revert_without_report_fails(env):
    svc, *_ = env
    with pytest.raises(NotFoundError):
        svc.revert_month(ORG, "emp-1", 2025, 3, actor_id="mgr-1")


def test_missing_policy_falls_back_to_defaults():
    attendance = InMemoryAttendance(
        [_card("x", "emp-1", date(2025, 3, 3), 9, 10, RecordStatus.PENDING)]
    )
    svc = PayrollReportService(attendance, InMemoryPolicies(), InMemoryReports(), holidays=FakeHolidays())

    est = svc.estimate_for_employee(ORG, "emp-1", 2025, 3)

    assert est.summary.grand_total == 1100


def test_attendance_report_rows_and_summary(env):
    svc, attendance, *_ = env

    report = svc.build_attendance_report(ORG, start=date(2025, 3, 1), end=date(2025, 4, 1), employee_id="emp-1")

    assert attendance.last_args["employee_id"] == "emp-1"
    assert attendance.last_args["statuses"] == (RecordStatus.APPROVED,)
    assert report.rows[0]["worked_hours"] == "01:00"
    assert report.rows[0]["work_date"] == "2025-03-04"
    assert report.summary[0]["total_hours"] == "01:00"
    assert report.summary[0]["grand_total"] == 1200 + 300
    assert attendance.last_args["source"] == RecordSource.TIMECARD


def test_payroll_ignores_scheduled_shifts_on_worked_days(env):
    svc, attendance, *_ = env

    est = svc.estimate_for_employee(ORG, "emp-1", 2025, 3)
    report = svc.approve_month(ORG, "emp-1", 2025, 3, approver_id="mgr-1")

    assert est.summary.worked_minutes == 720
    assert report.total_work_minutes == 540
    assert attendance.status_of("sh-1", RecordSource.SHIFT) == RecordStatus.APPROVED


def test_status_update_is_keyed_by_record_source():
    day = date(2025, 3, 3)
    attendance = InMemoryAttendance(
        [
            _card("dup", "emp-1", day, 9, 17, RecordStatus.PENDING),
            ShiftRecord("dup", "emp-1", day, "09:00", "17:00", status=RecordStatus.PENDING),
        ]
    )
    svc = PayrollReportService(attendance, InMemoryPolicies(), InMemoryReports(), holidays=FakeHolidays())

    moved = svc.reject_month(ORG, "emp-1", 2025, 3, reason="no")

    assert moved == 1
    assert attendance.status_of("dup") == RecordStatus.REJECTED
    assert attendance.status_of("dup", RecordSource.SHIFT) == RecordStatus.PENDING


def test_estimate_shifts_prices_approved_schedule_only(env):
    svc, attendance, *_ = env

    est = svc.estimate_shifts(ORG, "emp-1", 2025, 3)

    assert attendance.last_args["source"] == RecordSource.SHIFT
    assert est.summary.record_count == 2
    assert est.summary.worked_minutes == 480 + 60
    assert est.summary.grand_total == 1200 * 9 + 2 * 300
    assert est.report is None
