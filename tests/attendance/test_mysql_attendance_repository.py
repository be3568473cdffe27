from contextlib import contextmanager
from datetime import date, datetime

import pytest

from shift_payroll.attendance import mysql_attendance_repository as repo_module
from shift_payroll.attendance.model import ShiftRecord, TimecardRecord
from shift_payroll.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from shift_payroll.core.enums import RecordSource, RecordStatus
from shift_payroll.payroll.service import PayrollReportService

DAY = date(2025, 3, 3)

SHIFT_ROWS = [
    {
        "record_id": "r-1",
        "employee_id": "e1",
        "work_date": DAY,
        "start_time": "09:00",
        "end_time": "17:00",
        "hourly_wage": None,
        "status": "approved",
    }
]

TIMECARD_ROWS = [
    {
        "record_id": "r-1",
        "employee_id": "e1",
        "work_date": DAY,
        "clock_in_at": datetime(2025, 3, 3, 9, 0),
        "clock_out_at": datetime(2025, 3, 3, 17, 0),
        "hourly_wage": None,
        "status": "approved",
        "note": None,
    }
]


class FakeCursor:
    def __init__(self):
        self.statements = []
        self.rowcount = 0
        self._rows = []

    def execute(self, sql, params=()):
        self.statements.append((" ".join(sql.split()), params))
        if "FROM shift_records" in sql:
            self._rows = SHIFT_ROWS
        elif "FROM timecards" in sql:
            self._rows = TIMECARD_ROWS
        else:
            self._rows = []
        self.rowcount = 1 if sql.lstrip().startswith("UPDATE") else 0

    def fetchall(self):
        return list(self._rows)

    def sql_texts(self):
        return [s for s, _ in self.statements]


class FakeHolidays:
    def is_public_holiday(self, day):
        return False

    def is_weekend(self, day):
        return day.weekday() >= 5


class NoPolicies:
    def get_for_organization(self, organization_id):
        return None

    def get_member_transport(self, organization_id):
        return {}


class InMemoryReports:
    def __init__(self):
        self.saved = {}

    def get(self, report_id):
        return self.saved.get(report_id)

    def save(self, report):
        self.saved[report.report_id] = report


@pytest.fixture
def cursor(monkeypatch):
    cur = FakeCursor()

    @contextmanager
    def fake_db_cursor(conn_factory, *, dictionary=True):
        yield None, cur

    monkeypatch.setattr(repo_module, "db_cursor", fake_db_cursor)
    return cur


def _list(repo, **kwargs):
    return repo.list_for_period(
        organization_id="org-1", start_date=date(2025, 3, 1), end_date=date(2025, 4, 1), **kwargs
    )


def test_list_for_period_reads_timecards_by_default(cursor):
    records = _list(MySQLAttendanceRepository(None))

    assert [type(r) for r in records] == [TimecardRecord]
    assert not any("shift_records" in s for s in cursor.sql_texts())


def test_list_for_period_reads_shifts_only_when_asked(cursor):
    records = _list(MySQLAttendanceRepository(None), source=RecordSource.SHIFT, statuses=[RecordStatus.APPROVED])

    assert records == [ShiftRecord("r-1", "e1", DAY, "09:00", "17:00", status=RecordStatus.APPROVED)]
    assert not any("timecards" in s for s in cursor.sql_texts())
    assert cursor.statements[0][1][-1] == "approved"


def test_update_status_touches_one_table(cursor):
    repo = MySQLAttendanceRepository(None)

    assert repo.update_status(record_id="r-1", status=RecordStatus.REJECTED, source=RecordSource.SHIFT, note="x")

    assert len(cursor.statements) == 1
    sql, params = cursor.statements[0]
    assert sql.startswith("UPDATE shift_records ")
    assert params == ("rejected", "x", "r-1")


def test_frozen_report_counts_worked_day_once(cursor):
    svc = PayrollReportService(
        MySQLAttendanceRepository(None), NoPolicies(), InMemoryReports(), holidays=FakeHolidays()
    )

    report = svc.freeze_monthly_report("org-1", "e1", 2025, 3, approver_id="mgr-1")

    assert report.days_worked == 1
    assert report.record_count == 1
    assert report.total_work_minutes == 480
    assert report.base_wage == 1100 * 8
