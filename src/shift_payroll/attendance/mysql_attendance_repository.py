from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import RecordSource, RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, in_clause, optional_decimal
from .model import AttendanceRecord, BreakPeriod, ShiftRecord, TimecardRecord
from .repository import AttendanceRepository

TABLES = {
    RecordSource.TIMECARD: "timecards",
    RecordSource.SHIFT: "shift_records",
}


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _where(organization_id, start_date, end_date, employee_id, statuses) -> tuple[str, list]:
        clauses = ["organization_id=%s", "work_date>=%s", "work_date<%s"]
        params: list = [organization_id, start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if statuses:
            values = [RecordStatus(s).value for s in statuses]
            clauses.append(f"status IN ({in_clause(values)})")
            params.extend(values)
        return " AND ".join(clauses), params

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
        statuses = list(statuses) if statuses is not None else None
        where, params = self._where(organization_id, start_date, end_date, employee_id, statuses)
        if RecordSource(source) == RecordSource.SHIFT:
            return self._list_shifts(where, params)
        return self._list_timecards(where, params)

    def _list_shifts(self, where: str, params: list) -> list[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, employee_id, work_date, start_time, end_time, hourly_wage, status
                FROM shift_records
                WHERE {where}
                ORDER BY work_date, start_time
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [
            ShiftRecord(
                record_id=str(r["record_id"]),
                employee_id=str(r["employee_id"]),
                work_date=as_date(r["work_date"]),
                start_time=r["start_time"],
                end_time=r["end_time"],
                status=RecordStatus(r["status"]),
                hourly_wage=optional_decimal(r.get("hourly_wage")),
            )
            for r in rows
        ]

    def _list_timecards(self, where: str, params: list) -> list[TimecardRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, employee_id, work_date, clock_in_at, clock_out_at, hourly_wage, status, note
                FROM timecards
                WHERE {where}
                ORDER BY work_date, clock_in_at
                """,
                tuple(params),
            )
            card_rows = fetchall(cur)

            breaks: dict[str, list[BreakPeriod]] = {}
            if card_rows:
                ids = [r["record_id"] for r in card_rows]
                cur.execute(
                    f"""
                    SELECT record_id, start_at, end_at
                    FROM timecard_breaks
                    WHERE record_id IN ({in_clause(ids)})
                    ORDER BY record_id, start_at
                    """,
                    tuple(ids),
                )
                for b in fetchall(cur):
                    breaks.setdefault(str(b["record_id"]), []).append(
                        BreakPeriod(start_at=b["start_at"], end_at=b.get("end_at"))
                    )

        return [
            TimecardRecord(
                record_id=str(r["record_id"]),
                employee_id=str(r["employee_id"]),
                work_date=as_date(r["work_date"]),
                clock_in_at=r.get("clock_in_at"),
                clock_out_at=r.get("clock_out_at"),
                breaks=tuple(breaks.get(str(r["record_id"]), ())),
                status=RecordStatus(r["status"]),
                hourly_wage=optional_decimal(r.get("hourly_wage")),
                note=r.get("note"),
            )
            for r in card_rows
        ]

    def update_status(
        self,
        *,
        record_id: str,
        status: RecordStatus,
        source: RecordSource = RecordSource.TIMECARD,
        note: Optional[str] = None,
    ) -> bool:
        table = TABLES[RecordSource(source)]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {table} SET status=%s, note=COALESCE(%s, note) WHERE record_id=%s",
                (RecordStatus(status).value, note, record_id),
            )
            return cur.rowcount > 0
