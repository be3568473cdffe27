from __future__ import annotations

from dataclasses import fields
from typing import Optional

from ..core.enums import MonthlyReportStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import MonthlyReport
from .repository import MonthlyReportRepository

_COLUMNS = [f.name for f in fields(MonthlyReport)]


class MySQLMonthlyReportRepository(MonthlyReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, report_id: str) -> Optional[MonthlyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM monthly_reports WHERE report_id=%s",
                (report_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            values = {name: r.get(name) for name in _COLUMNS}
            values["status"] = MonthlyReportStatus(values["status"])
            return MonthlyReport(**values)

    def save(self, report: MonthlyReport) -> None:
        values = [getattr(report, name) for name in _COLUMNS]
        values[_COLUMNS.index("status")] = report.status.value
        columns = ["report_id", *_COLUMNS]
        updates = ", ".join(f"{c}=VALUES({c})" for c in _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO monthly_reports({', '.join(columns)})
                VALUES({', '.join(['%s'] * len(columns))})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                (report.report_id, *values),
            )
