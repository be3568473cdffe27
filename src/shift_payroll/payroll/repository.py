from __future__ import annotations

from typing import Optional, Protocol

from .model import MonthlyReport


class MonthlyReportRepository(Protocol):
    def get(self, report_id: str) -> Optional[MonthlyReport]:
        raise NotImplementedError

    def save(self, report: MonthlyReport) -> None:
        """Insert or replace the report stored under ``report.report_id``."""

        raise NotImplementedError
