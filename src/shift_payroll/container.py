from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .common.holiday_calendar import HolidayCalendar
from .config import get_settings_module
from .core.constants import DEFAULT_HOLIDAY_COUNTRY
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .logging_config import configure_logging
from .payroll.calculator.factory import CalculatorFactory
from .payroll.mysql_report_repository import MySQLMonthlyReportRepository
from .payroll.service import PayrollReportService
from .policy.mysql_policy_repository import MySQLPolicyRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    holidays: HolidayCalendar

    attendance_repo: MySQLAttendanceRepository
    policies_repo: MySQLPolicyRepository
    reports_repo: MySQLMonthlyReportRepository

    payroll_report_service: PayrollReportService


def build_container(
    *,
    db_config: dict,
    holiday_country: str = DEFAULT_HOLIDAY_COUNTRY,
    allow_overnight_shifts: bool = True,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    holidays = HolidayCalendar(holiday_country)

    attendance_repo = MySQLAttendanceRepository(conn)
    policies_repo = MySQLPolicyRepository(conn)
    reports_repo = MySQLMonthlyReportRepository(conn)

    payroll_report_service = PayrollReportService(
        attendance_repo,
        policies_repo,
        reports_repo,
        factory=CalculatorFactory(holidays, allow_overnight_shifts=allow_overnight_shifts),
    )

    return Container(
        conn=conn,
        holidays=holidays,
        attendance_repo=attendance_repo,
        policies_repo=policies_repo,
        reports_repo=reports_repo,
        payroll_report_service=payroll_report_service,
    )


def build_container_from_settings() -> Container:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_format=bool(getattr(settings, "LOG_JSON", False)))

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config)

    return build_container(
        db_config=db_config,
        holiday_country=getattr(settings, "HOLIDAY_COUNTRY", DEFAULT_HOLIDAY_COUNTRY),
        allow_overnight_shifts=bool(getattr(settings, "ALLOW_OVERNIGHT_SHIFTS", True)),
    )
