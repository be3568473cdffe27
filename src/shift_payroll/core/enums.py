from __future__ import annotations

from enum import Enum


class RecordStatus(str, Enum):
    """Approval state of a shift or timecard."""

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVERTED = "reverted"


class MonthlyReportStatus(str, Enum):
    """State of a frozen monthly payroll snapshot."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVERTED = "reverted"


class RecordSource(str, Enum):
    """Which attendance table a record lives in.

    Timecards feed payroll; shifts are the schedule and are priced only for
    the shift estimate view.
    """

    TIMECARD = "timecard"
    SHIFT = "shift"
