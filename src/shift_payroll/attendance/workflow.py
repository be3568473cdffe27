"""Approval workflow for shifts and timecards.

draft -> pending -> approved | rejected
approved -> reverted -> pending
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..core.enums import RecordStatus
from ..core.exceptions import InvalidTransitionError
from .model import AttendanceRecord, BreakPeriod, TimecardRecord

ALLOWED_TRANSITIONS: dict[RecordStatus, frozenset[RecordStatus]] = {
    RecordStatus.DRAFT: frozenset({RecordStatus.PENDING}),
    RecordStatus.PENDING: frozenset({RecordStatus.APPROVED, RecordStatus.REJECTED}),
    RecordStatus.APPROVED: frozenset({RecordStatus.REVERTED}),
    RecordStatus.REVERTED: frozenset({RecordStatus.PENDING}),
    RecordStatus.REJECTED: frozenset(),
}


def can_transition(current: RecordStatus, target: RecordStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: RecordStatus, target: RecordStatus) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(f"Cannot move record from {current.value} to {target.value}")


def is_break_complete(breaks: Sequence[BreakPeriod]) -> bool:
    if not breaks:
        return True
    return breaks[-1].end_at is not None


def is_submittable(record: AttendanceRecord) -> bool:
    if isinstance(record, TimecardRecord):
        return record.is_complete and is_break_complete(record.breaks)
    return True


def completed_drafts(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    """Drafts that are fully punched and may be submitted for approval."""
    return [r for r in records if r.status == RecordStatus.DRAFT and is_submittable(r)]


def filter_by_status(records: Iterable[AttendanceRecord], statuses: Iterable[RecordStatus]) -> list[AttendanceRecord]:
    wanted = set(statuses)
    return [r for r in records if r.status in wanted]
