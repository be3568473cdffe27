"""Minute-level clock arithmetic.

Two families of helpers live here:

* wall-clock helpers working on "HH:MM" strings and integer minute offsets
  (used for approved shifts);
* timestamp helpers working on ``datetime`` values and break periods
  (used for timecards).

All differences saturate at zero: an end before its start yields 0 minutes,
never a negative duration.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Protocol

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidFormatError

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")
_ONE_MINUTE = timedelta(minutes=1)


class BreakLike(Protocol):
    start_at: datetime
    end_at: Optional[datetime]


def to_minutes(hhmm: str) -> int:
    """Parse "HH:MM" into minutes after midnight, in [0, 1440)."""
    match = _HHMM.match(hhmm.strip()) if isinstance(hhmm, str) else None
    if not match:
        raise InvalidFormatError(f"Invalid time format: {hhmm!r} (expected HH:MM)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidFormatError(f"Time out of range: {hhmm!r}")
    return hours * 60 + minutes


def minutes_between(start: str, end: str) -> int:
    """Naive same-day difference; does not wrap past midnight."""
    return max(0, to_minutes(end) - to_minutes(start))


def normalize_span(start: str, end: str) -> tuple[int, int]:
    """Minute offsets for a wall-clock span, moving an earlier end to the next day.

    ``end == start`` is a zero-length span, not a 24h one.
    """
    s = to_minutes(start)
    e = to_minutes(end)
    if e < s:
        e += MINUTES_PER_DAY
    return s, e


def overlap_minutes(a1: int, a2: int, b1: int, b2: int) -> int:
    return max(0, min(a2, b2) - max(a1, b1))


def _window_segments(window_start: int, window_end: int) -> list[tuple[int, int]]:
    if window_start <= window_end:
        return [(window_start, window_end)]
    # Wrapping window: late night [start, 1440) plus early morning [0, end).
    return [(window_start, MINUTES_PER_DAY), (0, window_end)]


def night_minutes_in_range(start: int, end: int, window_start: int, window_end: int) -> int:
    """Minutes of [start, end) that fall inside the night window.

    ``end`` may exceed 1440 for a span normalized past midnight; the window is
    then also applied to the following day.
    """
    total = 0
    for offset in (0, MINUTES_PER_DAY):
        if start >= offset + MINUTES_PER_DAY or end <= offset:
            continue
        for seg_start, seg_end in _window_segments(window_start, window_end):
            total += overlap_minutes(start, end, seg_start + offset, seg_end + offset)
    return total


def _round_minutes(delta: timedelta) -> int:
    minutes = Decimal(str(delta.total_seconds())) / Decimal(60)
    return int(minutes.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def minutes_between_timestamps(start: Optional[datetime], end: Optional[datetime]) -> int:
    if start is None or end is None:
        return 0
    return max(0, _round_minutes(end - start))


def total_break_minutes(breaks: Iterable[BreakLike]) -> int:
    """Sum of closed breaks; a break still open contributes nothing."""
    total = 0
    for b in breaks or ():
        if b.start_at is not None and b.end_at is not None:
            total += max(0, _round_minutes(b.end_at - b.start_at))
    return total


def _in_break(moment: datetime, breaks: list[BreakLike]) -> bool:
    for b in breaks:
        if b.start_at is not None and b.end_at is not None and b.start_at <= moment < b.end_at:
            return True
    return False


def _is_night_minute(minute_of_day: int, window_start: int, window_end: int) -> bool:
    if window_start <= window_end:
        return window_start <= minute_of_day < window_end
    return minute_of_day >= window_start or minute_of_day < window_end


def night_minutes_scan(
    clock_in: Optional[datetime],
    clock_out: Optional[datetime],
    window_start: str,
    window_end: str,
    breaks: Iterable[BreakLike] = (),
) -> int:
    """Count night minutes between two timestamps, skipping minutes spent on break.

    Linear in the shift length; each step tests the wall-clock minute of the
    current instant against the window.
    """
    if clock_in is None or clock_out is None:
        return 0
    ns = to_minutes(window_start)
    ne = to_minutes(window_end)
    break_list = list(breaks or ())

    total = 0
    cur = clock_in
    while cur < clock_out:
        if not _in_break(cur, break_list) and _is_night_minute(cur.hour * 60 + cur.minute, ns, ne):
            total += 1
        cur += _ONE_MINUTE
    return total


def format_minutes(minutes: int) -> str:
    minutes = int(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
