"""Absence interval math — the 30-day gate, merging, and overlap with service.

Only absences longer than the configured threshold affect tenure. The gate
is applied to each raw interval before anything is summed, so a 30-day
absence contributes nothing even if it borders another one.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Iterable, Optional

from leave_engine.absence.schemas import AbsenceInterval
from leave_engine.common.dates import parse_date, parse_optional_date
from leave_engine.common.exceptions import InvalidRangeError
from leave_engine.config import settings


def overlap_days(interval: AbsenceInterval, range_start: Any, range_end: Any) -> int:
    """Inclusive count of days shared by ``interval`` and the range."""
    range_start = parse_date(range_start)
    range_end = parse_date(range_end)
    if range_start > range_end:
        raise InvalidRangeError(range_start, range_end)
    start = max(interval.start, range_start)
    end = min(interval.end, range_end)
    if start > end:
        return 0
    return (end - start).days + 1


def qualifying_absences(
    absences: Iterable[AbsenceInterval],
    threshold_days: Optional[int] = None,
) -> list[AbsenceInterval]:
    """Absences long enough to count against tenure, in start order."""
    if threshold_days is None:
        threshold_days = settings.ABSENCE_THRESHOLD_DAYS
    return sorted(
        (a for a in absences if a.is_extended(threshold_days)),
        key=lambda a: (a.start, a.end),
    )


def merge_intervals(absences: Iterable[AbsenceInterval]) -> list[AbsenceInterval]:
    """Union of overlapping or back-to-back intervals, in start order."""
    merged: list[AbsenceInterval] = []
    for absence in sorted(absences, key=lambda a: (a.start, a.end)):
        if merged and absence.start <= merged[-1].end + timedelta(days=1):
            last = merged[-1]
            if absence.end > last.end:
                merged[-1] = AbsenceInterval(start=last.start, end=absence.end, user_id=last.user_id)
        else:
            merged.append(absence)
    return merged


def total_deductible_days(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    as_of: Any,
    threshold_days: Optional[int] = None,
) -> int:
    """Days of qualifying absence inside ``[hire_date, as_of]``.

    An absence still running on ``as_of`` counts for the days already
    taken. This departs from the older rule of ignoring an absence until
    its end date had passed, so tenure stops accruing as soon as a long
    absence begins.
    """
    hire_date = parse_optional_date(hire_date)
    as_of = parse_date(as_of)
    if hire_date is None or hire_date > as_of:
        return 0
    gated = qualifying_absences(absences, threshold_days)
    return sum(overlap_days(a, hire_date, as_of) for a in merge_intervals(gated))
