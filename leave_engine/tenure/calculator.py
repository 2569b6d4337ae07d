"""Tenure calculator — effective service with extended absences removed.

Elapsed time uses calendar (age-style) subtraction: borrow a month when the
day component goes negative, borrow a year when the month component does,
with real month lengths. Deducted absence days are expressed in the same
calendar by moving the effective start date forward, so an employee's
anniversary shifts by exactly the number of absent days.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable, Optional

from dateutil.relativedelta import relativedelta

from leave_engine.absence.intervals import total_deductible_days
from leave_engine.absence.schemas import AbsenceImpact, AbsenceInterval
from leave_engine.common.dates import parse_date, parse_optional_date
from leave_engine.tenure.schemas import ZERO_TENURE, TenureResult


def elapsed(start: Any, end: Any) -> TenureResult:
    """Calendar time from ``start`` to ``end``; zero when ``end`` precedes it."""
    start = parse_date(start)
    end = parse_date(end)
    if end <= start:
        return ZERO_TENURE
    delta = relativedelta(end, start)
    return TenureResult(years=delta.years, months=delta.months, days=delta.days)


def effective_start_date(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    as_of: Any,
) -> Optional[date]:
    """Hire date pushed forward by the qualifying absence days up to ``as_of``."""
    hire_date = parse_optional_date(hire_date)
    if hire_date is None:
        return None
    deducted = total_deductible_days(hire_date, absences, as_of)
    return hire_date + timedelta(days=deducted)


def effective_tenure(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    as_of: Any,
) -> TenureResult:
    """Service from ``hire_date`` to ``as_of`` minus qualifying absences.

    A missing hire date is a new employee, not an error: the result is zero.
    """
    hire_date = parse_optional_date(hire_date)
    as_of = parse_date(as_of)
    if hire_date is None:
        return ZERO_TENURE
    start = effective_start_date(hire_date, absences, as_of)
    return elapsed(start, as_of)


def format_duration(days: int) -> str:
    """Rough human-readable length of a day count ("1 month, 3 days")."""
    years, rest = divmod(days, 365)
    months, remaining = divmod(rest, 30)

    parts = []
    if years:
        parts.append(f"{years} year{'s' if years > 1 else ''}")
    if months:
        parts.append(f"{months} month{'s' if months > 1 else ''}")
    if remaining:
        parts.append(f"{remaining} day{'s' if remaining > 1 else ''}")
    return ", ".join(parts) or "0 days"


def absence_impact(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    as_of: Any,
) -> AbsenceImpact:
    """Summary of how far qualifying absences have delayed tenure."""
    deducted = total_deductible_days(hire_date, absences, as_of)
    return AbsenceImpact(
        total_absence_days=deducted,
        anniversary_delay_days=deducted,
        tenure_reduction=format_duration(deducted),
    )
