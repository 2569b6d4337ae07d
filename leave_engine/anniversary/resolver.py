"""Anniversary resolver — effective (absence-adjusted) work anniversaries.

An employee's anniversary is the day their effective tenure reaches a whole
number of years. A qualifying sabbatical therefore pushes the anniversary
out by the length of the absence rather than leaving it on the hire-date
calendar day.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Iterable, Optional, Sequence

from leave_engine.absence.schemas import AbsenceInterval
from leave_engine.anniversary.schemas import AnniversaryEntry
from leave_engine.common.dates import DaySpan, days_in_month, parse_date, parse_optional_date
from leave_engine.common.exceptions import DateParseError
from leave_engine.config import settings
from leave_engine.employees.schemas import EmploymentRecord
from leave_engine.tenure.calculator import effective_tenure

logger = logging.getLogger(__name__)


def is_anniversary(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    today: Any,
) -> bool:
    """True when effective tenure on ``today`` is a whole number (>= 1) of years."""
    hire_date = parse_optional_date(hire_date)
    today = parse_date(today)
    if hire_date is None:
        return False
    tenure = effective_tenure(hire_date, absences, today)
    return tenure.years >= 1 and tenure.is_whole_years


def _first_anniversary(
    hire_date: date,
    absences: Sequence[AbsenceInterval],
    days: Iterable[date],
) -> Optional[tuple[date, int]]:
    for day in days:
        if day <= hire_date:
            continue
        tenure = effective_tenure(hire_date, absences, day)
        if tenure.years >= 1 and tenure.is_whole_years:
            return day, tenure.years
    return None


def month_anniversaries(
    employees: Iterable[EmploymentRecord],
    month: int,
    today: date,
) -> list[AnniversaryEntry]:
    """Effective anniversaries falling in ``month`` of ``today``'s year.

    Inactive employees, employees without a hire date and anyone with less
    than one year of effective service are left out. Passed anniversaries
    are kept with a negative ``days_until``. Ordered by day of month; ties
    keep input order.
    """
    if not 1 <= month <= 12:
        raise DateParseError(month, "is not a month between 1 and 12")

    today = parse_date(today)
    month_span = DaySpan(
        date(today.year, month, 1),
        date(today.year, month, days_in_month(today.year, month)),
    )

    entries: list[AnniversaryEntry] = []
    for emp in employees:
        if not emp.is_active or emp.hire_date is None:
            continue
        found = _first_anniversary(emp.hire_date, list(emp.absences), month_span)
        if found is None:
            continue
        anniversary_date, years = found
        entries.append(
            AnniversaryEntry(
                user_id=emp.user_id,
                full_name=emp.full_name,
                hire_date=emp.hire_date,
                anniversary_date=anniversary_date,
                years=years,
                days_until=(anniversary_date - today).days,
            )
        )

    logger.debug(
        "Resolved %d anniversaries for %04d-%02d", len(entries), today.year, month,
    )
    return sorted(entries, key=lambda e: e.anniversary_date.day)


def next_anniversary(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    today: Any,
    lookahead_days: Optional[int] = None,
) -> Optional[tuple[date, int]]:
    """First effective anniversary on or after ``today`` as ``(date, years)``.

    Searches ``lookahead_days`` ahead (one year by default) and gives up
    with ``None`` beyond that.
    """
    hire_date = parse_optional_date(hire_date)
    today = parse_date(today)
    if hire_date is None:
        return None
    if lookahead_days is None:
        lookahead_days = settings.ANNIVERSARY_LOOKAHEAD_DAYS
    window = DaySpan(today, today + timedelta(days=lookahead_days - 1))
    return _first_anniversary(hire_date, list(absences), window)


def upcoming_anniversaries(
    employees: Iterable[EmploymentRecord],
    today: date,
    limit: Optional[int] = None,
) -> list[AnniversaryEntry]:
    """Next anniversary per active employee, soonest first."""
    if limit is None:
        limit = settings.UPCOMING_ANNIVERSARY_LIMIT
    today = parse_date(today)

    entries: list[AnniversaryEntry] = []
    for emp in employees:
        if not emp.is_active or emp.hire_date is None:
            continue
        found = next_anniversary(emp.hire_date, emp.absences, today)
        if found is None:
            continue
        anniversary_date, years = found
        entries.append(
            AnniversaryEntry(
                user_id=emp.user_id,
                full_name=emp.full_name,
                hire_date=emp.hire_date,
                anniversary_date=anniversary_date,
                years=years,
                days_until=(anniversary_date - today).days,
            )
        )

    entries.sort(key=lambda e: e.days_until)
    return entries[:limit]


# ── Messages ────────────────────────────────────────────────────────

def ordinal_suffix(num: int) -> str:
    if num % 10 == 1 and num % 100 != 11:
        return "st"
    if num % 10 == 2 and num % 100 != 12:
        return "nd"
    if num % 10 == 3 and num % 100 != 13:
        return "rd"
    return "th"


def anniversary_message(full_name: str, years: int) -> str:
    return f"Happy {years}{ordinal_suffix(years)} Work Anniversary, {full_name}!"
