"""Calendar utilities — date parsing, weekday classification, day spans.

Every date in the engine is a plain ``datetime.date``; comparisons happen at
day granularity and time-of-day is discarded on input.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Iterator, Optional

from leave_engine.common.constants import MAX_YEAR, MIN_YEAR, WEEKEND_DAYS
from leave_engine.common.exceptions import DateParseError, InvalidRangeError

HALF_DAY = Decimal("0.5")
ONE_DAY = timedelta(days=1)
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


# ── Parsing ─────────────────────────────────────────────────────────

def parse_date(value: Any) -> date:
    """Coerce ``value`` to a date or raise DateParseError.

    Accepts ``date``, ``datetime`` (time dropped) and ISO ``YYYY-MM-DD``
    strings, optionally followed by a ``T``/space time part as stored by
    timestamp columns. The time part must itself be valid ISO.
    """
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not _ISO_DATE_RE.fullmatch(text[:10]):
            raise DateParseError(value)
        try:
            if len(text) == 10:
                parsed = date.fromisoformat(text)
            elif text[10] in ("T", " "):
                parsed = datetime.fromisoformat(text).date()
            else:
                raise DateParseError(value)
        except ValueError:
            raise DateParseError(value) from None
    else:
        raise DateParseError(value)

    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        raise DateParseError(value, f"is outside the years {MIN_YEAR}-{MAX_YEAR}")
    return parsed


def parse_optional_date(value: Any) -> Optional[date]:
    """Like parse_date, but ``None`` and empty strings map to ``None``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value)


# ── Month helpers ───────────────────────────────────────────────────

def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, pulling ``day`` back to the month's last day if needed."""
    return date(year, month, min(day, days_in_month(year, month)))


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


# ── Spans ───────────────────────────────────────────────────────────

class DaySpan:
    """Inclusive, restartable sequence of consecutive dates.

    Nothing is materialised: each ``iter()`` walks the span afresh.
    """

    __slots__ = ("start", "end")

    def __init__(self, start: date, end: date) -> None:
        if start > end:
            raise InvalidRangeError(start, end)
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += ONE_DAY

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, item: object) -> bool:
        return isinstance(item, date) and self.start <= item <= self.end

    def __repr__(self) -> str:
        return f"DaySpan({self.start.isoformat()}, {self.end.isoformat()})"


def day_span(start: Any, end: Any) -> DaySpan:
    """Inclusive span of days from ``start`` to ``end``."""
    return DaySpan(parse_date(start), parse_date(end))


# ── Working days ────────────────────────────────────────────────────

def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def count_working_days(start: Any, end: Any = None, is_half_day: bool = False) -> Decimal:
    """Leave days consumed by a request.

    Half-day requests are single-day by convention and always count 0.5.
    A missing end date (or end == start) counts as one day, even on a
    weekend. Longer ranges count weekdays only; public holidays are not
    considered.
    """
    start_date = parse_date(start)
    if is_half_day:
        return HALF_DAY

    end_date = parse_optional_date(end)
    if end_date is None or end_date == start_date:
        return Decimal("1")

    return Decimal(sum(1 for d in DaySpan(start_date, end_date) if not is_weekend(d)))


# ── Year arithmetic ─────────────────────────────────────────────────

def years_between(from_date: Any, to_date: Any) -> int:
    """Whole years from ``from_date`` to ``to_date`` (age-style)."""
    start = parse_date(from_date)
    end = parse_date(to_date)
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
