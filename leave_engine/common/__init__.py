"""Common module — shared utilities for the leave engine."""

from leave_engine.common.constants import (
    LEAVE_STATUS_TRANSITIONS,
    NEW_HIRE_EMPLOYMENT_YEAR,
    WEEKEND_DAYS,
    HalfDayType,
    LeaveStatus,
)
from leave_engine.common.dates import (
    DaySpan,
    clamp_day,
    count_working_days,
    day_span,
    days_in_month,
    is_weekend,
    parse_date,
    parse_optional_date,
    years_between,
)
from leave_engine.common.exceptions import (
    AppException,
    DateParseError,
    InvalidRangeError,
    InvalidTransitionError,
    NotFoundException,
    PolicyConfigurationError,
    register_exception_handlers,
)

__all__ = [
    # Constants / Enums
    "HalfDayType",
    "LeaveStatus",
    "LEAVE_STATUS_TRANSITIONS",
    "NEW_HIRE_EMPLOYMENT_YEAR",
    "WEEKEND_DAYS",
    # Dates
    "DaySpan",
    "clamp_day",
    "count_working_days",
    "day_span",
    "days_in_month",
    "is_weekend",
    "parse_date",
    "parse_optional_date",
    "years_between",
    # Exceptions
    "AppException",
    "DateParseError",
    "InvalidRangeError",
    "InvalidTransitionError",
    "NotFoundException",
    "PolicyConfigurationError",
    "register_exception_handlers",
]
