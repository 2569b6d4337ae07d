"""Enums and constants for the leave engine — matching the source ENUM/CHECK values."""

from __future__ import annotations

import enum

# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    canceled = "canceled"


class HalfDayType(str, enum.Enum):
    morning = "morning"
    afternoon = "afternoon"

# pending moves exactly once; every other state is terminal
LEAVE_STATUS_TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.pending: frozenset(
        {LeaveStatus.approved, LeaveStatus.rejected, LeaveStatus.canceled}
    ),
    LeaveStatus.approved: frozenset(),
    LeaveStatus.rejected: frozenset(),
    LeaveStatus.canceled: frozenset(),
}

# ── Calendar ────────────────────────────────────────────────────────

MIN_YEAR = 1900
MAX_YEAR = 2999

SATURDAY = 5
SUNDAY = 6
WEEKEND_DAYS = frozenset({SATURDAY, SUNDAY})


# ── Tenure ──────────────────────────────────────────────────────────

NEW_HIRE_EMPLOYMENT_YEAR = 1
