"""Balance Pydantic v2 schemas — leave requests in, year summary out.

Naming conventions:
  - *Record   → engine input snapshots
  - *Summary  → computed outputs
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from leave_engine.common.constants import LEAVE_STATUS_TRANSITIONS, LeaveStatus
from leave_engine.common.dates import parse_date, parse_optional_date
from leave_engine.common.exceptions import InvalidRangeError, InvalidTransitionError


# ═════════════════════════════════════════════════════════════════════
# Leave Request
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestRecord(BaseModel):
    """A leave request as the engine sees it."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[uuid.UUID] = None
    start_date: date
    end_date: Optional[date] = None
    is_half_day: bool = False
    status: LeaveStatus = LeaveStatus.pending
    leave_type_is_paid: bool = True

    @field_validator("start_date", mode="before")
    @classmethod
    def _parse_start(cls, v: Any) -> date:
        return parse_date(v)

    @field_validator("end_date", mode="before")
    @classmethod
    def _parse_end(cls, v: Any) -> Optional[date]:
        return parse_optional_date(v)

    @model_validator(mode="after")
    def _check_order(self) -> "LeaveRequestRecord":
        if self.end_date is not None and self.end_date < self.start_date:
            raise InvalidRangeError(self.start_date, self.end_date)
        return self

    @property
    def is_terminal(self) -> bool:
        return not LEAVE_STATUS_TRANSITIONS[self.status]

    def transition_to(self, status: LeaveStatus) -> "LeaveRequestRecord":
        """Return a copy in ``status``; pending moves once, terminal never."""
        status = LeaveStatus(status)
        if status not in LEAVE_STATUS_TRANSITIONS[self.status]:
            raise InvalidTransitionError(self.status.value, status.value)
        return self.model_copy(update={"status": status})

    @classmethod
    def from_row(cls, row: Any, is_paid: bool) -> "LeaveRequestRecord":
        """Build from a ``leave_requests`` ORM row plus its type's paid flag."""
        return cls(
            id=row.id,
            start_date=row.start_date,
            end_date=row.end_date,
            is_half_day=bool(row.is_half_day),
            status=row.status,
            leave_type_is_paid=is_paid,
        )


# ═════════════════════════════════════════════════════════════════════
# Bonus Leave
# ═════════════════════════════════════════════════════════════════════


class BonusLeaveRecord(BaseModel):
    """Extra days granted by an admin for one leave year."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    year: int
    days_granted: int = Field(..., ge=0)
    days_used: int = Field(0, ge=0)

    @property
    def remaining(self) -> int:
        return self.days_granted - self.days_used


# ═════════════════════════════════════════════════════════════════════
# Balance Summary
# ═════════════════════════════════════════════════════════════════════


class BalanceSummary(BaseModel):
    """Consumed vs. remaining leave for one user and calendar year.

    ``entitlement_days`` / ``remaining_days`` are ``None`` when no accrual
    rules are configured; render that as "not configured", never as 0.
    """

    year: int
    entitlement_days: Optional[int] = None
    employment_year: Optional[int] = None
    effective_employment_year: int = 1
    paid_used_days: Decimal = Decimal("0")
    unpaid_used_days: Decimal = Decimal("0")
    pending_days: Decimal = Decimal("0")
    remaining_days: Optional[Decimal] = None
    bonus_days: int = 0
    counts_by_status: dict[LeaveStatus, int] = Field(
        default_factory=lambda: {s: 0 for s in LeaveStatus}
    )
    carryover_expires_on: date
    carryover_active: Optional[bool] = None
