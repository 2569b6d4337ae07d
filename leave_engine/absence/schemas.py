"""Absence Pydantic v2 schemas."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from leave_engine.common.dates import parse_date
from leave_engine.common.exceptions import InvalidRangeError


class AbsenceInterval(BaseModel):
    """A recorded absence, ``end`` inclusive."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    start: date
    end: date
    user_id: Optional[uuid.UUID] = None
    reason: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse(cls, v: Any) -> date:
        return parse_date(v)

    @model_validator(mode="after")
    def _check_order(self) -> "AbsenceInterval":
        if self.start > self.end:
            raise InvalidRangeError(self.start, self.end)
        return self

    @property
    def duration_days(self) -> int:
        return (self.end - self.start).days + 1

    def is_extended(self, threshold_days: int) -> bool:
        """True when the absence runs longer than ``threshold_days``."""
        return self.duration_days > threshold_days

    @classmethod
    def from_row(cls, row: Any) -> "AbsenceInterval":
        """Build from an ``extended_absences`` ORM row."""
        return cls(
            start=row.start_date,
            end=row.end_date,
            user_id=row.user_id,
            reason=row.reason,
        )


class AbsenceImpact(BaseModel):
    """How much qualifying absence has pushed an employee's tenure back."""

    total_absence_days: int = 0
    anniversary_delay_days: int = 0
    tenure_reduction: str = "0 days"
