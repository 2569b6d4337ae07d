"""Employee Pydantic v2 schemas — the engine's view of a user record."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from leave_engine.absence.schemas import AbsenceInterval
from leave_engine.common.dates import parse_optional_date


class EmploymentRecord(BaseModel):
    """Hire date and absence history for one user.

    ``hire_date`` is optional: new employees often have none yet.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    user_id: uuid.UUID
    full_name: str = ""
    hire_date: Optional[date] = None
    is_active: bool = True
    absences: tuple[AbsenceInterval, ...] = ()

    @field_validator("hire_date", mode="before")
    @classmethod
    def _parse_hire_date(cls, v: Any) -> Optional[date]:
        return parse_optional_date(v)
