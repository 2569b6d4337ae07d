"""Anniversary Pydantic v2 schemas."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class AnniversaryEntry(BaseModel):
    """One employee's effective work anniversary."""

    model_config = ConfigDict(frozen=True)

    user_id: uuid.UUID
    full_name: str = ""
    hire_date: date
    anniversary_date: date
    years: int = Field(..., ge=1)
    days_until: int = Field(..., description="Negative when already passed")
