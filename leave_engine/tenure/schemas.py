"""Tenure Pydantic v2 schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TenureResult(BaseModel):
    """Elapsed service as calendar years / months / days."""

    model_config = ConfigDict(frozen=True)

    years: int = Field(0, ge=0)
    months: int = Field(0, ge=0, le=11)
    days: int = Field(0, ge=0, le=30)

    @property
    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    @property
    def is_whole_years(self) -> bool:
        return self.months == 0 and self.days == 0

    def as_tuple(self) -> tuple[int, int, int]:
        return self.years, self.months, self.days


ZERO_TENURE = TenureResult()
