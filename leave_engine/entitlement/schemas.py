"""Entitlement Pydantic v2 schemas — accrual rules and carryover policy."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from leave_engine.common.exceptions import PolicyConfigurationError


# ═════════════════════════════════════════════════════════════════════
# Accrual rules
# ═════════════════════════════════════════════════════════════════════


class AccrualRuleTable(RootModel[dict[int, int]]):
    """Sparse employment year → annual paid-day quota.

    ``{1: 12, 2: 13, 3: 15, 5: 22}`` means year 4 earns 15 and every year
    from 5 on earns 22. JSON-stored tables arrive with string keys; they
    are coerced to ints.
    """

    model_config = ConfigDict(frozen=True)

    root: dict[int, int] = Field(default_factory=dict)

    @field_validator("root")
    @classmethod
    def _check_rules(cls, v: dict[int, int]) -> dict[int, int]:
        errors: list[str] = []
        for year, quota in v.items():
            if year < 1:
                errors.append(f"Employment year {year} must be a positive integer.")
            if quota < 0:
                errors.append(f"Quota for year {year} must not be negative.")
        if errors:
            raise PolicyConfigurationError({"tenure_accrual_rules": errors})
        return v

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[Any, Any]]) -> "AccrualRuleTable":
        """Validate a raw mapping (e.g. a JSON column); ``None`` is empty."""
        if mapping is None:
            return cls({})
        if isinstance(mapping, cls):
            return mapping
        try:
            return cls.model_validate(dict(mapping))
        except ValidationError as exc:
            raise PolicyConfigurationError(
                {"tenure_accrual_rules": [err["msg"] for err in exc.errors()]}
            ) from exc

    @property
    def years(self) -> list[int]:
        return sorted(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, year: int) -> int:
        return self.root[year]

    def __contains__(self, year: object) -> bool:
        return year in self.root


# ═════════════════════════════════════════════════════════════════════
# Carryover
# ═════════════════════════════════════════════════════════════════════


class CarryoverPolicy(BaseModel):
    """Prior-year days are forfeited after this month/day of the new year."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    expiry_month: int = Field(..., ge=1, le=12)
    expiry_day: int = Field(..., ge=1, le=31)

    @classmethod
    def from_settings_row(cls, row: Any) -> "CarryoverPolicy":
        """Build from a ``company_settings`` ORM row."""
        try:
            return cls(
                expiry_month=row.carryover_expiry_month,
                expiry_day=row.carryover_expiry_day,
            )
        except ValidationError as exc:
            raise PolicyConfigurationError(
                {"carryover": [err["msg"] for err in exc.errors()]}
            ) from exc


class CarryoverStatus(BaseModel):
    """Carryover eligibility of last year's unused days on a given date."""

    year: int
    unused_days: Decimal = Decimal("0")
    expires_on: date
    is_active: bool
    usable_days: Decimal = Decimal("0")


# ═════════════════════════════════════════════════════════════════════
# Policy snapshot
# ═════════════════════════════════════════════════════════════════════


class LeavePolicy(BaseModel):
    """Company policy snapshot handed to the engine for one computation."""

    model_config = ConfigDict(frozen=True)

    accrual_rules: AccrualRuleTable = Field(default_factory=AccrualRuleTable)
    carryover: CarryoverPolicy
    is_configured: bool = True
