"""Entitlement resolver — employment year → annual paid-leave quota.

Entitlement is a step function evaluated once per leave year, never
prorated mid-year: the tier for the whole year is the one in force on the
reference date (Dec 31 when computing a year's balance).
"""

from __future__ import annotations

import bisect
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from leave_engine.absence.schemas import AbsenceInterval
from leave_engine.common.constants import NEW_HIRE_EMPLOYMENT_YEAR
from leave_engine.common.dates import clamp_day, parse_date, parse_optional_date, years_between
from leave_engine.entitlement.schemas import AccrualRuleTable, CarryoverPolicy, CarryoverStatus
from leave_engine.tenure.calculator import effective_tenure

RuleInput = Union[AccrualRuleTable, Mapping[Any, Any], None]


def resolve_annual_quota(rules: RuleInput, employment_year: int) -> Optional[int]:
    """Quota for ``employment_year``: exact match, else floor, else lowest tier.

    Returns ``None`` for an empty table so callers can tell "not configured"
    apart from a genuine 0-day entitlement.
    """
    table = AccrualRuleTable.from_mapping(rules)
    if not len(table):
        return None
    if employment_year in table:
        return table[employment_year]

    years = table.years
    idx = bisect.bisect_right(years, employment_year)
    if idx == 0:
        # below every configured tier
        return table[years[0]]
    return table[years[idx - 1]]


def employment_year_for(hire_date: Any, reference_date: Any) -> int:
    """1-based employment year on ``reference_date``; new hires are year 1."""
    hire_date = parse_optional_date(hire_date)
    if hire_date is None:
        return NEW_HIRE_EMPLOYMENT_YEAR
    years = years_between(hire_date, reference_date) + 1
    return max(NEW_HIRE_EMPLOYMENT_YEAR, years)


def effective_employment_year(
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    reference_date: Any,
) -> int:
    """Employment year counted on absence-adjusted tenure."""
    tenure = effective_tenure(hire_date, absences, reference_date)
    return max(NEW_HIRE_EMPLOYMENT_YEAR, tenure.years + 1)


# ── Carryover ───────────────────────────────────────────────────────

def carryover_cutoff(policy: CarryoverPolicy, year: int) -> date:
    """Last day in ``year`` on which last year's unused days may be used."""
    return clamp_day(year, policy.expiry_month, policy.expiry_day)


def is_carryover_active(policy: CarryoverPolicy, year: int, on_date: Any) -> bool:
    return parse_date(on_date) <= carryover_cutoff(policy, year)


def carryover_status(
    previous_remaining: Optional[Decimal],
    policy: CarryoverPolicy,
    year: int,
    on_date: Any,
) -> CarryoverStatus:
    """Eligibility of ``year - 1``'s unused paid days on ``on_date``.

    Reports only; persisting the rollover is the caller's job.
    """
    unused = max(Decimal("0"), Decimal(previous_remaining or 0))
    active = is_carryover_active(policy, year, on_date)
    return CarryoverStatus(
        year=year,
        unused_days=unused,
        expires_on=carryover_cutoff(policy, year),
        is_active=active,
        usable_days=unused if active else Decimal("0"),
    )
