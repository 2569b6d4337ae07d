"""Balance aggregator — a year's consumption against its entitlement."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable

from leave_engine.absence.schemas import AbsenceInterval
from leave_engine.balance.schemas import BalanceSummary, BonusLeaveRecord, LeaveRequestRecord
from leave_engine.common.constants import LeaveStatus
from leave_engine.common.dates import count_working_days, parse_optional_date, year_bounds
from leave_engine.entitlement.resolver import (
    RuleInput,
    carryover_cutoff,
    effective_employment_year,
    employment_year_for,
    resolve_annual_quota,
)
from leave_engine.entitlement.schemas import CarryoverPolicy

logger = logging.getLogger(__name__)


def compute_year_balance(
    year: int,
    requests: Iterable[LeaveRequestRecord],
    rules: RuleInput,
    hire_date: Any,
    absences: Iterable[AbsenceInterval],
    carryover_policy: CarryoverPolicy,
    *,
    as_of: Any = None,
    bonus_grants: Iterable[BonusLeaveRecord] = (),
) -> BalanceSummary:
    """Summarise ``year`` for one user.

    Requests are attributed to the year their ``start_date`` falls in. Every
    status is counted in ``counts_by_status``; only approved requests
    consume days. Unpaid usage never reduces the paid entitlement.
    """
    year_start, year_end = year_bounds(year)
    hire_date = parse_optional_date(hire_date)
    as_of = parse_optional_date(as_of)
    absences = list(absences)

    counts = {status: 0 for status in LeaveStatus}
    paid_used = Decimal("0")
    unpaid_used = Decimal("0")
    pending = Decimal("0")

    for req in requests:
        if not year_start <= req.start_date <= year_end:
            continue
        counts[req.status] += 1
        if req.status == LeaveStatus.approved:
            days = count_working_days(req.start_date, req.end_date, req.is_half_day)
            if req.leave_type_is_paid:
                paid_used += days
            else:
                unpaid_used += days
        elif req.status == LeaveStatus.pending:
            pending += count_working_days(req.start_date, req.end_date, req.is_half_day)

    # Tier is fixed for the whole year by the Dec 31 employment year
    tier_year = employment_year_for(hire_date, year_end)
    entitlement = resolve_annual_quota(rules, tier_year)
    remaining = None if entitlement is None else Decimal(entitlement) - paid_used

    bonus = sum(g.remaining for g in bonus_grants if g.year == year)

    cutoff = carryover_cutoff(carryover_policy, year)
    carryover_active = None if as_of is None else as_of <= cutoff

    summary = BalanceSummary(
        year=year,
        entitlement_days=entitlement,
        employment_year=None if hire_date is None else tier_year,
        effective_employment_year=effective_employment_year(hire_date, absences, year_end),
        paid_used_days=paid_used,
        unpaid_used_days=unpaid_used,
        pending_days=pending,
        remaining_days=remaining,
        bonus_days=bonus,
        counts_by_status=counts,
        carryover_expires_on=cutoff,
        carryover_active=carryover_active,
    )
    logger.debug(
        "Balance %d: entitlement=%s paid=%s unpaid=%s remaining=%s",
        year, entitlement, paid_used, unpaid_used, remaining,
    )
    return summary
