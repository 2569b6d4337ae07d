"""Leave entitlement engine — tenure, anniversaries, quotas and balances.

Pure functions over explicit snapshots; the ``*.service`` modules are the
optional async loaders for hosts that keep the data in SQL.
"""

from leave_engine.absence.intervals import (
    merge_intervals,
    overlap_days,
    qualifying_absences,
    total_deductible_days,
)
from leave_engine.absence.schemas import AbsenceImpact, AbsenceInterval
from leave_engine.anniversary.resolver import (
    anniversary_message,
    is_anniversary,
    month_anniversaries,
    next_anniversary,
    upcoming_anniversaries,
)
from leave_engine.anniversary.schemas import AnniversaryEntry
from leave_engine.balance.aggregator import compute_year_balance
from leave_engine.balance.schemas import BalanceSummary, BonusLeaveRecord, LeaveRequestRecord
from leave_engine.employees.schemas import EmploymentRecord
from leave_engine.entitlement.resolver import (
    carryover_cutoff,
    carryover_status,
    effective_employment_year,
    employment_year_for,
    is_carryover_active,
    resolve_annual_quota,
)
from leave_engine.entitlement.schemas import (
    AccrualRuleTable,
    CarryoverPolicy,
    CarryoverStatus,
    LeavePolicy,
)
from leave_engine.tenure.calculator import (
    absence_impact,
    effective_start_date,
    effective_tenure,
    elapsed,
)
from leave_engine.tenure.schemas import TenureResult

__all__ = [
    # Absence
    "AbsenceImpact",
    "AbsenceInterval",
    "merge_intervals",
    "overlap_days",
    "qualifying_absences",
    "total_deductible_days",
    # Tenure
    "TenureResult",
    "absence_impact",
    "effective_start_date",
    "effective_tenure",
    "elapsed",
    # Anniversary
    "AnniversaryEntry",
    "EmploymentRecord",
    "anniversary_message",
    "is_anniversary",
    "month_anniversaries",
    "next_anniversary",
    "upcoming_anniversaries",
    # Entitlement
    "AccrualRuleTable",
    "CarryoverPolicy",
    "CarryoverStatus",
    "LeavePolicy",
    "carryover_cutoff",
    "carryover_status",
    "effective_employment_year",
    "employment_year_for",
    "is_carryover_active",
    "resolve_annual_quota",
    # Balance
    "BalanceSummary",
    "BonusLeaveRecord",
    "LeaveRequestRecord",
    "compute_year_balance",
]
