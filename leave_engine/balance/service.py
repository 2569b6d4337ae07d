"""Leave balance service — loads requests and policy, runs the aggregator."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leave_engine.balance.aggregator import compute_year_balance
from leave_engine.balance.models import BonusLeaveGrant, LeaveRequest, LeaveType
from leave_engine.balance.schemas import BalanceSummary, BonusLeaveRecord, LeaveRequestRecord
from leave_engine.common.dates import year_bounds
from leave_engine.config import settings
from leave_engine.employees.service import EmployeeTenureService
from leave_engine.entitlement.models import CompanySettings
from leave_engine.entitlement.resolver import carryover_status
from leave_engine.entitlement.schemas import (
    AccrualRuleTable,
    CarryoverPolicy,
    CarryoverStatus,
    LeavePolicy,
)

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# LeaveBalanceService
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceService:
    """Async balance operations: policy snapshot, yearly summary, carryover."""

    # ─────────────────────────────────────────────────────────────────
    # Policy
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_policy(db: AsyncSession) -> LeavePolicy:
        """Current company policy; defaults when no settings row exists."""

        result = await db.execute(
            select(CompanySettings).order_by(CompanySettings.id.desc()).limit(1)
        )
        row = result.scalars().first()
        if row is None:
            logger.warning("company_settings is empty; accrual rules not configured")
            return LeavePolicy(
                accrual_rules=AccrualRuleTable({}),
                carryover=CarryoverPolicy(
                    expiry_month=settings.DEFAULT_CARRYOVER_EXPIRY_MONTH,
                    expiry_day=settings.DEFAULT_CARRYOVER_EXPIRY_DAY,
                ),
                is_configured=False,
            )

        return LeavePolicy(
            accrual_rules=AccrualRuleTable.from_mapping(row.tenure_accrual_rules),
            carryover=CarryoverPolicy.from_settings_row(row),
        )

    # ─────────────────────────────────────────────────────────────────
    # Loaders
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def _load_requests(
        db: AsyncSession,
        user_id: uuid.UUID,
        year: int,
    ) -> list[LeaveRequestRecord]:
        """Every request starting in ``year``, whatever its status."""

        year_start, year_end = year_bounds(year)
        result = await db.execute(
            select(LeaveRequest, LeaveType.is_paid)
            .join(LeaveType, LeaveRequest.leave_type_id == LeaveType.id)
            .where(
                LeaveRequest.user_id == user_id,
                LeaveRequest.start_date >= year_start,
                LeaveRequest.start_date <= year_end,
            )
            .order_by(LeaveRequest.start_date)
        )
        return [
            LeaveRequestRecord.from_row(req, bool(is_paid))
            for req, is_paid in result.all()
        ]

    @staticmethod
    async def _load_bonus_grants(
        db: AsyncSession,
        user_id: uuid.UUID,
        year: int,
    ) -> list[BonusLeaveRecord]:
        result = await db.execute(
            select(BonusLeaveGrant).where(
                BonusLeaveGrant.user_id == user_id,
                BonusLeaveGrant.year == year,
            )
        )
        return [BonusLeaveRecord.model_validate(g) for g in result.scalars().all()]

    # ─────────────────────────────────────────────────────────────────
    # Balance
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_year_balance(
        db: AsyncSession,
        user_id: uuid.UUID,
        year: int,
        as_of: Optional[date] = None,
    ) -> BalanceSummary:
        """Paid/unpaid usage and remaining entitlement for ``year``."""

        record = await EmployeeTenureService.load_employment_record(db, user_id)
        policy = await LeaveBalanceService.get_policy(db)
        requests = await LeaveBalanceService._load_requests(db, user_id, year)
        grants = await LeaveBalanceService._load_bonus_grants(db, user_id, year)

        summary = compute_year_balance(
            year,
            requests,
            policy.accrual_rules,
            record.hire_date,
            record.absences,
            policy.carryover,
            as_of=as_of,
            bonus_grants=grants,
        )
        logger.debug(
            "Year %d balance for %s: remaining=%s", year, user_id, summary.remaining_days,
        )
        return summary

    @staticmethod
    async def get_carryover_status(
        db: AsyncSession,
        user_id: uuid.UUID,
        year: int,
        on_date: date,
    ) -> CarryoverStatus:
        """Whether last year's unused paid days still apply on ``on_date``."""

        previous = await LeaveBalanceService.get_year_balance(db, user_id, year - 1)
        policy = await LeaveBalanceService.get_policy(db)
        return carryover_status(previous.remaining_days, policy.carryover, year, on_date)
