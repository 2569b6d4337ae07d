"""Employee tenure service — loads user snapshots and runs tenure/anniversary math.

Read-only: every method takes a caller-owned AsyncSession, queries the
host's tables and hands plain records to the pure engine functions.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from leave_engine.absence.schemas import AbsenceImpact, AbsenceInterval
from leave_engine.anniversary.resolver import (
    is_anniversary,
    month_anniversaries,
    upcoming_anniversaries,
)
from leave_engine.anniversary.schemas import AnniversaryEntry
from leave_engine.common.exceptions import NotFoundException
from leave_engine.employees.models import Employee
from leave_engine.employees.schemas import EmploymentRecord
from leave_engine.tenure.calculator import absence_impact, effective_tenure
from leave_engine.tenure.schemas import TenureResult

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# EmployeeTenureService
# ═════════════════════════════════════════════════════════════════════


class EmployeeTenureService:
    """Async tenure and anniversary lookups for one or all employees."""

    # ─────────────────────────────────────────────────────────────────
    # Loaders
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _to_record(emp: Employee) -> EmploymentRecord:
        return EmploymentRecord(
            user_id=emp.id,
            full_name=emp.full_name,
            hire_date=emp.hire_date,
            is_active=emp.is_active,
            absences=tuple(AbsenceInterval.from_row(a) for a in emp.absences),
        )

    @staticmethod
    async def load_employment_record(
        db: AsyncSession,
        user_id: uuid.UUID,
    ) -> EmploymentRecord:
        """Hire date plus raw absence rows for one user."""

        result = await db.execute(
            select(Employee)
            .where(Employee.id == user_id)
            .options(selectinload(Employee.absences))
        )
        emp = result.scalars().first()
        if emp is None:
            raise NotFoundException("User", str(user_id))

        record = EmployeeTenureService._to_record(emp)
        if record.hire_date is None:
            logger.warning("User %s has no start date; treating as new hire", user_id)
        return record

    @staticmethod
    async def load_active_records(db: AsyncSession) -> list[EmploymentRecord]:
        """All active users with a start date, in name order."""

        result = await db.execute(
            select(Employee)
            .where(Employee.is_active.is_(True), Employee.hire_date.is_not(None))
            .options(selectinload(Employee.absences))
            .order_by(Employee.full_name)
        )
        return [EmployeeTenureService._to_record(e) for e in result.scalars().all()]

    # ─────────────────────────────────────────────────────────────────
    # Tenure
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_effective_tenure(
        db: AsyncSession,
        user_id: uuid.UUID,
        as_of: date,
    ) -> TenureResult:
        record = await EmployeeTenureService.load_employment_record(db, user_id)
        tenure = effective_tenure(record.hire_date, record.absences, as_of)
        logger.debug("Tenure for %s as of %s: %s", user_id, as_of, tenure.as_tuple())
        return tenure

    @staticmethod
    async def get_absence_impact(
        db: AsyncSession,
        user_id: uuid.UUID,
        as_of: date,
    ) -> AbsenceImpact:
        record = await EmployeeTenureService.load_employment_record(db, user_id)
        return absence_impact(record.hire_date, record.absences, as_of)

    # ─────────────────────────────────────────────────────────────────
    # Anniversaries
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def is_anniversary_today(
        db: AsyncSession,
        user_id: uuid.UUID,
        today: date,
    ) -> bool:
        record = await EmployeeTenureService.load_employment_record(db, user_id)
        return is_anniversary(record.hire_date, record.absences, today)

    @staticmethod
    async def get_month_anniversaries(
        db: AsyncSession,
        month: int,
        today: date,
    ) -> list[AnniversaryEntry]:
        """Effective anniversaries in ``month`` across all active employees."""

        records = await EmployeeTenureService.load_active_records(db)
        return month_anniversaries(records, month, today)

    @staticmethod
    async def get_upcoming_anniversaries(
        db: AsyncSession,
        today: date,
        limit: Optional[int] = None,
    ) -> list[AnniversaryEntry]:
        records = await EmployeeTenureService.load_active_records(db)
        return upcoming_anniversaries(records, today, limit)
