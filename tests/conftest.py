"""Shared test fixtures — async DB, factories, common date/rule fixtures.

Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import AsyncGenerator, Optional

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from leave_engine.database import Base

# Import ALL model modules so SQLAlchemy can resolve cross-module relationships
# (e.g. Employee → ExtendedAbsence)
import leave_engine.absence.models  # noqa: F401
import leave_engine.balance.models  # noqa: F401
import leave_engine.employees.models  # noqa: F401
import leave_engine.entitlement.models  # noqa: F401

# ── SQLite compat: compile PG-specific types to TEXT/CHAR ───────────

from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _jsonb_sqlite(element, compiler, **kw):
    return "TEXT"


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine.sync_engine, "connect")
def _register_sqlite_functions(dbapi_conn, connection_record):
    """Register NOW() as a SQLite custom function."""
    dbapi_conn.create_function(
        "NOW", 0, lambda: datetime.now(timezone.utc).isoformat(),
    )


TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Model factories ─────────────────────────────────────────────────

def _make_employee(
    *,
    full_name: str = "Test User",
    email: Optional[str] = None,
    hire_date: Optional[date] = date(2022, 6, 1),
    is_active: bool = True,
) -> dict:
    return dict(
        id=uuid.uuid4(),
        full_name=full_name,
        email=email or f"{uuid.uuid4().hex[:8]}@example.com",
        hire_date=hire_date,
        is_active=is_active,
        created_at=datetime.now(timezone.utc),
    )


def _make_absence(
    user_id: uuid.UUID,
    start_date: date,
    end_date: date,
    *,
    reason: Optional[str] = "Sabbatical",
) -> dict:
    return dict(
        id=uuid.uuid4(),
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
        created_at=datetime.now(timezone.utc),
    )


def _make_leave_type(*, name: str = "Annual Leave", is_paid: bool = True) -> dict:
    return dict(
        id=uuid.uuid4(),
        name=name,
        description=None,
        is_paid=is_paid,
        supports_carryover=is_paid,
    )


def _make_leave_request(
    user_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    start_date: date,
    end_date: Optional[date] = None,
    *,
    status: str = "approved",
    is_half_day: bool = False,
) -> dict:
    return dict(
        id=uuid.uuid4(),
        user_id=user_id,
        leave_type_id=leave_type_id,
        start_date=start_date,
        end_date=end_date,
        is_half_day=is_half_day,
        half_day_type="morning" if is_half_day else None,
        status=status,
        created_at=datetime.now(timezone.utc),
    )


def _make_company_settings(
    *,
    rules: Optional[dict] = None,
    expiry_month: int = 3,
    expiry_day: int = 31,
) -> dict:
    return dict(
        carryover_expiry_month=expiry_month,
        carryover_expiry_day=expiry_day,
        tenure_accrual_rules=rules if rules is not None else {"1": 12, "2": 13, "3": 15, "5": 22},
        updated_at=datetime.now(timezone.utc),
    )


def _make_bonus_grant(
    user_id: uuid.UUID,
    *,
    year: int = 2024,
    days_granted: int = 3,
    days_used: int = 0,
) -> dict:
    return dict(
        id=uuid.uuid4(),
        user_id=user_id,
        year=year,
        days_granted=days_granted,
        days_used=days_used,
        reason="Project delivery",
        granted_at=datetime.now(timezone.utc),
    )


# ── Shared engine inputs ────────────────────────────────────────────

STANDARD_RULES = {1: 12, 2: 13, 3: 15, 5: 22}


@pytest.fixture
def standard_rules() -> dict[int, int]:
    return dict(STANDARD_RULES)


@pytest.fixture
def march_carryover():
    from leave_engine.entitlement.schemas import CarryoverPolicy

    return CarryoverPolicy(expiry_month=3, expiry_day=31)
