"""Leave ORM models: LeaveType, LeaveRequest, BonusLeaveGrant."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leave_engine.common.constants import HalfDayType, LeaveStatus
from leave_engine.database import Base


class LeaveType(Base):
    __tablename__ = "leave_types"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    is_paid: Mapped[bool] = mapped_column(sa.Boolean, server_default=sa.text("TRUE"))
    supports_carryover: Mapped[bool] = mapped_column(
        sa.Boolean, server_default=sa.text("FALSE")
    )

    # Relationships
    requests: Mapped[list[LeaveRequest]] = relationship(back_populates="leave_type")


class LeaveRequest(Base):
    __tablename__ = "leave_requests"
    __table_args__ = (
        sa.CheckConstraint(
            "(end_date IS NULL) OR (end_date >= start_date)", name="valid_date_range"
        ),
        sa.CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s.value}'" for s in LeaveStatus)),
            name="leave_requests_status_check",
        ),
        sa.CheckConstraint(
            "half_day_type IS NULL OR half_day_type IN ({})".format(
                ", ".join(f"'{t.value}'" for t in HalfDayType)
            ),
            name="leave_requests_half_day_type_check",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    leave_type_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("leave_types.id"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    is_half_day: Mapped[bool] = mapped_column(sa.Boolean, server_default=sa.text("FALSE"))
    half_day_type: Mapped[Optional[str]] = mapped_column(sa.Text)
    status: Mapped[str] = mapped_column(
        sa.Text, nullable=False, server_default=sa.text("'pending'")
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )

    # Relationships
    leave_type: Mapped[LeaveType] = relationship(back_populates="requests")


class BonusLeaveGrant(Base):
    __tablename__ = "bonus_leave_grants"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    year: Mapped[int] = mapped_column(sa.Integer, nullable=False, index=True)
    days_granted: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    days_used: Mapped[int] = mapped_column(sa.Integer, server_default=sa.text("0"))
    reason: Mapped[Optional[str]] = mapped_column(sa.Text)
    granted_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )
