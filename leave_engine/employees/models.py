"""Employee ORM model (read-only view of the ``users`` table)."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leave_engine.database import Base


class Employee(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    full_name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    email: Mapped[str] = mapped_column(sa.Text, unique=True, nullable=False)
    # stored as start_date by the host schema
    hire_date: Mapped[Optional[date]] = mapped_column("start_date", sa.Date)
    is_active: Mapped[bool] = mapped_column(sa.Boolean, server_default=sa.text("TRUE"))
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )

    # Relationships
    absences: Mapped[list["ExtendedAbsence"]] = relationship(  # noqa: F821
        back_populates="employee",
        order_by="ExtendedAbsence.start_date",
    )
