"""Company policy ORM model: CompanySettings."""

from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from leave_engine.database import Base


class CompanySettings(Base):
    __tablename__ = "company_settings"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    carryover_expiry_day: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    carryover_expiry_month: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    # {"1": 12, "2": 13, ...}
    tenure_accrual_rules: Mapped[dict] = mapped_column(JSONB, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )
