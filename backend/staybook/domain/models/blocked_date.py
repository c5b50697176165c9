"""
BlockedDate: 관리자가 막아둔 기간

시즌/간격 규칙과 무관하게 해당 날짜를 예약 불가로 만든다.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from staybook.db.base import Base
from staybook.domain.booking.types import BlockedPeriod


class BlockedDate(Base):
    __tablename__ = "blocked_dates"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    __table_args__ = (
        Index("idx_blocked_dates_range", "start_date", "end_date"),
        CheckConstraint("end_date > start_date", name="ck_blocked_dates_range"),
    )

    def to_period(self) -> BlockedPeriod:
        return BlockedPeriod(
            id=self.id,
            start_date=self.start_date,
            end_date=self.end_date,
            reason=self.reason,
        )

    def __repr__(self) -> str:
        return f"<BlockedDate {self.start_date} -> {self.end_date}>"
