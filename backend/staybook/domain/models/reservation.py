"""
Reservation: 게스트 예약 요청

- 게스트가 요청하면 pending, 관리자가 승인하면 approved
- 가용성/간격 판정에는 approved 예약만 참여한다
- start_date, end_date 모두 숙박일에 포함 (양끝 포함)
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from staybook.db.base import Base
from staybook.domain.booking.types import StayPeriod


class ReservationStatus(str, Enum):
    """예약 상태"""
    PENDING = "pending"      # 관리자 승인 대기
    APPROVED = "approved"    # 확정
    REJECTED = "rejected"    # 거절


class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReservationStatus.PENDING.value
    )

    # 게스트 정보
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    locality: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    number_of_people: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # 메타
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        Index("idx_reservations_status_dates", "status", "start_date", "end_date"),
        CheckConstraint("end_date > start_date", name="ck_reservations_range"),
    )

    @property
    def is_approved(self) -> bool:
        return self.status == ReservationStatus.APPROVED.value

    def to_period(self) -> StayPeriod:
        return StayPeriod(id=self.id, start_date=self.start_date, end_date=self.end_date)

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, status={self.status}, "
            f"{self.start_date} -> {self.end_date})>"
        )
