"""
BookingRule: 관리자가 설정하는 시즌 규칙

- 성수기/비수기 두 그룹으로 나뉜다 (그룹당 여러 개 가능)
- 성수기 규칙만 월 범위와 예약 간격 설정이 의미 있음
- 엔진은 읽기만 한다 (수정은 관리자 API 전용)
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from staybook.db.base import Base
from staybook.domain.booking.types import MonthRange, SeasonRule


class BookingRule(Base):
    __tablename__ = "booking_rules"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_high_season: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # 1~12, 둘 다 있거나 둘 다 없음. start > end 면 연말을 넘어가는 범위
    high_season_start_month: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    high_season_end_month: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    minimum_stay_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    enforce_gap_between_bookings: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    minimum_gap_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        CheckConstraint(
            "(high_season_start_month IS NULL) = (high_season_end_month IS NULL)",
            name="ck_booking_rules_months_together",
        ),
        CheckConstraint("minimum_stay_days >= 1", name="ck_booking_rules_min_stay"),
    )

    def to_season_rule(self) -> SeasonRule:
        """엔진이 쓰는 순수 데이터로 변환"""
        months = None
        if self.high_season_start_month is not None and self.high_season_end_month is not None:
            months = MonthRange(self.high_season_start_month, self.high_season_end_month)
        return SeasonRule(
            id=self.id,
            name=self.name,
            active=self.is_active,
            is_high_season=self.is_high_season,
            months=months,
            minimum_stay_days=self.minimum_stay_days,
            enforce_gap_between_bookings=self.enforce_gap_between_bookings,
            minimum_gap_days=self.minimum_gap_days,
        )

    def __repr__(self) -> str:
        return (
            f"<BookingRule(name={self.name}, active={self.is_active}, "
            f"high_season={self.is_high_season}, "
            f"months={self.high_season_start_month}-{self.high_season_end_month})>"
        )
