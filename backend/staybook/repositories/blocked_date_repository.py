"""
BlockedDate Repository

차단 기간 저장/조회
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from staybook.domain.booking.types import BlockedPeriod
from staybook.domain.models.blocked_date import BlockedDate


class BlockedDateRepository:
    def __init__(self, db: Session):
        self._db = db

    def find_overlapping(self, start: date, end: date) -> list[BlockedPeriod]:
        """[start, end] 와 하루라도 겹치는 차단 기간"""
        stmt = select(BlockedDate).where(
            BlockedDate.start_date <= end,
            BlockedDate.end_date >= start,
        ).order_by(BlockedDate.start_date.asc())
        return [b.to_period() for b in self._db.execute(stmt).scalars().all()]

    def list_all(self) -> Sequence[BlockedDate]:
        stmt = select(BlockedDate).order_by(BlockedDate.start_date.asc())
        return self._db.execute(stmt).scalars().all()

    def get(self, blocked_id: str) -> Optional[BlockedDate]:
        return self._db.get(BlockedDate, blocked_id)

    def create(self, start: date, end: date, reason: Optional[str] = None) -> BlockedDate:
        blocked = BlockedDate(start_date=start, end_date=end, reason=reason)
        self._db.add(blocked)
        self._db.flush()
        return blocked

    def delete(self, blocked: BlockedDate) -> None:
        self._db.delete(blocked)
        self._db.flush()
