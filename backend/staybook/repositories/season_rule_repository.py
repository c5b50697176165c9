"""
BookingRule Repository

시즌 규칙 조회/관리 레포지토리
"""
from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from staybook.domain.booking.types import SeasonRule
from staybook.domain.models.season_rule import BookingRule


class SeasonRuleRepository:
    """BookingRule 조회/관리 레포지토리"""

    def __init__(self, db: Session):
        self._db = db

    def find_active(self) -> list[SeasonRule]:
        """활성 규칙 (엔진용 순수 데이터)"""
        stmt = select(BookingRule).where(
            BookingRule.is_active.is_(True),
        ).order_by(BookingRule.created_at.asc())
        return [r.to_season_rule() for r in self._db.execute(stmt).scalars().all()]

    def list_all(self) -> Sequence[BookingRule]:
        stmt = select(BookingRule).order_by(BookingRule.created_at.desc())
        return self._db.execute(stmt).scalars().all()

    def get(self, rule_id: str) -> Optional[BookingRule]:
        return self._db.get(BookingRule, rule_id)

    def count(self) -> int:
        return self._db.execute(select(func.count()).select_from(BookingRule)).scalar_one()

    def create(self, data: dict) -> BookingRule:
        rule = BookingRule(**data)
        self._db.add(rule)
        self._db.flush()
        return rule

    def update(self, rule: BookingRule, data: dict) -> BookingRule:
        for k, v in data.items():
            if hasattr(rule, k):
                setattr(rule, k, v)
        self._db.flush()
        return rule

    def delete(self, rule: BookingRule) -> None:
        self._db.delete(rule)
        self._db.flush()
