"""
Season Rule Service

시즌 규칙 CRUD
- 모든 변경은 commit 직후 캐시를 무효화한다
- 빈 저장소에 기본 규칙 쌍을 심는 seed 제공
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from staybook.domain.booking.defaults import DEFAULT_SEASON_RULES
from staybook.domain.booking.errors import SeasonRuleNotFoundError
from staybook.domain.booking.types import SeasonRule
from staybook.domain.models.season_rule import BookingRule
from staybook.repositories.season_rule_repository import SeasonRuleRepository
from staybook.services.season_rule_cache import SeasonRuleCache

logger = logging.getLogger(__name__)


def rule_to_row_data(rule: SeasonRule) -> dict:
    return {
        "name": rule.name,
        "is_active": rule.active,
        "is_high_season": rule.is_high_season,
        "high_season_start_month": rule.months.start if rule.months else None,
        "high_season_end_month": rule.months.end if rule.months else None,
        "minimum_stay_days": rule.minimum_stay_days,
        "enforce_gap_between_bookings": rule.enforce_gap_between_bookings,
        "minimum_gap_days": rule.minimum_gap_days,
    }


class SeasonRuleService:
    def __init__(self, db: Session, rule_cache: SeasonRuleCache):
        self.db = db
        self.repo = SeasonRuleRepository(db)
        self.rule_cache = rule_cache

    def list_all(self) -> Sequence[BookingRule]:
        return self.repo.list_all()

    def get(self, rule_id: str) -> BookingRule:
        rule = self.repo.get(rule_id)
        if rule is None:
            raise SeasonRuleNotFoundError(rule_id)
        return rule

    def active_rules(self) -> list[SeasonRule]:
        """캐시 경유 (저장소 실패 시 기본 규칙)"""
        return self.rule_cache.get()

    def create(self, data: dict) -> BookingRule:
        rule = self.repo.create(data)
        self._commit_and_invalidate()
        self.db.refresh(rule)
        logger.info("SEASON_RULES: rule %s created", rule.id)
        return rule

    def update(self, rule_id: str, data: dict) -> BookingRule:
        rule = self.repo.update(self.get(rule_id), data)
        self._commit_and_invalidate()
        self.db.refresh(rule)
        logger.info("SEASON_RULES: rule %s updated", rule.id)
        return rule

    def delete(self, rule_id: str) -> None:
        self.repo.delete(self.get(rule_id))
        self._commit_and_invalidate()
        logger.info("SEASON_RULES: rule %s deleted", rule_id)

    def seed_defaults(self) -> int:
        """규칙이 하나도 없을 때만 기본 규칙 쌍을 저장. 저장한 개수 반환"""
        if self.repo.count() > 0:
            return 0
        for rule in DEFAULT_SEASON_RULES:
            self.repo.create(rule_to_row_data(rule))
        self._commit_and_invalidate()
        logger.info("SEASON_RULES: seeded %d default rules", len(DEFAULT_SEASON_RULES))
        return len(DEFAULT_SEASON_RULES)

    def _commit_and_invalidate(self) -> None:
        self.db.commit()
        self.rule_cache.invalidate()
