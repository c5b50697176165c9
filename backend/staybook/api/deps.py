# backend/staybook/api/deps.py
"""
API 의존성

규칙 캐시는 create_app() 에서 만들어 app.state 에 올려둔다 (프로세스 단위 1개).
서비스는 요청마다 DB 세션과 캐시로 조립한다.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from staybook.core.config import settings
from staybook.db.session import get_db
from staybook.services.availability_service import AvailabilityService
from staybook.services.reservation_service import ReservationService
from staybook.services.season_rule_cache import SeasonRuleCache
from staybook.services.season_rule_service import SeasonRuleService


def get_rule_cache(request: Request) -> SeasonRuleCache:
    return request.app.state.rule_cache


def get_availability_service(
    db: Session = Depends(get_db),
    rule_cache: SeasonRuleCache = Depends(get_rule_cache),
) -> AvailabilityService:
    return AvailabilityService(
        db, rule_cache, adjacent_lookup_months=settings.ADJACENT_LOOKUP_MONTHS
    )


def get_reservation_service(
    db: Session = Depends(get_db),
    rule_cache: SeasonRuleCache = Depends(get_rule_cache),
) -> ReservationService:
    return ReservationService(
        db, rule_cache, adjacent_lookup_months=settings.ADJACENT_LOOKUP_MONTHS
    )


def get_season_rule_service(
    db: Session = Depends(get_db),
    rule_cache: SeasonRuleCache = Depends(get_rule_cache),
) -> SeasonRuleService:
    return SeasonRuleService(db, rule_cache)
