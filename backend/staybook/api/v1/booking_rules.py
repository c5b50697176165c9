# backend/staybook/api/v1/booking_rules.py
"""
Booking Rules 관리 API

시즌 규칙 CRUD
- 생성/수정/삭제 후 규칙 캐시 무효화 (서비스에서 처리)
- /active 는 캐시 경유라 저장소 장애 시 기본 규칙을 돌려준다
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, model_validator

from staybook.api.deps import get_season_rule_service
from staybook.domain.booking.errors import SeasonRuleNotFoundError
from staybook.domain.booking.types import SeasonRule
from staybook.services.season_rule_service import SeasonRuleService

router = APIRouter(prefix="/booking-rules", tags=["booking-rules"])


# ============================================================
# Schemas
# ============================================================

class BookingRuleBase(BaseModel):
    name: str = Field(..., min_length=1, description="규칙 이름 (표시용)")
    is_active: bool = True
    is_high_season: bool = False
    high_season_start_month: Optional[int] = Field(None, ge=1, le=12)
    high_season_end_month: Optional[int] = Field(None, ge=1, le=12)
    minimum_stay_days: int = Field(1, ge=1)
    enforce_gap_between_bookings: bool = False
    minimum_gap_days: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_months_together(self):
        if (self.high_season_start_month is None) != (self.high_season_end_month is None):
            raise ValueError("high_season_start_month and high_season_end_month must be set together")
        return self


class BookingRuleCreate(BookingRuleBase):
    pass


class BookingRuleUpdate(BookingRuleBase):
    pass


class BookingRuleRead(BookingRuleBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def _from_season_rule(rule: SeasonRule) -> BookingRuleRead:
    return BookingRuleRead(
        id=rule.id,
        name=rule.name,
        is_active=rule.active,
        is_high_season=rule.is_high_season,
        high_season_start_month=rule.months.start if rule.months else None,
        high_season_end_month=rule.months.end if rule.months else None,
        minimum_stay_days=rule.minimum_stay_days,
        enforce_gap_between_bookings=rule.enforce_gap_between_bookings,
        minimum_gap_days=rule.minimum_gap_days,
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Booking rule not found",
    )


# ============================================================
# Endpoints
# ============================================================

@router.get("", response_model=List[BookingRuleRead])
def list_booking_rules(
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> List[BookingRuleRead]:
    return [BookingRuleRead.model_validate(r) for r in service.list_all()]


@router.get("/active", response_model=List[BookingRuleRead])
def list_active_rules(
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> List[BookingRuleRead]:
    return [_from_season_rule(r) for r in service.active_rules()]


@router.post("/refresh", response_model=List[BookingRuleRead])
def refresh_rules(
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> List[BookingRuleRead]:
    """캐시를 비우고 다시 조회"""
    return [_from_season_rule(r) for r in service.rule_cache.refresh()]


@router.get("/{rule_id}", response_model=BookingRuleRead)
def get_booking_rule(
    rule_id: str,
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> BookingRuleRead:
    try:
        return BookingRuleRead.model_validate(service.get(rule_id))
    except SeasonRuleNotFoundError:
        raise _not_found()


@router.post("", response_model=BookingRuleRead, status_code=status.HTTP_201_CREATED)
def create_booking_rule(
    data: BookingRuleCreate,
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> BookingRuleRead:
    rule = service.create(data.model_dump())
    return BookingRuleRead.model_validate(rule)


@router.put("/{rule_id}", response_model=BookingRuleRead)
def update_booking_rule(
    rule_id: str,
    data: BookingRuleUpdate,
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> BookingRuleRead:
    try:
        rule = service.update(rule_id, data.model_dump())
    except SeasonRuleNotFoundError:
        raise _not_found()
    return BookingRuleRead.model_validate(rule)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking_rule(
    rule_id: str,
    service: SeasonRuleService = Depends(get_season_rule_service),
) -> None:
    try:
        service.delete(rule_id)
    except SeasonRuleNotFoundError:
        raise _not_found()
