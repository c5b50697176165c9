"""
Calendar API

월별 예약 가능 날짜 + 해당 기간의 확정 예약/차단 기간
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from staybook.api.deps import get_availability_service
from staybook.domain.booking.errors import InvalidCalendarMonthError
from staybook.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])


# ========== DTOs ==========

class PeriodDTO(BaseModel):
    """확정 예약 기간"""
    id: str
    start_date: date
    end_date: date


class BlockedPeriodDTO(PeriodDTO):
    """차단 기간"""
    reason: Optional[str] = None


class CalendarMonthDTO(BaseModel):
    """월별 달력 데이터"""
    year: int
    month: int
    available_dates: list[date]
    reservations: list[PeriodDTO]
    blocked_dates: list[BlockedPeriodDTO]


# ========== Endpoints ==========

@router.get("", response_model=CalendarMonthDTO)
def get_calendar(
    year: int = Query(..., description="조회 연도"),
    month: int = Query(..., description="조회 월 (1-12)"),
    service: AvailabilityService = Depends(get_availability_service),
) -> CalendarMonthDTO:
    """
    월간 달력 데이터 조회

    - available_dates: 확정 예약/차단 기간에 걸리지 않은 날
    - reservations, blocked_dates: 앞뒤 한 달을 포함한 범위
    """
    try:
        cal = service.calendar_month(year, month)
    except InvalidCalendarMonthError as e:
        logger.warning("CALENDAR: %s", e)
        raise HTTPException(status_code=400, detail="Invalid year or month")

    return CalendarMonthDTO(
        year=cal.year,
        month=cal.month,
        available_dates=cal.available_dates,
        reservations=[
            PeriodDTO(id=p.id, start_date=p.start_date, end_date=p.end_date)
            for p in cal.reservations
        ],
        blocked_dates=[
            BlockedPeriodDTO(id=b.id, start_date=b.start_date, end_date=b.end_date, reason=b.reason)
            for b in cal.blocked_periods
        ],
    )
