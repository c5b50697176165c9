"""
Availability API

예약 폼에서 제출 전에 날짜를 미리 확인하는 용도
- /check: 날짜 겹침 + (게스트면) 예약 간격
- /validate: 최소 숙박일 + 예약 간격
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from staybook.api.deps import get_availability_service
from staybook.domain.booking.errors import BookingInputError
from staybook.services.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["Availability"])


class DateRangeRequest(BaseModel):
    start_date: date
    end_date: date


class AvailabilityCheckRequest(DateRangeRequest):
    is_admin: bool = False


class ConflictDTO(BaseModel):
    id: str
    start_date: date
    end_date: date


class AvailabilityCheckResponse(BaseModel):
    available: bool
    reason: Optional[str] = None
    conflicts: list[ConflictDTO] = []


class BookingValidationResponse(BaseModel):
    valid: bool
    reason: Optional[str] = None


@router.post("/check", response_model=AvailabilityCheckResponse)
def check_availability(
    data: AvailabilityCheckRequest,
    service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityCheckResponse:
    try:
        result = service.check_availability(data.start_date, data.end_date, data.is_admin)
    except BookingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AvailabilityCheckResponse(
        available=result.available,
        reason=result.reason,
        conflicts=[
            ConflictDTO(id=c.id, start_date=c.start_date, end_date=c.end_date)
            for c in result.conflicts
        ],
    )


@router.post("/validate", response_model=BookingValidationResponse)
def validate_booking(
    data: DateRangeRequest,
    service: AvailabilityService = Depends(get_availability_service),
) -> BookingValidationResponse:
    try:
        verdict = service.validate_booking(data.start_date, data.end_date)
    except BookingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BookingValidationResponse(valid=verdict.valid, reason=verdict.reason)
