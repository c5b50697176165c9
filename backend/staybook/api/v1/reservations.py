# backend/staybook/api/v1/reservations.py
"""
Reservation API

예약 요청 생성, 목록/이력 조회, 승인/거절, 삭제
"""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from staybook.api.deps import get_reservation_service
from staybook.domain.booking.errors import (
    BookingInputError,
    ReservationConflictError,
    ReservationNotFoundError,
)
from staybook.domain.models.reservation import ReservationStatus
from staybook.services.reservation_service import ReservationRequest, ReservationService

router = APIRouter(prefix="/reservations", tags=["reservations"])


# ============================================================
# Schemas
# ============================================================

class ReservationCreate(BaseModel):
    start_date: date
    end_date: date
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    number_of_people: int = Field(1, ge=1)
    address: Optional[str] = None
    locality: Optional[str] = None
    city: Optional[str] = None
    message: Optional[str] = None

    # 관리자 화면에서 만든 예약이면 규칙 검증을 건너뛴다
    is_admin: bool = False
    status: ReservationStatus = ReservationStatus.PENDING


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    start_date: date
    end_date: date
    status: str
    first_name: str
    last_name: str
    email: str
    phone: str
    number_of_people: int
    address: Optional[str] = None
    locality: Optional[str] = None
    city: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime
    updated_at: datetime


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Reservation not found",
    )


# ============================================================
# Endpoints
# ============================================================

@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    *,
    data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationRead:
    try:
        result = service.submit(ReservationRequest(**data.model_dump()))
    except BookingInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not result.accepted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.reason or "Reservation does not meet booking rules",
        )
    return ReservationRead.model_validate(result.reservation)


@router.get("", response_model=List[ReservationRead])
def list_reservations(
    *,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    service: ReservationService = Depends(get_reservation_service),
) -> List[ReservationRead]:
    return [ReservationRead.model_validate(r) for r in service.list_reservations(status_filter)]


@router.get("/history", response_model=List[ReservationRead])
def reservation_history(
    service: ReservationService = Depends(get_reservation_service),
) -> List[ReservationRead]:
    return [ReservationRead.model_validate(r) for r in service.history()]


@router.get("/{reservation_id}", response_model=ReservationRead)
def get_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationRead:
    try:
        return ReservationRead.model_validate(service.get(reservation_id))
    except ReservationNotFoundError:
        raise _not_found()


@router.patch("/{reservation_id}", response_model=ReservationRead)
def update_reservation_status(
    reservation_id: str,
    data: ReservationStatusUpdate,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationRead:
    try:
        reservation = service.set_status(reservation_id, data.status)
    except ReservationNotFoundError:
        raise _not_found()
    except ReservationConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return ReservationRead.model_validate(reservation)


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> None:
    try:
        service.delete(reservation_id)
    except ReservationNotFoundError:
        raise _not_found()
