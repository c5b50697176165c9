"""
Reservation Service

예약 요청 → 승인/거절 워크플로우
- 게스트 요청: 가용성(간격 포함) + 최소 숙박 규칙 통과 시 pending 으로 저장
- 관리자 요청: 날짜 겹침만 확인, 규칙 우회, 상태 지정 가능
- 승인 시 다른 확정 예약과 겹치는지 다시 확인

확인과 저장은 두 개의 연산이다. 동시에 같은 날짜를 승인하는 경합은
저장소(배타 제약 또는 쓰기 직렬화)에서 막아야 한다.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from staybook.domain.booking.errors import (
    ReservationConflictError,
    ReservationNotFoundError,
)
from staybook.domain.booking.types import ensure_date_range
from staybook.domain.models.reservation import Reservation, ReservationStatus
from staybook.repositories.reservation_repository import ReservationRepository
from staybook.services.availability_service import AvailabilityService
from staybook.services.season_rule_cache import SeasonRuleCache

logger = logging.getLogger(__name__)


@dataclass
class ReservationRequest:
    start_date: date
    end_date: date
    first_name: str
    last_name: str
    email: str
    phone: str
    number_of_people: int = 1
    address: Optional[str] = None
    locality: Optional[str] = None
    city: Optional[str] = None
    message: Optional[str] = None
    is_admin: bool = False
    status: ReservationStatus = ReservationStatus.PENDING


@dataclass(frozen=True)
class SubmissionResult:
    accepted: bool
    reservation: Optional[Reservation] = None
    reason: Optional[str] = None


class ReservationService:
    def __init__(
        self,
        db: Session,
        rule_cache: SeasonRuleCache,
        *,
        adjacent_lookup_months: int = 1,
    ):
        self.db = db
        self.repo = ReservationRepository(db)
        self.availability = AvailabilityService(
            db, rule_cache, adjacent_lookup_months=adjacent_lookup_months
        )

    def submit(self, request: ReservationRequest) -> SubmissionResult:
        start, end = ensure_date_range(request.start_date, request.end_date)

        availability = self.availability.check_availability(start, end, request.is_admin)
        if not availability.available:
            return SubmissionResult(accepted=False, reason=availability.reason)

        if request.is_admin:
            logger.info("RESERVATION: admin reservation %s -> %s bypasses booking rules", start, end)
            status = request.status
        else:
            verdict = self.availability.validate_booking(start, end)
            if not verdict.valid:
                return SubmissionResult(accepted=False, reason=verdict.reason)
            # 게스트 요청은 항상 승인 대기
            status = ReservationStatus.PENDING

        reservation = self.repo.create(
            start_date=start,
            end_date=end,
            status=status.value,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
            number_of_people=request.number_of_people,
            address=request.address,
            locality=request.locality,
            city=request.city,
            message=request.message,
        )
        self.db.commit()
        self.db.refresh(reservation)

        logger.info("RESERVATION: %s created (%s)", reservation.id, reservation.status)
        return SubmissionResult(accepted=True, reservation=reservation)

    # --- 조회 ---

    def get(self, reservation_id: str) -> Reservation:
        reservation = self.repo.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    def list_reservations(self, status: Optional[str] = None) -> Sequence[Reservation]:
        return self.repo.list_by_status(status)

    def history(self) -> Sequence[Reservation]:
        return self.repo.list_history()

    # --- 상태 변경/삭제 ---

    def set_status(self, reservation_id: str, status: ReservationStatus) -> Reservation:
        reservation = self.get(reservation_id)

        if status == ReservationStatus.APPROVED and not reservation.is_approved:
            conflicts = self.repo.find_approved_overlapping(
                reservation.start_date,
                reservation.end_date,
                exclude_id=reservation.id,
            )
            if conflicts:
                raise ReservationConflictError(
                    "Cannot approve this request: the dates are already booked."
                )

        previous_status = reservation.status
        self.repo.update_status(reservation, status)
        self.db.commit()
        self.db.refresh(reservation)

        logger.info(
            "RESERVATION: %s status %s -> %s", reservation.id, previous_status, reservation.status
        )
        return reservation

    def delete(self, reservation_id: str) -> None:
        reservation = self.get(reservation_id)
        self.repo.delete(reservation)
        self.db.commit()
        logger.info("RESERVATION: %s deleted", reservation_id)
