"""
Reservation Repository

예약 저장/조회/상태 변경
- 규칙 엔진용 조회는 approved 예약만 보고 StayPeriod 로 변환해서 돌려준다
- 겹침 조회와 저장은 별개 연산이다. 동시 승인 경합은 DB 제약/직렬화로 막아야 한다
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from staybook.domain.booking.types import StayPeriod
from staybook.domain.models.reservation import Reservation, ReservationStatus


class ReservationRepository:
    def __init__(self, db: Session):
        self.db = db

    # --- 규칙 엔진용 조회 ---

    def find_approved_overlapping(
        self,
        start: date,
        end: date,
        *,
        exclude_id: Optional[str] = None,
    ) -> list[StayPeriod]:
        """[start, end] 와 하루라도 겹치는 확정 예약 (양끝 포함)"""
        stmt = select(Reservation).where(
            Reservation.status == ReservationStatus.APPROVED.value,
            Reservation.start_date <= end,
            Reservation.end_date >= start,
        )
        if exclude_id is not None:
            stmt = stmt.where(Reservation.id != exclude_id)
        stmt = stmt.order_by(Reservation.start_date.asc())
        return [r.to_period() for r in self.db.execute(stmt).scalars().all()]

    def find_approved_before(
        self,
        day: date,
        *,
        not_before: Optional[date] = None,
    ) -> Optional[StayPeriod]:
        """day 이전에 끝나는 가장 가까운 확정 예약"""
        stmt = select(Reservation).where(
            Reservation.status == ReservationStatus.APPROVED.value,
            Reservation.end_date < day,
        )
        if not_before is not None:
            stmt = stmt.where(Reservation.end_date >= not_before)
        stmt = stmt.order_by(Reservation.end_date.desc()).limit(1)
        row = self.db.execute(stmt).scalars().first()
        return row.to_period() if row else None

    def find_approved_after(
        self,
        day: date,
        *,
        not_after: Optional[date] = None,
    ) -> Optional[StayPeriod]:
        """day 이후에 시작하는 가장 가까운 확정 예약"""
        stmt = select(Reservation).where(
            Reservation.status == ReservationStatus.APPROVED.value,
            Reservation.start_date > day,
        )
        if not_after is not None:
            stmt = stmt.where(Reservation.start_date <= not_after)
        stmt = stmt.order_by(Reservation.start_date.asc()).limit(1)
        row = self.db.execute(stmt).scalars().first()
        return row.to_period() if row else None

    # --- 관리용 조회 ---

    def get(self, reservation_id: str) -> Optional[Reservation]:
        return self.db.get(Reservation, reservation_id)

    def list_by_status(self, status: Optional[str] = None) -> Sequence[Reservation]:
        stmt = select(Reservation)
        if status and status != "all":
            stmt = stmt.where(Reservation.status == status)
        stmt = stmt.order_by(Reservation.start_date.asc())
        return self.db.execute(stmt).scalars().all()

    def list_history(self) -> Sequence[Reservation]:
        """전체 예약 (최근 생성순)"""
        stmt = select(Reservation).order_by(Reservation.created_at.desc())
        return self.db.execute(stmt).scalars().all()

    # --- 생성/수정/삭제 ---

    def create(self, **fields) -> Reservation:
        reservation = Reservation(**fields)
        self.db.add(reservation)
        self.db.flush()
        return reservation

    def update_status(self, reservation: Reservation, status: ReservationStatus) -> Reservation:
        reservation.status = status.value
        self.db.flush()
        return reservation

    def delete(self, reservation: Reservation) -> None:
        self.db.delete(reservation)
        self.db.flush()
