"""
Availability Service

예약 가능 여부 판정과 달력용 빈 날짜 계산
- check_availability: 날짜 겹침 → (게스트면) 예약 간격 규칙
- validate_booking: 최소 숙박일 + 예약 간격 (게스트 예약 전용)
- list_available_dates: 확정 예약/차단 기간을 뺀 날짜 (규칙 미적용)

날짜는 모두 date 로 정규화한 뒤 계산한다 (시각 성분 제거).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from staybook.domain.booking import calendar
from staybook.domain.booking.season_policy import SeasonPolicy
from staybook.domain.booking.types import (
    AvailabilityResult,
    BlockedPeriod,
    BookingVerdict,
    DateLike,
    StayPeriod,
    ensure_date_range,
)
from staybook.repositories.blocked_date_repository import BlockedDateRepository
from staybook.repositories.reservation_repository import ReservationRepository
from staybook.services.season_rule_cache import SeasonRuleCache

logger = logging.getLogger(__name__)

DATES_NOT_AVAILABLE = "Selected dates are not available"


@dataclass(frozen=True)
class CalendarMonth:
    """달력 한 달치 데이터"""
    year: int
    month: int
    available_dates: list[date]
    reservations: list[StayPeriod]
    blocked_periods: list[BlockedPeriod]


class AvailabilityService:
    def __init__(
        self,
        db: Session,
        rule_cache: SeasonRuleCache,
        *,
        adjacent_lookup_months: int = 1,
    ):
        self.db = db
        self.rule_cache = rule_cache
        self.adjacent_lookup_months = adjacent_lookup_months
        self.reservations = ReservationRepository(db)
        self.blocked_dates = BlockedDateRepository(db)

    def current_policy(self) -> SeasonPolicy:
        return SeasonPolicy(self.rule_cache.get())

    def _adjacent_reservations(
        self, start: date, end: date
    ) -> tuple[Optional[StayPeriod], Optional[StayPeriod]]:
        """확장 범위 안에서 가장 가까운 앞/뒤 확정 예약"""
        window_start, window_end = calendar.padded_window(
            start, end, self.adjacent_lookup_months
        )
        previous = self.reservations.find_approved_before(start, not_before=window_start)
        following = self.reservations.find_approved_after(end, not_after=window_end)
        return previous, following

    # ─────────────────────────────────────────────────────────
    # 가용성
    # ─────────────────────────────────────────────────────────

    def check_availability(
        self,
        start: DateLike,
        end: DateLike,
        is_admin: bool = False,
    ) -> AvailabilityResult:
        """
        1. 확정 예약/차단 기간과 겹치면 불가 (관리자도 동일)
        2. 관리자 예약이 아니면 앞/뒤 인접 예약과의 간격 규칙 확인
        """
        start_day, end_day = ensure_date_range(start, end)

        overlapping = self.reservations.find_approved_overlapping(start_day, end_day)
        if overlapping:
            logger.info(
                "AVAILABILITY: %s -> %s overlaps %d approved reservation(s)",
                start_day, end_day, len(overlapping),
            )
            return AvailabilityResult(
                available=False,
                reason=DATES_NOT_AVAILABLE,
                conflicts=tuple(overlapping),
            )

        blocked = self.blocked_dates.find_overlapping(start_day, end_day)
        if blocked:
            logger.info(
                "AVAILABILITY: %s -> %s overlaps %d blocked period(s)",
                start_day, end_day, len(blocked),
            )
            return AvailabilityResult(
                available=False,
                reason=DATES_NOT_AVAILABLE,
                conflicts=tuple(blocked),
            )

        # 관리자 예약은 간격 규칙을 건너뛴다
        if is_admin:
            return AvailabilityResult(available=True)

        previous, following = self._adjacent_reservations(start_day, end_day)
        gap_check = self.current_policy().check_gap(start_day, end_day, previous, following)
        if not gap_check.allowed:
            logger.info("AVAILABILITY: rejected by gap rule: %s", gap_check.reason)
            return AvailabilityResult(available=False, reason=gap_check.reason)

        return AvailabilityResult(available=True)

    def is_date_available(
        self,
        start: DateLike,
        end: DateLike,
        is_admin: bool = False,
    ) -> bool:
        return self.check_availability(start, end, is_admin).available

    # ─────────────────────────────────────────────────────────
    # 예약 규칙 검증
    # ─────────────────────────────────────────────────────────

    def validate_booking(self, start: DateLike, end: DateLike) -> BookingVerdict:
        """
        게스트 예약의 최소 숙박일 + 간격 규칙 검증

        간격 규칙에는 앞뒤 adjacent_lookup_months 개월 안의 가장 가까운
        확정 예약만 넘긴다. 그 범위 밖의 예약은 최소 간격이 더 길어도
        판정에 참여하지 않는다.
        """
        start_day, end_day = ensure_date_range(start, end)
        previous, following = self._adjacent_reservations(start_day, end_day)
        existing = [p for p in (previous, following) if p is not None]

        verdict = self.current_policy().validate_booking(start_day, end_day, existing)
        if not verdict.valid:
            logger.info("BOOKING_RULES: %s -> %s rejected: %s", start_day, end_day, verdict.reason)
        return verdict

    # ─────────────────────────────────────────────────────────
    # 달력
    # ─────────────────────────────────────────────────────────

    def list_available_dates(self, year: int, month: int) -> list[date]:
        return self.calendar_month(year, month).available_dates

    def calendar_month(self, year: int, month: int) -> CalendarMonth:
        """
        한 달치 빈 날짜 + 앞뒤 한 달을 포함한 확정 예약/차단 기간

        여러 달에 걸친 예약도 빠지지 않도록 조회 범위를 넓힌다.
        """
        window_start, window_end = calendar.padded_month_window(
            year, month, self.adjacent_lookup_months
        )
        reservations = self.reservations.find_approved_overlapping(window_start, window_end)
        blocked = self.blocked_dates.find_overlapping(window_start, window_end)

        available = calendar.available_dates(year, month, reservations, blocked)
        logger.debug(
            "CALENDAR: %04d-%02d available=%d reservations=%d blocked=%d",
            year, month, len(available), len(reservations), len(blocked),
        )
        return CalendarMonth(
            year=year,
            month=month,
            available_dates=available,
            reservations=reservations,
            blocked_periods=blocked,
        )
