"""
SeasonPolicy: 시즌 규칙 기반 예약 판정

핵심 원칙:
- 활성 규칙 목록(스냅샷) 하나로 모든 판정을 한다
- 저장소/캐시를 모른다. 순수 계산만 한다
- 같은 성격의 규칙이 여러 개면 가장 엄격한 값(최대값)을 쓴다

판정 항목:
1. 성수기 여부 (날짜 / 기간)
2. 최소 숙박일
3. 예약 간 간격 (0일 연속 예약 또는 최소 간격 이상)
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from .types import (
    BookingVerdict,
    DateLike,
    GapCheck,
    SeasonRule,
    StayPeriod,
    as_day,
    ensure_date_range,
)

logger = logging.getLogger(__name__)

# 15일 간격으로 샘플링하면 기간 안의 모든 달을 한 번 이상 확인한다
SEASON_SAMPLE_STEP_DAYS = 15
DEFAULT_MINIMUM_STAY_DAYS = 1


def gap_days(earlier_end: date, later_start: date) -> int:
    """
    두 예약 사이의 빈 날 수

    앞 예약이 X일에 끝나고 다음 예약이 X+1일에 시작하면 연속 예약(0일).
    X+2일에 시작하면 1일, 이런 식이다.
    """
    return max(0, (as_day(later_start) - as_day(earlier_end)).days - 1)


def stay_length_days(start: DateLike, end: DateLike) -> int:
    """숙박 기간 (시작일, 종료일 모두 포함)"""
    return (as_day(end) - as_day(start)).days + 1


def minimum_stay_reason(days: int) -> str:
    suffix = "s" if days > 1 else ""
    return f"The minimum stay for this period is {days} day{suffix}."


def gap_reason(required_gap: int, actual_gap: int, side: str) -> str:
    return (
        "High season bookings must either follow an existing booking directly "
        f"(0 days) or leave at least {required_gap} days between bookings. "
        f"({actual_gap} days {side})"
    )


class SeasonPolicy:
    """
    활성 시즌 규칙 스냅샷에 대한 판정기

    사용 예:
        policy = SeasonPolicy(rule_cache.get())
        verdict = policy.validate_booking(start, end, existing)
    """

    def __init__(self, rules: Iterable[SeasonRule]):
        self._rules: tuple[SeasonRule, ...] = tuple(r for r in rules if r.active)

    @property
    def rules(self) -> tuple[SeasonRule, ...]:
        return self._rules

    # ─────────────────────────────────────────────────────────
    # 시즌 판정
    # ─────────────────────────────────────────────────────────

    def is_high_season(self, day: DateLike) -> bool:
        return any(rule.covers(day) for rule in self._rules)

    def range_overlaps_high_season(self, start: DateLike, end: DateLike) -> bool:
        """
        기간의 어느 부분이라도 성수기에 걸치면 True

        비수기처럼 보이는 긴 예약이 성수기 달을 통과하는 경우도 포함.
        """
        start_day, end_day = as_day(start), as_day(end)
        if self.is_high_season(start_day) or self.is_high_season(end_day):
            return True

        span = (end_day - start_day).days
        for offset in range(0, span + 1, SEASON_SAMPLE_STEP_DAYS):
            if self.is_high_season(start_day + timedelta(days=offset)):
                return True
        return False

    # ─────────────────────────────────────────────────────────
    # 최소 숙박일
    # ─────────────────────────────────────────────────────────

    def _max_minimum_stay(self, high_season: bool) -> int:
        values = [
            rule.minimum_stay_days
            for rule in self._rules
            if rule.is_high_season == high_season
        ]
        return max(values) if values else DEFAULT_MINIMUM_STAY_DAYS

    def minimum_stay_days(self, day: DateLike) -> int:
        """해당 날짜 시즌의 최소 숙박일 (규칙 없으면 1)"""
        return self._max_minimum_stay(self.is_high_season(day))

    def minimum_stay_for_range(self, start: DateLike, end: DateLike) -> int:
        """기간이 성수기에 걸치면 성수기 최소 숙박일, 아니면 비수기 값"""
        return self._max_minimum_stay(self.range_overlaps_high_season(start, end))

    # ─────────────────────────────────────────────────────────
    # 예약 간격
    # ─────────────────────────────────────────────────────────

    def required_gap_days(self) -> Optional[int]:
        values = [rule.minimum_gap_days for rule in self._rules if rule.enforces_gap]
        return max(values) if values else None

    def check_gap(
        self,
        start: DateLike,
        end: DateLike,
        previous: Optional[StayPeriod] = None,
        following: Optional[StayPeriod] = None,
    ) -> GapCheck:
        """
        앞/뒤 인접 확정 예약 기준으로 간격 규칙 판정

        - 0일 (연속 예약): 항상 허용
        - 0 < 간격 < 최소 간격: 거절
        - 간격 >= 최소 간격: 허용
        """
        start_day, end_day = as_day(start), as_day(end)

        overlaps_high_season = self.range_overlaps_high_season(start_day, end_day)
        if not overlaps_high_season:
            return GapCheck(allowed=True)

        required_gap = self.required_gap_days()
        if required_gap is None:
            return GapCheck(allowed=True)

        days_before = gap_days(previous.end_date, start_day) if previous else None
        days_after = gap_days(end_day, following.start_date) if following else None

        logger.debug(
            "SEASON_POLICY: gap check start=%s end=%s before=%s after=%s required=%s",
            start_day, end_day, days_before, days_after, required_gap,
        )

        if (
            previous is not None
            and 0 < days_before < required_gap
            and (
                overlaps_high_season
                or self.range_overlaps_high_season(previous.start_date, previous.end_date)
            )
        ):
            return GapCheck(
                allowed=False,
                reason=gap_reason(required_gap, days_before, "before"),
                required_gap_days=required_gap,
                days_before=days_before,
                days_after=days_after,
            )

        if (
            following is not None
            and 0 < days_after < required_gap
            and (
                overlaps_high_season
                or self.range_overlaps_high_season(following.start_date, following.end_date)
            )
        ):
            return GapCheck(
                allowed=False,
                reason=gap_reason(required_gap, days_after, "after"),
                required_gap_days=required_gap,
                days_before=days_before,
                days_after=days_after,
            )

        return GapCheck(
            allowed=True,
            required_gap_days=required_gap,
            days_before=days_before,
            days_after=days_after,
        )

    def is_gap_between_bookings_allowed(
        self,
        start: DateLike,
        end: DateLike,
        existing: Sequence[StayPeriod],
    ) -> GapCheck:
        """확정 예약 목록에서 가장 가까운 앞/뒤 예약을 골라 check_gap"""
        start_day, end_day = as_day(start), as_day(end)
        previous, following = nearest_neighbours(start_day, end_day, existing)
        return self.check_gap(start_day, end_day, previous, following)

    # ─────────────────────────────────────────────────────────
    # 종합 판정
    # ─────────────────────────────────────────────────────────

    def validate_booking(
        self,
        start: DateLike,
        end: DateLike,
        existing: Sequence[StayPeriod] = (),
    ) -> BookingVerdict:
        """
        게스트 예약 검증 (관리자 예약은 호출하지 않는다)

        1. 숙박 기간 >= 최소 숙박일
        2. 예약 간격 규칙
        """
        start_day, end_day = ensure_date_range(start, end)

        duration_days = stay_length_days(start_day, end_day)
        required_minimum_stay = self.minimum_stay_for_range(start_day, end_day)

        if duration_days < required_minimum_stay:
            return BookingVerdict.reject(minimum_stay_reason(required_minimum_stay))

        gap_check = self.is_gap_between_bookings_allowed(start_day, end_day, existing)
        if not gap_check.allowed:
            return BookingVerdict.reject(gap_check.reason or "")

        return BookingVerdict.accept()


def nearest_neighbours(
    start: date,
    end: date,
    existing: Sequence[StayPeriod],
) -> tuple[Optional[StayPeriod], Optional[StayPeriod]]:
    """start 이전에 끝나는 가장 가까운 예약, end 이후에 시작하는 가장 가까운 예약"""
    before = [p for p in existing if p.end_date < start]
    after = [p for p in existing if p.start_date > end]
    previous = max(before, key=lambda p: p.end_date) if before else None
    following = min(after, key=lambda p: p.start_date) if after else None
    return previous, following
