"""
Booking Rule 도메인 타입

규칙 엔진이 주고받는 순수 데이터.
- ORM 모델이 아니라 frozen dataclass 로만 구성
- 레포지토리가 DB row 를 이 타입으로 변환해서 넘긴다
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]


def as_day(value: DateLike) -> date:
    """datetime 이면 시각을 버리고 날짜(자정 기준)만 남긴다"""
    if isinstance(value, datetime):
        return value.date()
    return value


# ─────────────────────────────────────────────────────────────
# 월 범위 (연말을 넘어가는 범위 지원)
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MonthRange:
    """
    시작 월 ~ 종료 월 (양끝 포함)

    start > end 이면 12월 → 1월로 넘어가는 범위다.
    예: MonthRange(11, 2) 는 11, 12, 1, 2월.
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        for value in (self.start, self.end):
            if not 1 <= value <= 12:
                raise ValueError(f"month must be within 1..12, got {value}")

    @property
    def wraps_year(self) -> bool:
        return self.start > self.end

    def contains(self, month: int) -> bool:
        if self.wraps_year:
            return month >= self.start or month <= self.end
        return self.start <= month <= self.end

    def months(self) -> list[int]:
        return [m for m in range(1, 13) if self.contains(m)]


@dataclass(frozen=True)
class SeasonRule:
    """시즌 규칙 (성수기/비수기 최소 숙박일, 예약 간격)"""
    id: str
    name: str
    active: bool = True
    is_high_season: bool = False
    months: Optional[MonthRange] = None
    minimum_stay_days: int = 1
    enforce_gap_between_bookings: bool = False
    minimum_gap_days: Optional[int] = None

    def covers(self, day: DateLike) -> bool:
        """성수기 규칙이고 월 범위가 있을 때만 매칭"""
        if not (self.active and self.is_high_season and self.months is not None):
            return False
        return self.months.contains(as_day(day).month)

    @property
    def enforces_gap(self) -> bool:
        return (
            self.active
            and self.is_high_season
            and self.enforce_gap_between_bookings
            and self.minimum_gap_days is not None
        )


@dataclass(frozen=True)
class StayPeriod:
    """확정 예약 (엔진이 보는 최소 정보)"""
    id: str
    start_date: date
    end_date: date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        # 양끝 포함 구간 겹침
        return self.start_date <= end and self.end_date >= start


@dataclass(frozen=True)
class BlockedPeriod(StayPeriod):
    """관리자가 막아둔 기간"""
    reason: Optional[str] = None


# ─────────────────────────────────────────────────────────────
# 판정 결과
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GapCheck:
    """예약 간격 규칙 판정 결과"""
    allowed: bool
    reason: Optional[str] = None
    required_gap_days: Optional[int] = None
    days_before: Optional[int] = None
    days_after: Optional[int] = None


@dataclass(frozen=True)
class BookingVerdict:
    """최소 숙박 + 간격 규칙 종합 판정"""
    valid: bool
    reason: Optional[str] = None

    @classmethod
    def accept(cls) -> "BookingVerdict":
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: str) -> "BookingVerdict":
        return cls(valid=False, reason=reason)


@dataclass(frozen=True)
class AvailabilityResult:
    """날짜 겹침 + (게스트 예약이면) 간격 규칙 판정"""
    available: bool
    reason: Optional[str] = None
    conflicts: tuple[StayPeriod, ...] = field(default_factory=tuple)


def ensure_date_range(start: DateLike, end: DateLike) -> tuple[date, date]:
    """날짜로 정규화하고 end > start 를 보장한다"""
    from .errors import InvalidDateRangeError

    start_day, end_day = as_day(start), as_day(end)
    if end_day <= start_day:
        raise InvalidDateRangeError(start_day, end_day)
    return start_day, end_day
