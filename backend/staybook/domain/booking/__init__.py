# backend/staybook/domain/booking/__init__.py

from .types import (
    AvailabilityResult,
    BlockedPeriod,
    BookingVerdict,
    GapCheck,
    MonthRange,
    SeasonRule,
    StayPeriod,
    as_day,
    ensure_date_range,
)
from .errors import (
    BookingInputError,
    InvalidDateRangeError,
    InvalidCalendarMonthError,
    ReservationNotFoundError,
    SeasonRuleNotFoundError,
    ReservationConflictError,
)
from .defaults import DEFAULT_SEASON_RULES
from .season_policy import SeasonPolicy, gap_days, stay_length_days

__all__ = [
    # 값 타입
    "MonthRange",
    "SeasonRule",
    "StayPeriod",
    "BlockedPeriod",
    "as_day",
    "ensure_date_range",

    # 판정 결과
    "AvailabilityResult",
    "BookingVerdict",
    "GapCheck",

    # 예외
    "BookingInputError",
    "InvalidDateRangeError",
    "InvalidCalendarMonthError",
    "ReservationNotFoundError",
    "SeasonRuleNotFoundError",
    "ReservationConflictError",

    # 규칙
    "DEFAULT_SEASON_RULES",
    "SeasonPolicy",
    "gap_days",
    "stay_length_days",
]
