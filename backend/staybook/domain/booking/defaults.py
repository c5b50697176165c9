"""
기본 시즌 규칙

규칙 저장소에 접근할 수 없을 때 사용하는 하드코딩 규칙 쌍.
- 성수기: 7~9월, 최소 7박, 예약 간 최소 7일 간격 (연속 예약은 허용)
- 비수기: 최소 1박, 간격 제한 없음
"""
from __future__ import annotations

from .types import MonthRange, SeasonRule

HIGH_SEASON_DEFAULT = SeasonRule(
    id="high-season-default",
    name="High season (default)",
    active=True,
    is_high_season=True,
    months=MonthRange(7, 9),
    minimum_stay_days=7,
    enforce_gap_between_bookings=True,
    minimum_gap_days=7,
)

LOW_SEASON_DEFAULT = SeasonRule(
    id="low-season-default",
    name="Low season (default)",
    active=True,
    is_high_season=False,
    months=None,
    minimum_stay_days=1,
    enforce_gap_between_bookings=False,
    minimum_gap_days=None,
)

DEFAULT_SEASON_RULES: tuple[SeasonRule, ...] = (HIGH_SEASON_DEFAULT, LOW_SEASON_DEFAULT)
