# backend/staybook/core/clock.py
"""
현재 시각 추상화

캐시 만료 판정처럼 "지금"이 필요한 곳은 Clock 을 주입받는다.
테스트에서는 시간을 직접 움직이는 가짜 Clock 을 넣는다.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """실제 시스템 시각 (UTC)"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
