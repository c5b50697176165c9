"""
Season Rule Cache

활성 시즌 규칙을 프로세스 단위로 캐시한다.
- TTL 은 설정값 (0 이면 매번 다시 조회)
- 규칙 생성/수정/삭제 후 invalidate() 로 다음 조회를 강제
- 저장소 조회 실패 시: 직전 규칙이 있으면 그대로, 없으면 기본 규칙으로 대체

저장소 실패는 예외가 아니라 RuleFetchResult 로 전달받는다.
어떤 실패를 "저장소 실패"로 볼지는 저장소 구현이 정한다.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from staybook.core.clock import Clock, SystemClock
from staybook.domain.booking.defaults import DEFAULT_SEASON_RULES
from staybook.domain.booking.types import SeasonRule
from staybook.repositories.season_rule_repository import SeasonRuleRepository

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# 저장소 조회 결과
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RuleFetchResult:
    rules: tuple[SeasonRule, ...] = field(default_factory=tuple)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, rules) -> "RuleFetchResult":
        return cls(rules=tuple(rules))

    @classmethod
    def failure(cls, error: Exception) -> "RuleFetchResult":
        return cls(error=error)


class SeasonRuleStore(Protocol):
    def fetch_active(self) -> RuleFetchResult:
        ...


class SqlSeasonRuleStore:
    """
    DB 기반 규칙 저장소

    요청 세션과 별개로 매 조회마다 짧은 세션을 연다.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def fetch_active(self) -> RuleFetchResult:
        try:
            with self._session_factory() as db:
                rules = SeasonRuleRepository(db).find_active()
        except SQLAlchemyError as exc:
            return RuleFetchResult.failure(exc)
        return RuleFetchResult.success(rules)


# ─────────────────────────────────────────────────────────────
# 캐시
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class _CacheEntry:
    rules: tuple[SeasonRule, ...]
    fetched_at: datetime
    from_defaults: bool = False


class SeasonRuleCache:
    """
    활성 시즌 규칙 캐시

    엔트리는 한 번의 대입으로 통째로 교체되므로 동시에 읽는 요청이
    반쯤 바뀐 목록을 보는 일은 없다. 만료 직후 두 요청이 동시에
    다시 조회할 수는 있지만 결과는 같다.
    """

    def __init__(
        self,
        store: SeasonRuleStore,
        *,
        ttl_seconds: float = 0.0,
        clock: Optional[Clock] = None,
        defaults_when_empty: bool = False,
    ):
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._clock = clock or SystemClock()
        self._defaults_when_empty = defaults_when_empty
        self._entry: Optional[_CacheEntry] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @property
    def last_fetched_at(self) -> Optional[datetime]:
        return self._entry.fetched_at if self._entry else None

    @property
    def using_defaults(self) -> bool:
        return bool(self._entry and self._entry.from_defaults)

    def _is_fresh(self, entry: Optional[_CacheEntry], now: datetime) -> bool:
        if entry is None:
            return False
        return (now - entry.fetched_at).total_seconds() < self._ttl_seconds

    def get(self) -> list[SeasonRule]:
        now = self._clock.now()
        entry = self._entry
        if self._is_fresh(entry, now):
            return list(entry.rules)

        result = self._store.fetch_active()

        if result.ok:
            if not result.rules and self._defaults_when_empty:
                logger.info("SEASON_RULES: no active rules stored, using default rules")
                self._entry = _CacheEntry(DEFAULT_SEASON_RULES, now, from_defaults=True)
            else:
                self._entry = _CacheEntry(result.rules, now)
            return list(self._entry.rules)

        if entry is not None and not entry.from_defaults:
            # 직전에 받은 규칙이 있으면 만료됐어도 그걸 쓴다
            logger.warning(
                "SEASON_RULES: rule store unavailable (%s), reusing %d cached rules",
                result.error, len(entry.rules),
            )
            return list(entry.rules)

        logger.warning(
            "SEASON_RULES: rule store unavailable (%s), falling back to default rules",
            result.error,
        )
        self._entry = _CacheEntry(DEFAULT_SEASON_RULES, now, from_defaults=True)
        return list(DEFAULT_SEASON_RULES)

    def invalidate(self) -> None:
        """규칙 변경 후 호출. 다음 get() 은 반드시 저장소를 다시 조회한다"""
        logger.info("SEASON_RULES: cache invalidated")
        self._entry = None

    def refresh(self) -> list[SeasonRule]:
        self.invalidate()
        return self.get()
