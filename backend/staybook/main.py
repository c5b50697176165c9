from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staybook.api.v1.api import api_router
from staybook.core.config import settings
from staybook.core.logging import configure_logging
from staybook.db.session import SessionLocal, init_db
from staybook.services.season_rule_cache import SeasonRuleCache, SqlSeasonRuleStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI Lifespan - 앱 시작/종료 시 실행
    """
    # Startup: DB 테이블 생성 후 규칙 캐시 미리 채우기
    init_db()
    app.state.rule_cache.get()
    yield


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Staybook Backend",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 프로세스 단위 규칙 캐시 (규칙 변경 API 가 invalidate)
    app.state.rule_cache = SeasonRuleCache(
        SqlSeasonRuleStore(SessionLocal),
        ttl_seconds=settings.SEASON_RULE_CACHE_TTL_SECONDS,
        defaults_when_empty=settings.SEASON_RULE_DEFAULTS_WHEN_EMPTY,
    )

    # v1 REST API
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
