# backend/staybook/scripts/init_db.py
"""
DB 테이블 생성 + 기본 시즌 규칙 심기

사용법:
    python -m staybook.scripts.init_db
    python -m staybook.scripts.init_db --no-seed
"""
import argparse
import logging

from staybook.core.config import settings
from staybook.core.logging import configure_logging
from staybook.db.session import SessionLocal, init_db
from staybook.services.season_rule_cache import SeasonRuleCache, SqlSeasonRuleStore
from staybook.services.season_rule_service import SeasonRuleService

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create tables and seed default booking rules")
    parser.add_argument("--no-seed", action="store_true", help="테이블만 생성")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)

    init_db()
    logger.info("DB 테이블 생성 완료: %s", settings.DATABASE_URL)

    if args.no_seed:
        return

    cache = SeasonRuleCache(SqlSeasonRuleStore(SessionLocal))
    with SessionLocal() as db:
        created = SeasonRuleService(db, cache).seed_defaults()
    logger.info("기본 시즌 규칙 %d개 저장", created)


if __name__ == "__main__":
    main()
