from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from staybook.db.base import Base
from staybook.db.session import init_db
from staybook.services.season_rule_cache import SeasonRuleCache, SqlSeasonRuleStore


class FakeClock:
    """테스트에서 시간을 직접 움직이는 Clock"""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def now(self):
        return self.current

    def advance(self, seconds):
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'staybook-test.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rule_cache(session_factory, clock):
    return SeasonRuleCache(SqlSeasonRuleStore(session_factory), ttl_seconds=0, clock=clock)
