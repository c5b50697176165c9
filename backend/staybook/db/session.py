# backend/staybook/db/session.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from staybook.core.config import settings
from staybook.db.base import Base


def _connect_args(url: str) -> dict:
    # SQLite 는 FastAPI 스레드풀에서 같은 커넥션을 공유할 수 있게 해야 함
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    future=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def init_db(bind=None) -> None:
    """
    애플리케이션 시작 시 한 번 호출해서 테이블 생성.
    모든 도메인 모델을 메타데이터에 등록한 뒤 create_all 을 수행한다.
    """
    # ✅ 모든 도메인 모델을 한 번에 import
    import staybook.domain.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
