import os
from pathlib import Path

from dotenv import load_dotenv

# 프로젝트 루트 기준으로 .env 로드
BASE_DIR = Path(__file__).resolve().parents[3]
env_path = BASE_DIR / ".env"
load_dotenv(dotenv_path=env_path)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        # DB
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            "sqlite:///./staybook.db",
        )

        # 시즌 규칙 캐시 (0 = 매 요청마다 다시 조회)
        self.SEASON_RULE_CACHE_TTL_SECONDS: float = float(
            os.getenv("SEASON_RULE_CACHE_TTL_SECONDS", "0")
        )
        # 규칙 테이블이 비어 있을 때도 기본 규칙(성수기 7~9월)을 쓸지 여부
        self.SEASON_RULE_DEFAULTS_WHEN_EMPTY: bool = _env_bool(
            "SEASON_RULE_DEFAULTS_WHEN_EMPTY", False
        )

        # 앞/뒤 인접 예약 탐색 범위 (개월)
        self.ADJACENT_LOOKUP_MONTHS: int = int(os.getenv("ADJACENT_LOOKUP_MONTHS", "1"))

        # 로깅
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
