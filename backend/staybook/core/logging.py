# backend/staybook/core/logging.py
"""
로깅 설정

모든 모듈은 logging.getLogger(__name__) 로 로거를 만들고,
앱 시작 시 한 번만 staybook 루트 로거에 콘솔 핸들러를 붙인다.
"""
from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "staybook"


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())

    # 콘솔 핸들러 추가 (서버 로그에 출력)
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level.upper())
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
