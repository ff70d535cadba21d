"""
Structured logging setup

- structlog on top of stdlib logging
- Level from SIGNAL_PATTERNS_LOG_LEVEL (default WARNING, linters stay quiet)
- Optional JSON rendering for CI log collection
"""

import logging
import os
from typing import Any

import structlog

# 전역 로거 캐시
_LOGGER_CACHE: dict[str, Any] = {}
_INITIALIZED = False


def get_log_level() -> str:
    """환경 변수 기반 로그 레벨"""
    return os.getenv("SIGNAL_PATTERNS_LOG_LEVEL", "WARNING").upper()


def configure_logging(
    level: str | None = None,
    json_format: bool = False,
) -> None:
    """
    구조화 로깅 설정.

    Args:
        level: 로그 레벨 (None이면 환경변수 사용)
        json_format: JSON 포맷 (분석용)
    """
    global _INITIALIZED

    if level is None:
        level = get_log_level()

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stdlib logging 설정 (stderr, so json output on stdout stays clean)
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level, logging.WARNING),
    )
    logging.getLogger("signal_patterns").setLevel(getattr(logging, level, logging.WARNING))

    _INITIALIZED = True


def get_logger(name: str):
    """
    로거 가져오기.

    첫 호출 시 자동으로 로깅 시스템 초기화.

    Args:
        name: 로거 이름 (보통 __name__)

    Returns:
        structlog BoundLogger
    """
    if not _INITIALIZED:
        configure_logging()

    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    logger = structlog.get_logger(name)
    _LOGGER_CACHE[name] = logger
    return logger


def reset_logging() -> None:
    """로깅 시스템 리셋 (테스트용)"""
    global _INITIALIZED
    _INITIALIZED = False
    _LOGGER_CACHE.clear()
    structlog.reset_defaults()
