"""
structlog 기반 로깅 설정

개발 환경은 콘솔, 프로덕션은 JSON으로 출력한다.
로그마다 request_id와 처리 중인 repository를 붙인다.
"""

import logging
import re
import sys

import structlog

from app.core.config import settings
from app.core.context import get_repository, get_request_id

# GitHub 토큰과 LLM API 키가 URL이나 예외 메시지에 섞여 나올 수 있음
SENSITIVE_PATTERNS = [
    (re.compile(r"\b(gh[pousr]_)[A-Za-z0-9]+"), r"\1***"),
    (re.compile(r"\b(github_pat_)[A-Za-z0-9_]+"), r"\1***"),
    (re.compile(r"(Bearer\s+)\S+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(api[_-]?key=)[^&\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"\b(sk-)[A-Za-z0-9_-]{8,}"), r"\1***"),
]

NOISY_LOGGERS = (
    "httpcore",
    "httpx",
    "openai",
    "langchain",
    "langfuse",
    "sqlalchemy.engine",
    "anyio",
)


def mask_secrets(value: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def add_context_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """contextvars의 request_id, repository 주입"""
    for key, value in (("request_id", get_request_id()), ("repository", get_repository())):
        if value:
            event_dict.setdefault(key, value)
    return event_dict


def mask_sensitive_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """프로덕션 로그의 문자열 값 마스킹"""
    if settings.is_production:
        for key, value in event_dict.items():
            if isinstance(value, str):
                event_dict[key] = mask_secrets(value)
    return event_dict


def _shared_processors() -> list:
    processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        # logger.info("... %s", value) 형식 지원
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_processor,
        mask_sensitive_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer():
    if settings.is_production:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(level: str | None = None) -> None:
    """structlog와 표준 logging을 같은 포맷으로 설정"""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn 로그도 루트 핸들러로 출력
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
