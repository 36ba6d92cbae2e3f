"""Structured logging configuration using structlog."""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import Processor


def configure_logging(json_logs: bool = True, level: int = logging.INFO) -> None:
    """Configure structlog for the application.

    Args:
        json_logs: If True, output JSON format. If False, use console format.
        level: Minimum log level.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # httpx/google 라이브러리 로그도 같은 stdout으로
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


def bind_run_context(pipeline: str, **extra: Any) -> str:
    """파이프라인 실행 단위 컨텍스트 바인딩.

    이후 같은 태스크에서 찍히는 모든 로그에 run_id/pipeline이 포함됩니다.

    Args:
        pipeline: 파이프라인 이름 (예: "relevancy", "digest").
        **extra: 추가로 바인딩할 컨텍스트.

    Returns:
        생성된 run_id.
    """
    run_id = f"run_{uuid.uuid4().hex[:12]}"
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(run_id=run_id, pipeline=pipeline, **extra)
    return run_id


def get_logger(
    name: str | None = None, **initial_context: Any
) -> structlog.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name.
        **initial_context: Initial context to bind to the logger.

    Returns:
        A bound structlog logger.
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
