# /assist/utils/logging.py

import logging
import sys
from typing import Optional
import structlog
from assist.config.settings import settings

# Structured logging for the assistant. Stdlib loggers from
# `logging.getLogger(__name__)` are rendered by structlog, and anything bound
# with `structlog.contextvars` (the session id) is merged into every record.

SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _is_assist_handler(handler: logging.Handler) -> bool:
    return isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)


def setup_logging(level: Optional[str] = None) -> logging.Handler:
    """
    Install the structlog handler on the root logger and return it.

    Safe to call more than once: an earlier handler installed here is replaced,
    so sessions that each opt in do not duplicate output.

    Args:
        level: Log level name; defaults to ASSIST_LOG_LEVEL
    """
    if settings.environment == "development":
        final_processor = structlog.dev.ConsoleRenderer()
    else:
        final_processor = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=SHARED_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=final_processor,
        foreign_pre_chain=SHARED_PROCESSORS,
    ))

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if _is_assist_handler(h)]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    level_name = (level or settings.log_level).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    return handler
