"""structlog configuration.

Both structlog loggers and stdlib loggers (uvicorn, sqlalchemy, passlib) end
up in one handler so every line goes through the same redaction step.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from tresor.core.config import Settings, get_settings
from tresor.infrastructure.logging_processors import (
    add_service_context,
    add_request_context,
    sanitize_sensitive_data,
    format_exception_info,
    set_log_severity,
)

# Loggers that get our handler instead of their own
SERVER_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

# Chatty libraries capped at WARNING; passlib reports bcrypt backend probing
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "passlib")


def build_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_service_context,
        add_request_context,
        structlog.processors.add_log_level,
        set_log_severity,
        format_exception_info,
        structlog.processors.TimeStamper(fmt="iso"),
        # Must run after everything that can add fields
        sanitize_sensitive_data,
    ]


def build_renderer(settings: Settings) -> Processor:
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    processors = build_processors()
    level = getattr(logging, settings.log_level)
    
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            build_renderer(settings),
        ],
    ))
    
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
    
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.setLevel(level)
        server_logger.propagate = False
    
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)
