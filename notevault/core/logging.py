"""
Logging Setup.

structlog on top of the stdlib root logger. Levels, format and handlers
come from the validated logging section of the app config
(config/settings/logging.yaml); arguments to setup_logging() override it.

Every record carries timestamp, level, logger, func_name and lineno,
plus whatever RequestContextMiddleware has bound for the current request
(request_id, frontend, method, path).

Usage:
    from notevault.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": note.id})
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from notevault.core.config import find_project_root
from notevault.core.config_schema import LoggingSchema

VALID_SOURCES = frozenset({"web", "cli", "api", "events", "internal", "unknown"})


def _logging_settings() -> LoggingSchema:
    from notevault.core.config import get_app_config

    return get_app_config().logging


def _resolve_log_path(configured_path: str) -> Path:
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def setup_logging(level: str | None = None, format_type: str | None = None) -> None:
    """
    Configure structlog and the root logger's handlers.

    Args:
        level: Log level name; defaults to the configured level
        format_type: 'json' or 'console'; defaults to the configured format
    """
    settings = _logging_settings()
    processors = _shared_processors()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )
    if (format_type or settings.format) == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or settings.level).upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if settings.handlers.console.enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    file_settings = settings.handlers.file
    if file_settings.enabled:
        log_path = _resolve_log_path(file_settings.path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=file_settings.max_bytes,
            backupCount=file_settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger for the given name, typically __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit source, for code running outside a request.

    Sources outside VALID_SOURCES are recorded as "unknown".
    """
    if source not in VALID_SOURCES:
        source = "unknown"
    getattr(logger, level.lower())(message, source=source, **kwargs)
