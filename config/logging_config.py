"""
Structured logging setup using structlog.
JSON output for production, coloured console output for development.

Events are rendered by structlog and handed to the standard library
logger of the same name, so uvicorn, httpx and storefront events share
the same handlers (stdout and, optionally, logs/storefront.log).
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from structlog.typing import Processor

LOG_FILE_NAME = "storefront.log"


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    json_format: bool = False,
    component: Optional[str] = None,
) -> structlog.BoundLogger:
    """
    Configures the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_path: Directory for storefront.log
        json_format: If True, renders JSON lines (production)
        component: Component name bound to every event (api, cli)

    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    root.setLevel(numeric_level)

    if log_path:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        root.addHandler(file_handler)

    logger = structlog.get_logger("storefront")
    if component:
        logger = logger.bind(component=component)

    return logger


def request_context(**values):
    """
    Binds request fields (method, path) to every event logged inside
    the block; the previous context is restored on exit.
    """
    return structlog.contextvars.bound_contextvars(**values)


def get_logger(name: str = "storefront", **context) -> structlog.BoundLogger:
    """
    Returns a logger with bound context.

    Args:
        name: Logger name
        **context: Extra key/value pairs to bind
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


class LoggerMixin:
    """Mixin that gives a class its own named logger."""

    @property
    def logger(self) -> structlog.BoundLogger:
        """Logger named after the concrete class."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_operation(
        self,
        operation: str,
        **kwargs,
    ) -> structlog.BoundLogger:
        """Returns a logger with the operation name bound."""
        return self.logger.bind(operation=operation, **kwargs)
