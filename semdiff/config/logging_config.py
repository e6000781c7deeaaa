"""
Structured logging configuration using structlog.

The engine is a library: it logs through ``structlog.get_logger(__name__)``
and never configures logging on import. A host application may call
``configure_logging`` once to route the engine's events through its own
handler on the ``semdiff`` logger. The root logger and its handlers are
never touched.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from semdiff.config.settings import Settings, get_settings

ENGINE_LOGGER = "semdiff"

# Marks the handler installed here so reconfiguring replaces only our own
_HANDLER_NAME = "semdiff-structlog"


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    logger_name: str = ENGINE_LOGGER,
) -> logging.Logger:
    """
    Configure structlog and attach a JSON or console handler to ``logger_name``.

    The handler and level go on the engine logger, which stops propagating
    so events are not emitted twice. Handlers installed by the host on that
    logger, or anywhere else, are left in place.

    Returns:
        The configured stdlib logger.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    engine_logger = logging.getLogger(logger_name)
    for existing in list(engine_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            engine_logger.removeHandler(existing)
    engine_logger.addHandler(handler)
    engine_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    engine_logger.propagate = False
    return engine_logger


def configure_from_settings(settings: Settings | None = None) -> logging.Logger:
    """Configure engine logging from the engine settings (cached settings by default)."""
    settings = settings or get_settings()
    return configure_logging(log_level=settings.log_level.value, json_logs=settings.log_json)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)
