"""Structured logging configuration for the mass combat tracker.

structlog is the diagnostic channel: roster mutations, skipped records and
storage failures are emitted as key/value events. The operator-facing
combat console is a separate thing (mass_combat.engine.event_log).

Loggers are created lazily, so modules may call ``get_logger(__name__)`` at
import time and pick up whatever configuration is applied later.

Example:
    >>> from mass_combat.core.logging import configure_from_settings, get_logger
    >>> configure_from_settings()
    >>> get_logger(__name__).info("Roster spawned", combatants=12)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

from mass_combat.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


def app_context(app_name: str, app_version: str | None = None) -> Processor:
    """Build a processor that stamps every event with the application.

    Args:
        app_name: Value of the ``app`` key.
        app_version: Value of the ``version`` key; omitted when None.

    Returns:
        A structlog processor.
    """

    def add_app_context(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        if app_version is not None:
            event_dict.setdefault("version", app_version)
        return event_dict

    return add_app_context


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    app_name: str = "mass_combat",
    app_version: str | None = None,
) -> None:
    """Configure structlog for the whole process.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        json_format: Render one JSON object per line instead of the
            colored console format.
        app_name: Stamped on every event as ``app``.
        app_version: Stamped on every event as ``version``.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    processors: list[Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context(app_name, app_version),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: Settings | None = None) -> Settings:
    """Apply the logging section of the application settings.

    ``debug`` forces the DEBUG level regardless of ``log_level``.

    Args:
        settings: Settings to apply; defaults to the cached singleton.

    Returns:
        The settings that were applied.
    """
    settings = settings or get_settings()
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.json_logs,
        app_name=settings.app_name,
        app_version=settings.app_version,
    )
    return settings


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


__all__ = [
    "app_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
