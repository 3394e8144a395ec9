"""Structured logging for the battle engine.

Every module logs through ``get_logger(__name__)`` with keyword events:

    >>> logger = get_logger(__name__)
    >>> logger.info("Encounter started", enemy="Slime", enemy_hp=30)

``configure_logging`` picks the renderer, level and app tag, by default
from ``Settings.log_level``, ``Settings.json_logs``, ``Settings.debug``
and ``Settings.app_name``. Campaign runs bind their id with
``bind_context`` so every encounter line carries it.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from jobquest.core.config import Settings


def add_app_context(app_name: str) -> Processor:
    """Build a processor that tags every event with the application name."""

    def processor(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def _resolve_level(level: str | None, settings: Settings) -> int:
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    stream: IO[str] | None = None,
    app_name: str | None = None,
) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name; defaults to DEBUG when ``Settings.debug``
            is set and to ``Settings.log_level`` otherwise.
        json_format: One JSON object per line instead of console output;
            defaults to ``Settings.json_logs``.
        stream: Where lines are written; defaults to stdout.
        app_name: Value of the ``app`` key; defaults to ``Settings.app_name``.
    """
    from jobquest.core.config import get_settings

    settings = get_settings()
    if json_format is None:
        json_format = settings.json_logs
    if app_name is None:
        app_name = settings.app_name

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context(app_name),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level, settings)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Loggers must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key-value pairs to every subsequent event in this context.

    Example:
        >>> bind_context(campaign_id="3f2a")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with ``bind_context``."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
