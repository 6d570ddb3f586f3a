"""Structured logging for pf_forge.

Engine modules log rejected selections at debug level and catalog misses
at warning level; the character store logs writes at info level. All of
it goes through structlog, rendered as JSON when ``log_json`` is set and
as console output otherwise.

Example:
    >>> from pf_forge.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Skill rank added", skill_id="climb", ranks=1)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from pf_forge.core.constants import GAME_SYSTEM


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from pf_forge.core.config import Settings


STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application and rules system.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with ``app`` and ``game_system`` set.
    """
    event_dict["app"] = "pf_forge"
    event_dict.setdefault("game_system", GAME_SYSTEM)
    return event_dict


def _processors(json_format: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON instead of console output.
        log_file: Optional file that also receives standard library records.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # sqlite3 and pydantic-settings report through the standard library
    logging.basicConfig(format=STDLIB_FORMAT, level=log_level, stream=sys.stdout, force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(STDLIB_FORMAT))
        logging.getLogger().addHandler(file_handler)


def configure_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from application settings.

    Debug mode forces DEBUG level so rejected selections are visible.

    Args:
        settings: Settings to read. Defaults to get_settings().
    """
    if settings is None:
        from pf_forge.core.config import get_settings

        settings = get_settings()

    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.log_json,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values to every subsequent log entry until cleared.

    Example:
        >>> bind_context(character_id="char_1a2b3c")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def character_context(character_id: str, **kwargs: Any) -> Iterator[None]:
    """Bind a character id for the duration of a block.

    Values bound before the block are restored afterwards.

    Args:
        character_id: Id of the character being processed.
        **kwargs: Extra values to bind alongside it.
    """
    with structlog.contextvars.bound_contextvars(character_id=character_id, **kwargs):
        yield


__all__ = [
    "add_app_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "character_context",
]
