"""Structured logging for the rules engine.

Engine modules log through structlog with key-value events and never touch
the host's standard library logging setup. ``configure_logging`` is for
hosts and tools that want the engine's own rendering; without it, structlog
defaults apply.

Operations that act on one character or encounter run inside
``log_context`` so every event emitted underneath (dice draws, HP changes,
planner decisions) carries the same identifiers.

Example:
    >>> from mesa_engine.core.logging import get_logger, log_context
    >>> logger = get_logger(__name__)
    >>> with log_context(character_id="c-1"):
    ...     logger.info("Damage applied", amount=7)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from mesa_engine.core.config import get_settings


def engine_name_processor(name: str) -> Processor:
    """Build a processor stamping ``engine=<name>`` on every event."""

    def add_engine_name(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("engine", name)
        return event_dict

    return add_engine_name


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog for engine events.

    Args:
        level: Minimum level name. Defaults to ``Settings.log_level``.
        json_format: Render one JSON object per line. Defaults to ``Settings.log_json``.
        stream: Output stream; standard output when omitted.
    """
    settings = get_settings()
    level = settings.log_level if level is None else level
    json_format = settings.log_json if json_format is None else json_format

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        engine_name_processor(settings.app_name),
    ]
    if json_format:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind identifiers to every event logged inside the block.

    ``None`` values are skipped; previously bound values are restored on exit.
    """
    bound = {key: value for key, value in kwargs.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


__all__ = [
    "engine_name_processor",
    "configure_logging",
    "get_logger",
    "log_context",
]
