"""Structured logging configuration using structlog.

Provides correlation IDs for tracing edits back to a project, slide and
gesture, and configurable output formats (JSON for production, colored
console for dev).
"""

import logging
import sys
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.types import Processor

from deckforge.config import settings

# Context variables for correlation IDs
_project_id: ContextVar[str | None] = ContextVar("project_id", default=None)
_slide_id: ContextVar[str | None] = ContextVar("slide_id", default=None)
_gesture_id: ContextVar[int | None] = ContextVar("gesture_id", default=None)


def set_correlation_context(
    project_id: str | None = None,
    slide_id: str | None = None,
    gesture_id: int | None = None,
) -> None:
    """Set correlation IDs for the current context.

    Args:
        project_id: Identifier of the open project.
        slide_id: Slide currently being edited.
        gesture_id: Sequence number of the active pointer gesture.
    """
    if project_id is not None:
        _project_id.set(project_id)
    if slide_id is not None:
        _slide_id.set(slide_id)
    if gesture_id is not None:
        _gesture_id.set(gesture_id)


def clear_correlation_context() -> None:
    """Clear all correlation context variables."""
    _project_id.set(None)
    _slide_id.set(None)
    _gesture_id.set(None)


def clear_project_context() -> None:
    """Forget the open project, e.g. after starting a new one."""
    _project_id.set(None)


def clear_gesture_context() -> None:
    """Forget the slide and gesture of a finished pointer gesture."""
    _slide_id.set(None)
    _gesture_id.set(None)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add correlation IDs to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    project_id = _project_id.get()
    slide_id = _slide_id.get()
    gesture_id = _gesture_id.get()

    if project_id is not None:
        event_dict["project_id"] = project_id
    if slide_id is not None:
        event_dict["slide_id"] = slide_id
    if gesture_id is not None:
        event_dict["gesture_id"] = gesture_id

    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog with the specified settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_correlation_ids,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
