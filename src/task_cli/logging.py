"""Structured logging configuration for task-cli.

Uses structlog for structured, context-rich logging that supports
both human-readable console output and machine-readable JSON format.
Log lines always go to stderr so they never mix with command output.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from task_cli.config import TaskCliSettings


def _stderr_logger_factory(*args: object) -> structlog.PrintLogger:
    # Resolved per logger so a replaced sys.stderr is picked up.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(settings: "TaskCliSettings | None" = None) -> None:
    """Configure structured logging based on settings.

    Args:
        settings: Application settings. If None, uses defaults.
    """
    log_level = logging.WARNING
    log_format = "console"

    if settings is not None:
        log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
        log_format = settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
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
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    # Not cached: the CLI may reconfigure after --file/env overrides are applied.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def ensure_default_logging() -> None:
    """Apply the default configuration unless logging is already configured.

    Keeps library use quiet (warnings and up, on stderr) when the caller
    never calls configure_logging.
    """
    if not structlog.is_configured():
        configure_logging()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log calls.

    Example:
        bind_context(tasks_file="tasks.json")
        logger.info("tasks_loaded")  # Will include tasks_file
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


class Loggers:
    """Pre-configured logger instances for task-cli components."""

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        """Logger for the command-line layer."""
        return get_logger("task_cli.cli")

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        """Logger for the task store."""
        return get_logger("task_cli.store")

    @staticmethod
    def operations() -> structlog.stdlib.BoundLogger:
        """Logger for task operations."""
        return get_logger("task_cli.operations")


ensure_default_logging()
