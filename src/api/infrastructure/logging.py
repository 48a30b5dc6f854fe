"""Structured logging utilities with context management."""

import contextvars
import sys
from typing import Any

from loguru import logger

from src.config import LoggingConfig

# Context variables for maintaining request/workflow context
workflow_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("workflow_context", default={})

# Keys referenced by the log format; filled with "-" when unset
_FORMAT_KEYS = ("operation", "rule_id")


class LoggingContext:
    """
    Context manager for structured logging with automatic context injection.

    Example:
        with LoggingContext(operation="update", rule_id=7):
            logger.info("Updating rule")  # Will include operation and rule_id
    """

    def __init__(self, **context_data):
        """
        Initialize logging context.

        Args:
            **context_data: Key-value pairs to add to logging context
        """
        self.context_data = context_data
        self.token = None

    def __enter__(self):
        """Enter context and set context variables."""
        current = workflow_context.get().copy()
        current.update(self.context_data)
        self.token = workflow_context.set(current)
        return self

    def update(self, **context_data) -> None:
        """Add keys to the active context, e.g. an ID assigned mid-workflow."""
        current = workflow_context.get().copy()
        current.update(context_data)
        workflow_context.set(current)

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context and restore previous context."""
        if self.token:
            workflow_context.reset(self.token)


def get_logging_context() -> dict[str, Any]:
    """
    Get current logging context.

    Returns:
        Dictionary of current context variables
    """
    return workflow_context.get().copy()


def _context_filter(record) -> bool:
    """Add context variables to log record."""
    for key in _FORMAT_KEYS:
        record["extra"].setdefault(key, "-")
    for key, value in workflow_context.get().items():
        record["extra"][key] = "-" if value is None else value
    return True


def configure_structured_logging(config: LoggingConfig | None = None):
    """
    Configure loguru to include context variables in all log messages.

    This should be called once at application startup.
    """
    config = config or LoggingConfig()

    logger.remove()

    logger.add(
        sink=sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[operation]}</cyan>:<cyan>{extra[rule_id]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        filter=_context_filter,
        level=config.level.upper(),
        colorize=True,
    )

    if config.file:
        logger.add(
            sink=config.file,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra} | {name}:{function}:{line} | {message}",
            filter=_context_filter,
            level="INFO",
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            serialize=False,
        )
