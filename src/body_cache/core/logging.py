"""
Structured logging configuration with request ID correlation.

Provides centralized structlog configuration and a thin logger wrapper that
attaches the current request ID to every event emitted while a request is
being processed.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

import structlog
from structlog.stdlib import LoggerFactory

# Context variables for request correlation
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class StructuredLogger:
    """Structured logger with request correlation support."""

    def __init__(self, name: str):
        self.logger = structlog.get_logger(name)

    def _get_context(self) -> Dict[str, Any]:
        """Get current request context for logging."""
        context = {}

        if request_id := request_id_var.get():
            context["request_id"] = request_id

        return context

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with context."""
        self.logger.debug(message, **self._get_context(), **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with context."""
        self.logger.info(message, **self._get_context(), **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with context."""
        self.logger.warning(message, **self._get_context(), **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with context."""
        self.logger.error(message, **self._get_context(), **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)


def set_request_context(request_id: Optional[str] = None) -> None:
    """Set request context for correlation."""
    if request_id:
        request_id_var.set(request_id)


def clear_request_context() -> None:
    """Clear request context."""
    request_id_var.set(None)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Configure structured logging for the application."""

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
