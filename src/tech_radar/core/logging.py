"""Structured logging configuration."""

import logging
import sys
import time
from typing import Any, Optional
from contextlib import contextmanager

import structlog
from structlog.stdlib import LoggerFactory

from .config import settings
from .base import utcnow


def configure_logging() -> None:
    """Configure structured logging for the application."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.environment == "production"
            else structlog.dev.ConsoleRenderer(colors=True),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_level == "DEBUG" else logging.WARNING
    )
    # The genai SDK logs every request at INFO through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)


def truncate_for_log(text: Optional[str], limit: Optional[int] = None) -> str:
    """Cut text to a bounded prefix so large payloads never reach the logs."""
    if text is None:
        return ""
    limit = settings.log_truncate_chars if limit is None else limit
    if len(text) <= limit:
        return text
    return text[:limit] + "...[truncated]"


class PerformanceLogger:
    """Logger for tracking performance metrics."""

    def __init__(self, logger_name: str = "performance"):
        self.logger = get_logger(logger_name)

    @contextmanager
    def log_operation_time(
        self,
        operation: str,
        **context: Any
    ):
        """Context manager to log operation execution time.

        Args:
            operation: Name of the operation being timed
            **context: Additional context for logging
        """
        start_time = time.monotonic()

        try:
            yield
        except Exception as e:
            self.logger.warning(
                "Operation failed",
                operation=operation,
                duration_seconds=round(time.monotonic() - start_time, 3),
                error=str(e),
                error_type=type(e).__name__,
                **context
            )
            raise

        self.logger.info(
            "Operation completed",
            operation=operation,
            duration_seconds=round(time.monotonic() - start_time, 3),
            **context
        )

    def log_processing_metrics(
        self,
        operation: str,
        items_processed: int,
        duration_seconds: float,
        success_count: int = None,
        error_count: int = None,
        **context: Any
    ):
        """Log processing metrics for batch operations."""
        throughput = items_processed / duration_seconds if duration_seconds > 0 else 0

        self.logger.info(
            "Processing metrics",
            operation=operation,
            items_processed=items_processed,
            duration_seconds=round(duration_seconds, 3),
            throughput_per_second=round(throughput, 2),
            success_count=success_count,
            error_count=error_count,
            **context
        )


class SystemLogger:
    """Logger for system-wide events."""

    def __init__(self, logger_name: str = "system"):
        self.logger = get_logger(logger_name)

    def log_system_startup(self, component: str, **context: Any):
        """Log system component startup."""
        self.logger.info(
            "System component started",
            component=component,
            timestamp=utcnow().isoformat(),
            **context
        )

    def log_system_shutdown(self, component: str, **context: Any):
        """Log system component shutdown."""
        self.logger.info(
            "System component shutdown",
            component=component,
            timestamp=utcnow().isoformat(),
            **context
        )

    def log_queue_metrics(
        self,
        queue_name: str,
        queue_length: int,
        **context: Any
    ):
        """Log queue metrics."""
        self.logger.info(
            "Queue metrics",
            queue_name=queue_name,
            queue_length=queue_length,
            **context
        )


# Global logger instances
performance_logger = PerformanceLogger()
system_logger = SystemLogger()
