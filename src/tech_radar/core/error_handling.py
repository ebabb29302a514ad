"""Error hierarchy and centralized error classification."""

import asyncio
from typing import Any, Dict, Optional
from enum import Enum
from dataclasses import dataclass, asdict

from sqlalchemy.exc import SQLAlchemyError

from .base import utcnow
from .logging import get_logger

logger = get_logger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification and routing."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DATABASE = "database"
    EXTERNAL_SERVICE = "external_service"
    PARSING = "parsing"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for error handling and logging."""
    operation: str
    component: str
    job_id: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RadarError(Exception):
    """Base exception class for tech radar errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context
        self.original_error = original_error
        self.status_code = status_code
        self.timestamp = utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.to_dict() if self.context else None,
            "original_error": str(self.original_error) if self.original_error else None,
            "original_error_type": type(self.original_error).__name__ if self.original_error else None,
        }


class ValidationError(RadarError):
    """Error for invalid user input."""

    def __init__(self, message: str, field: str = None, **kwargs):
        super().__init__(
            message,
            ErrorCategory.VALIDATION,
            ErrorSeverity.LOW,
            **kwargs
        )
        self.field = field


class NotFoundError(RadarError):
    """Error for lookups of records that do not exist."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.NOT_FOUND,
            ErrorSeverity.LOW,
            **kwargs
        )


class DatabaseError(RadarError):
    """Error for database operations."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.DATABASE,
            ErrorSeverity.HIGH,
            **kwargs
        )


class ExternalServiceError(RadarError):
    """Error for AI collaborator failures."""

    def __init__(self, message: str, service_name: str = None, **kwargs):
        super().__init__(
            message,
            ErrorCategory.EXTERNAL_SERVICE,
            ErrorSeverity.MEDIUM,
            **kwargs
        )
        self.service_name = service_name


class ParsingError(RadarError):
    """Error for documents or model output that cannot be parsed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.PARSING,
            ErrorSeverity.MEDIUM,
            **kwargs
        )


class ConfigurationError(RadarError):
    """Error for configuration issues."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL,
            **kwargs
        )


class ErrorHandler:
    """Centralized error handling with logging."""

    def __init__(self):
        self.logger = get_logger("error_handler")

    def handle_error(
        self,
        error: Exception,
        context: Optional[ErrorContext] = None
    ) -> RadarError:
        """Classify an error and log it at a level matching its severity.

        Args:
            error: The original exception
            context: Error context information

        Returns:
            Classified radar error
        """
        if isinstance(error, RadarError):
            radar_error = error
            if context is not None and radar_error.context is None:
                radar_error.context = context
        else:
            radar_error = self._classify_error(error, context)

        self._log_error(radar_error)
        return radar_error

    def _classify_error(self, error: Exception, context: Optional[ErrorContext]) -> RadarError:
        """Classify generic exceptions into radar errors."""
        error_message = str(error) or type(error).__name__

        if isinstance(error, SQLAlchemyError):
            return DatabaseError(
                f"Database operation failed: {error_message}",
                context=context,
                original_error=error
            )

        if isinstance(error, (asyncio.TimeoutError, ConnectionError, OSError)):
            return ExternalServiceError(
                f"Network operation failed: {error_message}",
                context=context,
                original_error=error
            )

        if isinstance(error, (ValueError, TypeError)):
            return ValidationError(
                f"Validation failed: {error_message}",
                context=context,
                original_error=error
            )

        return RadarError(
            f"Unexpected error: {error_message}",
            ErrorCategory.SYSTEM,
            ErrorSeverity.MEDIUM,
            context=context,
            original_error=error
        )

    def _log_error(self, error: RadarError):
        """Log error with appropriate level and context."""
        log_data = error.to_dict()
        message = log_data.pop("message")

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical("Critical error occurred", error=message, **log_data)
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error("High severity error occurred", error=message, **log_data)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning("Medium severity error occurred", error=message, **log_data)
        else:
            self.logger.info("Low severity error occurred", error=message, **log_data)


HTTP_STATUS_BY_CATEGORY = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.PARSING: 400,
    ErrorCategory.DATABASE: 500,
    ErrorCategory.EXTERNAL_SERVICE: 502,
    ErrorCategory.CONFIGURATION: 500,
    ErrorCategory.SYSTEM: 500,
}


def http_status_for(error: RadarError) -> int:
    """HTTP status code used when a radar error reaches the API boundary."""
    if error.status_code is not None:
        return error.status_code
    return HTTP_STATUS_BY_CATEGORY.get(error.category, 500)


error_handler = ErrorHandler()
