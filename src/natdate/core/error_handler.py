"""Global Error Handling for NatDate

Centralized error types and severity-aware error logging.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Type


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class NatDateError(Exception):
    """Base exception class for NatDate."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class ConfigurationError(NatDateError):
    """Error raised when configuration is invalid."""
    pass


class PhraseRegistrationError(NatDateError):
    """Error raised when a custom phrase handler cannot be registered."""
    pass


class ErrorHandler:
    """Routes errors to the log at a level matching their severity."""

    def __init__(self):
        """Initialize error handler."""
        self.logger = logging.getLogger(__name__)
        self.error_callbacks: Dict[Type[Exception], Callable] = {}

    def register_error_callback(self, exception_type: Type[Exception],
                              callback: Callable[[Exception], None]):
        """Register a callback for specific exception types.

        Args:
            exception_type: The exception type to handle
            callback: Function to call when this exception occurs
        """
        self.error_callbacks[exception_type] = callback

    def handle_error(self, error: Exception, context: Optional[str] = None) -> ErrorSeverity:
        """Log an error and notify any callback registered for its type.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Severity the error was handled at
        """
        severity = self._get_error_severity(error)
        error_message = self._format_error_message(error, context)

        self._log_error(error_message, severity)

        callback = self.error_callbacks.get(type(error))
        if callback is not None:
            callback(error)

        return severity

    def _get_error_severity(self, error: Exception) -> ErrorSeverity:
        """Determine error severity based on exception type.

        Args:
            error: The exception to analyze

        Returns:
            Appropriate severity level
        """
        if isinstance(error, NatDateError):
            return error.severity

        # Mapping standard exceptions to severity levels
        severity_map = {
            TypeError: ErrorSeverity.HIGH,
            ValueError: ErrorSeverity.MEDIUM,
            OverflowError: ErrorSeverity.MEDIUM,
            MemoryError: ErrorSeverity.CRITICAL,
            KeyboardInterrupt: ErrorSeverity.LOW,
        }

        return severity_map.get(type(error), ErrorSeverity.MEDIUM)

    def _format_error_message(self, error: Exception, context: Optional[str] = None) -> str:
        message = str(error)
        if context:
            message = f"{context}: {message}"

        return message

    def _log_error(self, message: str, severity: ErrorSeverity):
        """Log error with appropriate level.

        Args:
            message: Formatted error message
            severity: Error severity
        """
        log_methods = {
            ErrorSeverity.LOW: self.logger.info,
            ErrorSeverity.MEDIUM: self.logger.warning,
            ErrorSeverity.HIGH: self.logger.error,
            ErrorSeverity.CRITICAL: self.logger.critical,
        }

        log_method = log_methods[severity]
        log_method(message, exc_info=True)
