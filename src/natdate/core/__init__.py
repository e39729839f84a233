"""Core modules for NatDate.

Configuration, logging, error handling and the picker that ties the date
processors together.
"""

from .config_manager import AppConfig, ConfigManager
from .error_handler import (
    NatDateError,
    ConfigurationError,
    PhraseRegistrationError,
    ErrorHandler,
    ErrorSeverity
)
from .logging_manager import LoggingManager
from .application import NaturalLanguageDateTimePicker

__all__ = [
    "NaturalLanguageDateTimePicker",
    "AppConfig",
    "ConfigManager",
    "NatDateError",
    "ConfigurationError",
    "PhraseRegistrationError",
    "ErrorHandler",
    "ErrorSeverity",
    "LoggingManager"
]
