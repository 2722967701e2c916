"""
Core Module

Foundational components used across the application: configuration,
exceptions, database connections, domain types and the test session
state machine.
"""

from .config import get_config, set_config, reload_config, AppConfig
from .exceptions import (
    QuizDrillException,
    ConfigurationError,
    StorageError,
    ValidationError,
    DocumentExtractionError,
    UnsupportedDocumentError,
)

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "AppConfig",
    "QuizDrillException",
    "ConfigurationError",
    "StorageError",
    "ValidationError",
    "DocumentExtractionError",
    "UnsupportedDocumentError",
]
