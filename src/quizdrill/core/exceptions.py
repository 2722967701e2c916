"""
Custom Exception Classes

Application-specific exception classes for error handling across the
quiz engine, storage layer, document extraction and CLI.
"""

from typing import Optional, Any, Dict


class QuizDrillException(Exception):
    """Base exception class for all quizdrill errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(QuizDrillException):
    """Raised when there's an issue with configuration setup or validation."""
    pass


class StorageError(QuizDrillException):
    """Raised when the key-value store cannot be reached."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 key: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.operation = operation
        self.key = key


class ValidationError(QuizDrillException):
    """Raised when a stored record does not have the expected shape."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Optional[Any] = None, **kwargs):
        super().__init__(message, kwargs)
        self.field_name = field_name
        self.invalid_value = invalid_value


class DocumentExtractionError(QuizDrillException):
    """Raised when text cannot be extracted from an uploaded document."""

    def __init__(self, message: str, file_name: Optional[str] = None,
                 file_type: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.file_name = file_name
        self.file_type = file_type


class UnsupportedDocumentError(DocumentExtractionError):
    """Raised when the document type is neither PDF nor DOCX."""
    pass
