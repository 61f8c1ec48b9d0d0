"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class TrackerError(Exception):
    """Base exception for all tracker errors."""
    pass

class RecordValidationError(TrackerError, ValueError):
    """Raised when user input for a new record is rejected."""
    pass

class InvalidDateError(RecordValidationError):
    """Raised when a date value cannot be parsed."""
    pass

class InvalidDateRangeError(RecordValidationError):
    """Raised when a period ends before it starts."""
    pass

class StorageError(TrackerError):
    """Raised when records cannot be written to the blob store."""
    pass

class AdviceServiceError(TrackerError):
    """Raised when the advice service fails or returns nothing."""
    pass
