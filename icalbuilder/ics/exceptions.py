"""iCalendar builder exceptions for error handling."""

from typing import Optional


class ICalError(Exception):
    """Base exception for iCalendar builder errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ICalValidationError(ICalError, ValueError):
    """Exception raised when an accessor rejects a value."""


class ICalRenderError(ICalError):
    """Exception raised when an entity cannot be serialized."""


class ICalSnapshotError(ICalError):
    """Exception raised when a JSON snapshot cannot be loaded."""


class MissingParentError(ICalError, TypeError):
    """Exception raised when a child entity is created without its parent."""
