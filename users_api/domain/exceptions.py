"""
Domain exceptions and error hierarchy.
"""

from typing import Optional, Dict, Any


class UsersApiError(Exception):
    """Base exception for users API errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(UsersApiError):
    """Configuration related errors."""
    pass


class DataAccessError(UsersApiError):
    """Persistence layer errors."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.operation = operation
