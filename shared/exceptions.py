"""
Base exception classes for the Userhub backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the API and the web front end.
"""

from typing import Optional, Any


class UserhubError(Exception):
    """
    Base exception for all Userhub errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(UserhubError):
    """Resource not found."""

    pass


class ValidationError(UserhubError):
    """Input validation failed."""

    pass


class AuthenticationError(UserhubError):
    """Authentication failed (invalid or missing credentials)."""

    pass
