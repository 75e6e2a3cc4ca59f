"""
Shared infrastructure for the Userhub backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: PostgreSQL connection pool factory
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_connection_pool, pooled_connection, close_connection_pool
from .exceptions import (
    UserhubError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_connection_pool",
    "pooled_connection",
    "close_connection_pool",
    "UserhubError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthenticatedUser",
]
