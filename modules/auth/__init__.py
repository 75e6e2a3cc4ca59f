"""
Authentication module.

Handles JWT issuance, validation and refresh rotation, plus the refresh cookie.

Public API:
- ITokenService: Interface for token operations
- TokenService: Implementation
- TokenConfig, TokenPair, TokenClaims: models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import ITokenService
from .service import TokenService
from .models import TokenConfig, TokenPair, TokenClaims, AccessTokenResponse, LoginRequest
from .cookies import REFRESH_COOKIE_NAME
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    MalformedHeaderError,
    InvalidCredentialsError,
    RefreshTooEarlyError,
)

__all__ = [
    # Interface
    "ITokenService",
    "TokenService",
    # Models
    "TokenConfig",
    "TokenPair",
    "TokenClaims",
    "AccessTokenResponse",
    "LoginRequest",
    "REFRESH_COOKIE_NAME",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "MalformedHeaderError",
    "InvalidCredentialsError",
    "RefreshTooEarlyError",
]
