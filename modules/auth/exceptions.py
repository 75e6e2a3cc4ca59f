"""
Authentication module exceptions.

These exceptions are raised by the token service and mapped to HTTP
responses by the auth routes and the bearer-token dependency.
"""

from shared.exceptions import AuthenticationError, ValidationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT is malformed, badly signed or carries the wrong claims."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT has a valid signature but is past its expiry."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class MalformedHeaderError(AuthenticationError):
    """Raised when the Authorization header is not of the form 'Bearer <token>'."""

    def __init__(self, message: str = "Invalid authorization header"):
        super().__init__(message, code="MALFORMED_HEADER")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised for any failed login.

    Unknown email and wrong password share this error so that callers
    cannot probe which emails are registered.
    """

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class RefreshTooEarlyError(ValidationError):
    """Raised when a refresh token is rotated before it has aged past the grace threshold."""

    def __init__(self, remaining_seconds: int):
        super().__init__(
            "Refresh token does not need renewal yet",
            code="REFRESH_TOO_EARLY",
            details={"remaining_seconds": remaining_seconds},
        )
