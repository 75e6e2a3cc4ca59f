"""
Users module exceptions.
"""

from typing import Optional

from shared.exceptions import NotFoundError, UserhubError


class UserStoreError(UserhubError):
    """Raised when the store rejects a write (constraint violation, bad data)."""

    def __init__(self, message: str, user_id: Optional[int] = None):
        details = {"user_id": user_id} if user_id is not None else {}
        super().__init__(message, code="USER_STORE_ERROR", details=details)


class UserNotFoundError(NotFoundError):
    """Raised when no user matches the given id."""

    def __init__(self, user_id: int | str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class DuplicateEmailError(UserStoreError):
    """Raised when an insert or update would give two users the same email."""

    def __init__(self, email: str):
        super().__init__(f"Email already in use: {email}")
        self.code = "DUPLICATE_EMAIL"
        self.details = {"email": email}
