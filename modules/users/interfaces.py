"""
User store interface.

Route handlers and the token service depend on IUserRepository, never on a
concrete store. The Postgres repository serves production; the in-memory
repository serves tests and local development.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import User


@runtime_checkable
class IUserRepository(Protocol):
    """
    Interface for user persistence.

    Lookups return None when nothing matches. Writes raise
    UserNotFoundError or UserStoreError. Any method may raise
    UserStoreError when the backing store fails.
    """

    def list_users(self) -> list[User]:
        """Return every user ordered by last name, then first name."""
        ...

    def get_user(self, user_id: int) -> Optional[User]:
        """Return the user with the given id, or None."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Return the user with the given email, or None."""
        ...

    def update_user(self, user: User) -> None:
        """
        Update name and email of an existing user in one write.

        If user.password holds a hash it replaces the stored one; None
        leaves the stored hash alone.

        Raises:
            UserNotFoundError: If user.id does not exist
            UserStoreError: If the email collides with another user
        """
        ...

    def delete_user(self, user_id: int) -> None:
        """
        Delete a user.

        Raises:
            UserNotFoundError: If the id does not exist
        """
        ...

    def insert_user(self, user: User) -> int:
        """
        Insert a new user and return its id. user.id is ignored.

        Raises:
            UserStoreError: If the email is already taken
        """
        ...

    def reset_password(self, user_id: int, password_hash: str) -> None:
        """
        Replace the stored password hash.

        Raises:
            UserNotFoundError: If the id does not exist
        """
        ...
