"""
In-memory user repository.

Used by the test suite and by local development (USERHUB_USER_STORE=memory).
Behaves like PostgresUserRepository: same ordering, same exceptions,
unique emails, ids assigned on insert.
"""

import threading
from datetime import datetime, timezone
from typing import Iterable, Optional

from .exceptions import DuplicateEmailError, UserNotFoundError
from .models import User
from .passwords import hash_password


class InMemoryUserRepository:
    """Dict-backed IUserRepository. Returns copies so callers cannot mutate stored state."""

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User] = {}
        self._next_id = 1
        for user in users:
            if user.id:
                self._users[user.id] = user.model_copy()
                self._next_id = max(self._next_id, user.id + 1)
            else:
                self.insert_user(user)

    def list_users(self) -> list[User]:
        with self._lock:
            users = [u.model_copy() for u in self._users.values()]
        return sorted(users, key=lambda u: (u.last_name, u.first_name))

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user.model_copy()
        return None

    def update_user(self, user: User) -> None:
        with self._lock:
            existing = self._users.get(user.id)
            if existing is None:
                raise UserNotFoundError(user.id)
            self._check_email_free(user.email, exclude_id=user.id)
            changes = {
                "first_name": user.first_name,
                "last_name": user.last_name,
                "email": user.email,
                "updated_at": _now(),
            }
            if user.password is not None:
                changes["password"] = user.password
            self._users[user.id] = existing.model_copy(update=changes)

    def delete_user(self, user_id: int) -> None:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                raise UserNotFoundError(user_id)

    def insert_user(self, user: User) -> int:
        with self._lock:
            self._check_email_free(user.email)
            new_id = self._next_id
            self._next_id += 1
            now = _now()
            self._users[new_id] = user.model_copy(
                update={"id": new_id, "created_at": now, "updated_at": now}
            )
            return new_id

    def reset_password(self, user_id: int, password_hash: str) -> None:
        with self._lock:
            existing = self._users.get(user_id)
            if existing is None:
                raise UserNotFoundError(user_id)
            self._users[user_id] = existing.model_copy(
                update={"password": password_hash, "updated_at": _now()}
            )

    def _check_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        for user in self._users.values():
            if user.email == email and user.id != exclude_id:
                raise DuplicateEmailError(email)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def seeded_repository() -> InMemoryUserRepository:
    """A store holding the default admin account (admin@example.com / secret)."""
    return InMemoryUserRepository(
        [
            User(
                id=1,
                first_name="Admin",
                last_name="User",
                email="admin@example.com",
                password=hash_password("secret"),
                created_at=_now(),
                updated_at=_now(),
            )
        ]
    )
