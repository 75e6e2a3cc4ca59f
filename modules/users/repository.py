"""
User repository for PostgreSQL.

Encapsulates all SQL for the users table (see migrations/001_create_users.sql)
and maps rows to User models. Driver errors never escape: they are raised as
UserStoreError (or DuplicateEmailError for a taken email).
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import psycopg2
from psycopg2 import errorcodes

from shared.repository import BaseRepository
from .exceptions import DuplicateEmailError, UserNotFoundError, UserStoreError
from .models import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = (
    "id, first_name, last_name, email, password, last_login, created_at, updated_at"
)


class PostgresUserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    All methods return Pydantic models with proper mapping from database rows.
    Each method runs in its own transaction.

    Note: This repository does NOT perform authorization checks.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_users(self) -> list[User]:
        with self._store_errors():
            with self._cursor() as cur:
                cur.execute(
                    f"select {_USER_COLUMNS} from users order by last_name, first_name"
                )
                rows = cur.fetchall()
        return [self._map_to_user(row) for row in rows]

    def get_user(self, user_id: int) -> Optional[User]:
        with self._store_errors(user_id=user_id):
            with self._cursor() as cur:
                cur.execute(f"select {_USER_COLUMNS} from users where id = %s", (user_id,))
                row = cur.fetchone()
        return self._map_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._store_errors():
            with self._cursor() as cur:
                cur.execute(
                    f"select {_USER_COLUMNS} from users where email = %s", (email,)
                )
                row = cur.fetchone()
        return self._map_to_user(row) if row else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def update_user(self, user: User) -> None:
        """
        Update name and email. A non-None user.password (a hash) is written
        in the same statement; None keeps the stored hash.
        """
        with self._store_errors(user_id=user.id, email=user.email):
            with self._cursor() as cur:
                cur.execute(
                    """
                    update users
                       set first_name = %s, last_name = %s, email = %s,
                           password = coalesce(%s, password),
                           updated_at = now()
                     where id = %s
                    """,
                    (user.first_name, user.last_name, user.email, user.password, user.id),
                )
                updated = cur.rowcount

        if updated == 0:
            raise UserNotFoundError(user.id)

    def delete_user(self, user_id: int) -> None:
        with self._store_errors(user_id=user_id):
            with self._cursor() as cur:
                cur.execute("delete from users where id = %s", (user_id,))
                deleted = cur.rowcount

        if deleted == 0:
            raise UserNotFoundError(user_id)

    def insert_user(self, user: User) -> int:
        with self._store_errors(email=user.email):
            with self._cursor() as cur:
                cur.execute(
                    """
                    insert into users
                        (first_name, last_name, email, password, created_at, updated_at)
                    values (%s, %s, %s, %s, now(), now())
                    returning id
                    """,
                    (user.first_name, user.last_name, user.email, user.password),
                )
                row = cur.fetchone()

        new_id = int(row["id"])
        logger.info("Inserted user %d", new_id)
        return new_id

    def reset_password(self, user_id: int, password_hash: str) -> None:
        with self._store_errors(user_id=user_id):
            with self._cursor() as cur:
                cur.execute(
                    "update users set password = %s, updated_at = now() where id = %s",
                    (password_hash, user_id),
                )
                updated = cur.rowcount

        if updated == 0:
            raise UserNotFoundError(user_id)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    @contextmanager
    def _store_errors(
        self, user_id: Optional[int] = None, email: Optional[str] = None
    ) -> Iterator[None]:
        try:
            yield
        except psycopg2.Error as e:
            raise self._map_error(e, user_id=user_id, email=email) from e

    @staticmethod
    def _map_to_user(row: dict[str, Any]) -> User:
        return User(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            password=row.get("password"),
            last_login=row.get("last_login"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    @staticmethod
    def _map_error(
        error: psycopg2.Error, user_id: Optional[int] = None, email: Optional[str] = None
    ) -> UserStoreError:
        if email is not None and error.pgcode == errorcodes.UNIQUE_VIOLATION:
            return DuplicateEmailError(email)
        logger.warning("User store query failed: %s", error)
        return UserStoreError("User store unavailable", user_id=user_id or None)
