"""
Base repository class for database access.

Provides a common abstraction layer for SQL-backed repositories,
encapsulating connection pool access and row mapping helpers.
"""

from typing import Iterator, TypeVar, Generic
from contextlib import contextmanager

from psycopg2.extensions import cursor as PgCursor
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from .database import pooled_connection


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for SQL repositories.

    Provides common functionality for database operations:
    - Connection pool access via self._pool
    - A dict-row cursor scoped to one transaction via self._cursor()
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle row-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            def get_user(self, user_id: int) -> Optional[User]:
                with self._cursor() as cur:
                    cur.execute("select * from users where id = %s", (user_id,))
                    row = cur.fetchone()
                return self._map_to_user(row) if row else None
    """

    def __init__(self, pool: ThreadedConnectionPool) -> None:
        """
        Initialize the repository with a connection pool.

        Args:
            pool: psycopg2 connection pool shared by the process.
        """
        self._pool = pool

    @contextmanager
    def _cursor(self) -> Iterator[PgCursor]:
        """Yield a RealDictCursor inside a committed-or-rolled-back transaction."""
        with pooled_connection(self._pool) as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
