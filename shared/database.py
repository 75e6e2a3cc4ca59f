"""
Database connection pool factory for PostgreSQL.

The pool is created lazily on first use and shared by every repository
in the process. Store calls run in FastAPI's threadpool (plain `def`
handlers or asyncio.to_thread), which ThreadedConnectionPool supports.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from psycopg2.extensions import connection as PgConnection
from psycopg2.pool import ThreadedConnectionPool

from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level pool cache
_pool: Optional[ThreadedConnectionPool] = None


def get_connection_pool() -> ThreadedConnectionPool:
    """
    Get the shared PostgreSQL connection pool.

    Returns:
        ThreadedConnectionPool configured from USERHUB_DATABASE_URL
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError(
                "Database configuration missing. "
                "Set the USERHUB_DATABASE_URL environment variable."
            )
        _pool = ThreadedConnectionPool(
            settings.db_pool_min,
            settings.db_pool_max,
            settings.database_url,
        )
        logger.info(
            "Opened database pool (min=%d, max=%d)",
            settings.db_pool_min,
            settings.db_pool_max,
        )

    return _pool


@contextmanager
def pooled_connection(pool: ThreadedConnectionPool) -> Iterator[PgConnection]:
    """
    Borrow a connection for one unit of work.

    Commits when the block exits cleanly and rolls back otherwise. The
    connection always goes back to the pool.
    """
    conn = pool.getconn()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        pool.putconn(conn)


def close_connection_pool() -> None:
    """
    Close every pooled connection and drop the cached pool.

    Called on application shutdown and by tests.
    """
    global _pool
    if _pool is not None:
        _pool.closeall()
        logger.info("Closed database pool")
    _pool = None
