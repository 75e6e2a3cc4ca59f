"""Tests for shared/repository.py."""

from typing import Optional
from unittest.mock import MagicMock

from psycopg2.extras import RealDictCursor

from shared.repository import BaseRepository


class MockModel:
    pass


class MockRepository(BaseRepository[MockModel]):
    def get_by_id(self, id: int) -> Optional[MockModel]:
        with self._cursor() as cur:
            cur.execute("select 1 where %s = %s", (id, id))
            return cur.fetchone()


class TestBaseRepository:
    def test_init_stores_pool(self):
        mock_pool = MagicMock()
        repo = BaseRepository(mock_pool)
        assert repo._pool is mock_pool

    def test_cursor_uses_dict_rows(self):
        mock_pool = MagicMock()
        conn = mock_pool.getconn.return_value
        cursor = conn.cursor.return_value.__enter__.return_value
        cursor.fetchone.return_value = {"?column?": 1}

        result = MockRepository(mock_pool).get_by_id(5)

        assert result == {"?column?": 1}
        conn.cursor.assert_called_once_with(cursor_factory=RealDictCursor)
        conn.commit.assert_called_once()
        mock_pool.putconn.assert_called_once_with(conn)
