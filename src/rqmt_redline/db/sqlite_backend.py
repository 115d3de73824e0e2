"""SQLite implementation of the Database protocol.

Thin wrapper around aiosqlite.Connection — no SQL translation needed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import aiosqlite

    from rqmt_redline.db.backend import Cursor, Row

logger = logging.getLogger(__name__)


class SQLiteCursor:
    """Wraps aiosqlite.Cursor to satisfy the Cursor protocol."""

    def __init__(self, cursor: aiosqlite.Cursor) -> None:
        """Initialize with an aiosqlite cursor."""
        self._cursor = cursor

    @property
    def lastrowid(self) -> int | None:
        """Row ID generated by the last INSERT."""
        return self._cursor.lastrowid

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        return await self._cursor.fetchone()

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        return list(await self._cursor.fetchall())


class SQLiteBackend:
    """SQLite implementation of the Database protocol.

    Passes all calls through to the underlying aiosqlite.Connection.
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        """Initialize with an aiosqlite connection."""
        self._conn = conn
        self.write_lock = asyncio.Lock()

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        cursor = await self._conn.execute(sql, params)
        return SQLiteCursor(cursor)

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements (DDL, migrations)."""
        await self._conn.executescript(sql)

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._conn.commit()

    async def rollback(self) -> None:
        """Discard uncommitted changes."""
        await self._conn.rollback()

    async def close(self) -> None:
        """Close the database connection."""
        await self._conn.close()

    async def apply_schema(self) -> None:
        """Apply all SQLite DDL."""
        from rqmt_redline.db.schema import apply_schema

        await apply_schema(self)
        logger.debug("Schema applied")
