"""Database backend protocol — thin abstraction over async DB connections.

Stores and queries program against these protocols rather than aiosqlite
directly, so tests and callers only depend on ``execute``/``commit``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Row(Protocol):
    """A database row supporting both named and positional access."""

    def __getitem__(self, key: str | int) -> Any:
        """Get a column value by name or position."""
        ...

    def keys(self) -> Any:
        """Return column names."""
        ...


@runtime_checkable
class Cursor(Protocol):
    """Async cursor returned by Database.execute()."""

    @property
    def lastrowid(self) -> int | None:
        """Row ID generated by the last INSERT."""
        ...

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        ...

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        ...


@runtime_checkable
class Database(Protocol):
    """Async database backend using ``?`` placeholders and SQLite syntax.

    All stores on one connection share its transaction, so a save must hold
    ``write_lock`` from its first read to its commit or rollback.
    """

    write_lock: asyncio.Lock

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        ...

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements (DDL, migrations)."""
        ...

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Discard uncommitted changes."""
        ...

    async def close(self) -> None:
        """Close the database connection."""
        ...
