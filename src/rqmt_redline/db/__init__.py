"""Database connection and schema management."""

from rqmt_redline.db.backend import Cursor, Database, Row
from rqmt_redline.db.sqlite_backend import SQLiteBackend

__all__ = ["Cursor", "Database", "Row", "SQLiteBackend"]
