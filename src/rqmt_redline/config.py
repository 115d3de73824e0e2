"""Environment-variable-based configuration."""

import os
from pathlib import Path


def get_db_path() -> Path:
    """Return the database file path from RM_DB_PATH."""
    raw = os.environ.get("RM_DB_PATH", "~/.local/share/rqmt_redline/redline.db")
    return Path(raw).expanduser()


def get_log_level() -> str:
    """Return the logging level from RM_LOG_LEVEL."""
    return os.environ.get("RM_LOG_LEVEL", "WARNING").upper()


def is_strict_redline() -> bool:
    """Return True if RM_STRICT_REDLINE is TRUE (reject cross-entity redlines)."""
    return os.environ.get("RM_STRICT_REDLINE", "").upper() == "TRUE"
