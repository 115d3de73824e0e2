"""Tests for environment-based configuration."""

from pathlib import Path
from unittest.mock import patch

from rqmt_redline.config import get_db_path, get_log_level, is_strict_redline


def test_defaults():
    with patch.dict("os.environ", {}, clear=True):
        assert get_db_path() == Path("~/.local/share/rqmt_redline/redline.db").expanduser()
        assert get_log_level() == "WARNING"
        assert is_strict_redline() is False


def test_db_path_from_env(tmp_path):
    with patch.dict("os.environ", {"RM_DB_PATH": str(tmp_path / "x.db")}):
        assert get_db_path() == tmp_path / "x.db"


def test_log_level_normalized():
    with patch.dict("os.environ", {"RM_LOG_LEVEL": "debug"}):
        assert get_log_level() == "DEBUG"


def test_strict_redline_flag():
    """Only TRUE (any case) enables strict mode."""
    with patch.dict("os.environ", {"RM_STRICT_REDLINE": "true"}):
        assert is_strict_redline() is True
    with patch.dict("os.environ", {"RM_STRICT_REDLINE": "1"}):
        assert is_strict_redline() is False
