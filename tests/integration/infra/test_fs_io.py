from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution
and input existence checks.
"""

import os
from pathlib import Path
from unittest.mock import patch

from dupedir.infra.fs import find_missing_paths, get_user_data_dir, normalize_path

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "DupeDir" in path


def test_get_user_data_dir_unix() -> None:
    """Verify resolution of ~/.dupedir on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.dupedir")


def test_normalize_path_expansion() -> None:
    """Verify expansion of environment variables and user shortcuts."""
    with patch.dict(os.environ, {"DUPEDIR_TEST_VAR": "my_folder"}):
        result = normalize_path(os.path.join("$DUPEDIR_TEST_VAR", "sub"))

    assert os.path.isabs(result)
    assert result.endswith(os.path.join("my_folder", "sub"))


def test_normalize_path_empty_uses_fallback(tmp_path: Path) -> None:
    assert normalize_path("") == ""
    assert normalize_path(None) == ""
    assert normalize_path("   ", fallback=str(tmp_path)) == str(tmp_path)

# -----------------------------------------------------------------------------
# EXISTENCE CHECKS
# -----------------------------------------------------------------------------

def test_find_missing_paths(tmp_path: Path) -> None:
    listing = tmp_path / "listing.txt"
    listing.write_text("", encoding="utf-8")
    ghost = tmp_path / "ghost"

    assert find_missing_paths([str(tmp_path), str(ghost)], want_dir=True) == [str(ghost)]
    assert find_missing_paths([str(listing), str(tmp_path)], want_dir=False) == [str(tmp_path)]
    assert find_missing_paths([], want_dir=True) == []
