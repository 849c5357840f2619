from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the application data directory and
normalization of user-supplied paths.
"""

import os
from typing import List, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "DupeDir"
UNIX_APP_DIR_NAME = ".dupedir"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/DupeDir
    - Linux/Mac: ~/.dupedir

    The directory is created if missing. Creation failures are ignored so
    that read-only environments can still run with defaults.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables ($VAR/%VAR%) and the user home shortcut.
    Empty input resolves to the fallback, or to an empty string when no
    fallback is given.

    Args:
        path: Raw input path string.
        fallback: Path to use when the input is empty.

    Returns:
        str: Normalized absolute path, or "".
    """
    p = (path or "").strip() or fallback
    if not p:
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.normpath(os.path.abspath(p))


def find_missing_paths(paths: List[str], *, want_dir: bool) -> List[str]:
    """
    Identify paths that do not exist (or are of the wrong kind).

    Args:
        paths: Paths to check.
        want_dir: Require directories if True, regular files otherwise.

    Returns:
        List[str]: The offending paths, in input order.
    """
    check = os.path.isdir if want_dir else os.path.isfile
    return [p for p in paths if not check(p)]
