from __future__ import annotations

"""
File Discovery Service.

Walks directory trees and yields the absolute paths of the regular files
they contain. Symbolic links are never followed nor reported, and
directories that cannot be read are logged and skipped so that a single
permission problem does not abort a scan.
"""

import logging
import os
from typing import Iterable, Iterator, List

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def yield_regular_files(root_path: str) -> Iterator[str]:
    """
    Traverse a directory tree and yield every regular file it contains.

    Args:
        root_path: Directory (or single file) to scan. Made absolute.

    Yields:
        str: Absolute path of each regular, non-symlink file.
    """
    root_abs = os.path.abspath(root_path)

    if os.path.islink(root_abs):
        logger.debug(f"Skipping symbolic link: {root_abs}")
        return
    if os.path.isfile(root_abs):
        yield root_abs
        return
    if not os.path.isdir(root_abs):
        logger.warning(f"Nothing to scan at: {root_abs}")
        return

    # followlinks=False keeps os.walk from descending into linked directories
    for root, dirs, files in os.walk(root_abs, onerror=_log_walk_error, followlinks=False):
        dirs.sort()
        files.sort()

        for file_name in files:
            file_path = os.path.join(root, file_name)
            if os.path.islink(file_path) or not os.path.isfile(file_path):
                continue
            yield file_path


def yield_files_from_dirs(root_paths: Iterable[str]) -> Iterator[str]:
    """Chain the scans of several roots, logging each one."""
    for root_path in root_paths:
        logger.info(f"Scanning files from {os.path.abspath(root_path)}")
        yield from yield_regular_files(root_path)


def collect_files(root_paths: Iterable[str]) -> List[str]:
    """Scan several roots into a sorted, de-duplicated list of paths."""
    return sorted(set(yield_files_from_dirs(root_paths)))


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _log_walk_error(error: OSError) -> None:
    """Report an unreadable directory; os.walk then skips its subtree."""
    logger.error(f"{type(error).__name__} : {error}")
