from __future__ import annotations

"""
File Listing Persistence.

Reads and writes flat listings of absolute file paths: one path per line,
UTF-8 encoded. On reading, blank lines and lines starting with '#' are
ignored so that listings can be annotated by hand. Only line endings are
removed from an entry: file names may begin or end with spaces.
"""

import logging
import os
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def read_listing(listing_path: str) -> Iterator[str]:
    """
    Generate the file paths stored in a listing.

    Undecodable bytes are replaced rather than aborting the read.

    Args:
        listing_path: Path to the listing file.

    Yields:
        str: Non-blank, non-comment lines without their line ending.

    Raises:
        OSError: If the listing cannot be opened.
    """
    with open(listing_path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            entry = line.rstrip("\r\n")
            if not entry.strip() or entry.startswith(COMMENT_PREFIX):
                continue
            yield entry

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_listing(listing_path: str, file_paths: Iterable[str]) -> int:
    """
    Persist file paths to a listing, sorted and without duplicates.

    Args:
        listing_path: Target listing file. Parent directories are created.
        file_paths: Paths to store.

    Returns:
        int: Number of paths written.

    Raises:
        OSError: If the listing cannot be written.
    """
    entries = sorted(set(file_paths))

    parent = os.path.dirname(os.path.abspath(listing_path))
    os.makedirs(parent, exist_ok=True)

    with open(listing_path, "w", encoding="utf-8") as out:
        for entry in entries:
            out.write(f"{entry}\n")

    logger.info(f"Stored {len(entries):,} file paths in {listing_path}")
    return len(entries)
