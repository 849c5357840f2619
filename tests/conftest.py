from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures to build finders from the listing files in 'fixtures/'.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from dupedir.core.services.finder import DuplicateFinder  # noqa: E402
from dupedir.infra.listing import read_listing  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the listing fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def finder_from_paths() -> Callable[[Iterable[str]], DuplicateFinder]:
    """
    Return a factory building a finalized finder from raw paths.

    Returns:
        Callable: paths -> DuplicateFinder with its index finalized.
    """
    def _build(paths: Iterable[str]) -> DuplicateFinder:
        finder = DuplicateFinder()
        finder.ingest_all(paths)
        finder.finalize_index()
        return finder

    return _build


@pytest.fixture
def finder_from_listing(finder_from_paths) -> Callable[[str], DuplicateFinder]:
    """
    Return a factory building a finalized finder from a listing fixture.

    Returns:
        Callable: listing file name -> DuplicateFinder.
    """
    def _build(name: str) -> DuplicateFinder:
        return finder_from_paths(read_listing(str(FIXTURES_DIR / name)))

    return _build
