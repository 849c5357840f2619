from __future__ import annotations

"""
Integration tests for file listing persistence.

Verifies that listings written by a store run can be read back, and that
hand-annotated listings (comments, blank lines) are accepted.
"""

from pathlib import Path

import pytest

from dupedir.infra.listing import read_listing, write_listing


def test_write_sorts_and_deduplicates(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "listing.txt"

    written = write_listing(str(target), ["/r/b/x", "/r/a/y", "/r/b/x"])

    assert written == 2
    assert target.read_text(encoding="utf-8") == "/r/a/y\n/r/b/x\n"


def test_read_back_written_listing(tmp_path: Path) -> None:
    target = tmp_path / "listing.txt"
    paths = ["/r/dir one/file name.txt", "/r/ünïcode/ñ.txt"]
    write_listing(str(target), paths)

    assert list(read_listing(str(target))) == sorted(paths)


def test_read_skips_comments_and_blank_lines(fixtures_dir: Path) -> None:
    entries = list(read_listing(str(fixtures_dir / "listing_full_copy.txt")))

    assert len(entries) == 10
    assert not any(e.startswith("#") for e in entries)
    assert "" not in entries


def test_read_removes_crlf_but_keeps_spaces(tmp_path: Path) -> None:
    target = tmp_path / "windows.txt"
    target.write_bytes(b"/r/a/x \r\n  \r\n/r/b/y\r\n")

    assert list(read_listing(str(target))) == ["/r/a/x ", "/r/b/y"]


def test_read_back_names_with_edge_spaces(tmp_path: Path) -> None:
    target = tmp_path / "listing.txt"
    paths = ["/r/a/ lead.txt", "/r/a/trail.txt "]
    write_listing(str(target), paths)

    assert list(read_listing(str(target))) == sorted(paths)


def test_read_tolerates_undecodable_bytes(tmp_path: Path) -> None:
    target = tmp_path / "latin1.txt"
    target.write_bytes(b"/r/caf\xe9/x\n")

    (entry,) = list(read_listing(str(target)))
    assert entry.startswith("/r/caf")


def test_read_missing_listing_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        list(read_listing(str(tmp_path / "ghost.txt")))
