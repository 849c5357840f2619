from __future__ import annotations

"""
Unit tests for the Duplicate Finder facade.

Each scenario loads one of the listing fixtures and checks the ranked
candidates produced in direct and aggregated mode.
"""

import inspect
import logging
import math

import pytest

from dupedir.core.services.finder import DuplicateFinder
from dupedir.domain.config import get_default_config


def _paths(candidates):
    return [frozenset((c.path1, c.path2)) for c in candidates]


def test_no_overlap_yields_nothing(finder_from_listing):
    finder = finder_from_listing("listing_no_overlap.txt")

    assert finder.find_duplicates(min_shared_files=1) == []
    assert finder.find_duplicates(aggregate_hierarchy=True, min_shared_files=1) == []


def test_single_shared_name(finder_from_listing):
    finder = finder_from_listing("listing_single_shared.txt")

    (dup,) = finder.find_duplicates(min_shared_files=1)

    assert {dup.path1, dup.path2} == {"/root/dir1", "/root/dir3"}
    assert dup.common_files == 1
    assert dup.overlap == pytest.approx(0.5)
    assert dup.score == pytest.approx(0.5)


def test_default_threshold_filters_weak_evidence(finder_from_listing):
    finder = finder_from_listing("listing_single_shared.txt")

    assert finder.find_duplicates() == []


def test_search_defaults_follow_config_defaults():
    cfg = get_default_config()
    params = inspect.signature(DuplicateFinder.find_duplicates).parameters

    assert params["min_shared_files"].default == cfg["min_shared_files"]
    assert params["max_candidate_dirs"].default == cfg["max_candidate_dirs"]


def test_full_copy(finder_from_listing):
    finder = finder_from_listing("listing_full_copy.txt")

    (dup,) = finder.find_duplicates()

    assert {dup.path1, dup.path2} == {"/root/dir1", "/root/dir3"}
    assert dup.common_files == 4
    assert dup.overlap == pytest.approx(1.0)
    assert dup.score == pytest.approx(math.log10(4) + 1.0)


def test_two_pairs_ranked_by_score(finder_from_listing):
    finder = finder_from_listing("listing_two_pairs.txt")

    ranked = finder.find_duplicates(min_shared_files=1)

    assert _paths(ranked) == [
        frozenset(("/root/dir1", "/root/dir3")),
        frozenset(("/root/dir2", "/root/dir4")),
    ]
    assert ranked[1].overlap == pytest.approx(0.5)
    assert len(finder.find_duplicates(min_shared_files=2)) == 1


def test_two_pairs_aggregated(finder_from_listing):
    finder = finder_from_listing("listing_two_pairs.txt")

    ranked = finder.find_duplicates(aggregate_hierarchy=True, min_shared_files=1)

    assert len(ranked) == 2
    assert ranked[0].common_files_subtree == 4
    assert ranked[1].common_files_subtree == 1


def test_nested_one_side_aggregated(finder_from_listing):
    finder = finder_from_listing("listing_nested_one_side.txt")

    ranked = finder.find_duplicates(aggregate_hierarchy=True, min_shared_files=1)

    assert _paths(ranked) == [
        frozenset(("/root/aaa/111", "/root/bbb")),
        frozenset(("/root/aaa", "/root/bbb")),
    ]
    assert ranked[0].overlap == pytest.approx(1.0)
    assert ranked[1].overlap == pytest.approx(0.5)
    assert ranked[1].common_files == 0
    assert ranked[1].common_files_subtree == 1


def test_nested_one_side_direct(finder_from_listing):
    """Without aggregation only the pair sharing a name directly is reported."""
    finder = finder_from_listing("listing_nested_one_side.txt")

    ranked = finder.find_duplicates(aggregate_hierarchy=False, min_shared_files=1)

    assert _paths(ranked) == [frozenset(("/root/aaa/111", "/root/bbb"))]
    assert ranked[0].common_files == 1
    assert ranked[0].overlap == pytest.approx(1.0)


def test_nested_both_sides_aggregated(finder_from_listing):
    finder = finder_from_listing("listing_nested_both_sides.txt")

    ranked = finder.find_duplicates(aggregate_hierarchy=True, min_shared_files=1)

    assert len(ranked) == 7
    by_pair = {frozenset((c.path1, c.path2)): c for c in ranked}
    top = by_pair[frozenset(("/root/aaa", "/root/bbb"))]
    assert top.common_files_subtree == 2
    assert top.overlap == pytest.approx(1.0)
    assert ranked[0] is top


def test_direct_mode_ignores_ancestor_only_pairs(finder_from_listing):
    finder = finder_from_listing("listing_nested_both_sides.txt")

    ranked = finder.find_duplicates(min_shared_files=1)

    assert sorted(_paths(ranked), key=sorted) == sorted([
        frozenset(("/root/aaa/111", "/root/bbb/111")),
        frozenset(("/root/aaa/222", "/root/bbb/222")),
    ], key=sorted)


def test_describe_adds_directory_counts(finder_from_listing):
    finder = finder_from_listing("listing_nested_one_side.txt")
    (dup, _) = finder.find_duplicates(aggregate_hierarchy=True, min_shared_files=1)

    data = finder.describe(dup)

    assert data["common_files_subtree"] == 1
    counts = {
        data["path1"]: (data["dir1_files"], data["dir1_files_subtree"]),
        data["path2"]: (data["dir2_files"], data["dir2_files_subtree"]),
    }
    assert counts == {"/root/aaa/111": (1, 1), "/root/bbb": (2, 2)}


def test_search_finalizes_pending_index(caplog):
    finder = DuplicateFinder()
    finder.ingest_all(["/r/a/x", "/r/a/y", "/r/a/z", "/r/b/x", "/r/b/y", "/r/b/z"])
    assert not finder.is_finalized

    with caplog.at_level(logging.WARNING):
        ranked = finder.find_duplicates()

    assert finder.is_finalized
    assert len(ranked) == 1
    assert "not finalized" in caplog.text


def test_empty_index():
    finder = DuplicateFinder()
    finder.finalize_index()

    assert finder.find_duplicates() == []
    assert finder.stats()["directories"] == 0


def test_reset_discards_previous_run(finder_from_listing):
    finder = finder_from_listing("listing_full_copy.txt")
    assert finder.stats()["files_indexed"] == 10

    finder.reset()

    assert finder.stats() == {
        "files_indexed": 0,
        "files_skipped": 0,
        "file_names": 0,
        "directories": 0,
    }
    assert finder.find_duplicates() == []


def test_ids_stable_across_finalization(finder_from_listing):
    finder = finder_from_listing("listing_two_pairs.txt")
    before = {d.path: d.id for d in finder.registry}

    finder.finalize_index()

    after = {d.path: d.id for d in finder.registry}
    assert before == after
