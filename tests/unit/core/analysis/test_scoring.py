from __future__ import annotations

"""
Unit tests for candidate scoring and ranking.
"""

import math

import pytest

from dupedir.core.analysis.scoring import compute_score, rank_candidates
from dupedir.core.index.registry import DirectoryRegistry
from dupedir.domain.models import DuplicateCandidate


@pytest.fixture
def registry() -> DirectoryRegistry:
    reg = DirectoryRegistry()
    for path, direct, subtree in (
            ("/a", 4, 10),
            ("/b", 8, 8),
            ("/c", 2, 2),
            ("/empty", 0, 3),
    ):
        d = reg.get_or_create(path)
        d.direct_files = direct
        d.subtree_files = subtree
    return reg


def _candidate(reg: DirectoryRegistry, p1: str, p2: str, common: int = 0, subtree: int = 0) -> DuplicateCandidate:
    d1, d2 = reg.get(p1), reg.get(p2)
    return DuplicateCandidate(
        dir1_id=d1.id, dir2_id=d2.id, path1=d1.path, path2=d2.path,
        common_files=common, common_files_subtree=subtree,
    )


def test_direct_score_formula(registry):
    c = _candidate(registry, "/a", "/b", common=2)

    compute_score(c, registry, aggregate=False)

    assert c.overlap == pytest.approx(0.5)
    assert c.score == pytest.approx(math.log10(2) + 0.5)


def test_aggregate_score_uses_subtree_counts(registry):
    c = _candidate(registry, "/a", "/b", common=2, subtree=4)

    compute_score(c, registry, aggregate=True)

    assert c.overlap == pytest.approx(0.5)
    assert c.score == pytest.approx(math.log10(4) + 0.5)


def test_zero_file_side_gives_zero_overlap(registry):
    c = _candidate(registry, "/a", "/empty", common=1)

    compute_score(c, registry, aggregate=False)

    assert c.overlap == 0.0
    assert c.score == pytest.approx(0.0)


def test_full_overlap_of_smaller_directory(registry):
    c = _candidate(registry, "/b", "/c", common=2)

    compute_score(c, registry, aggregate=False)

    assert c.overlap == pytest.approx(1.0)


def test_rank_filters_by_threshold(registry):
    weak = _candidate(registry, "/a", "/c", common=1)
    strong = _candidate(registry, "/a", "/b", common=3)

    ranked = rank_candidates([weak, strong], registry, aggregate=False, min_shared_files=2)

    assert ranked == [strong]


def test_rank_never_keeps_zero_evidence(registry):
    c = _candidate(registry, "/a", "/b", common=0, subtree=2)

    assert rank_candidates([c], registry, aggregate=False, min_shared_files=0) == []
    assert rank_candidates([c], registry, aggregate=True, min_shared_files=0) == [c]


def test_rank_sorts_descending_and_keeps_discovery_order_on_ties(registry):
    low = _candidate(registry, "/a", "/c", common=1)       # 0 + 0.5
    tie1 = _candidate(registry, "/b", "/c", common=1)      # 0 + 0.5
    high = _candidate(registry, "/a", "/b", common=4)      # log10(4) + 1

    ranked = rank_candidates([low, tie1, high], registry, min_shared_files=1)

    assert ranked == [high, low, tie1]
    scores = [c.score for c in ranked]
    assert scores == sorted(scores, reverse=True)


def test_more_evidence_never_scores_lower(registry):
    previous = -1.0
    for shared in range(1, 5):
        c = _candidate(registry, "/a", "/b", common=shared)
        compute_score(c, registry, aggregate=False)
        assert c.score > previous
        previous = c.score
