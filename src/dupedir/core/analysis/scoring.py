from __future__ import annotations

"""
Candidate Scoring and Ranking.

Filters candidate pairs by their shared-file count and ranks the survivors
by a similarity score combining the amount of shared evidence (log10) with
how much of the smaller directory it covers.
"""

import logging
import math
from typing import Iterable, List

from dupedir.core.index.registry import DirectoryRegistry
from dupedir.domain.config import DEFAULT_MIN_SHARED_FILES
from dupedir.domain.models import DuplicateCandidate

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compute_score(candidate: DuplicateCandidate, registry: DirectoryRegistry, aggregate: bool) -> None:
    """
    Fill the overlap fraction and score of a candidate in place.

    In aggregate mode the subtree-shared count is compared with subtree
    file counts, otherwise the direct count with direct file counts. A pair
    where one side holds no files has an overlap of 0.

    Args:
        candidate: The candidate to score (its basis count must be >= 1).
        registry: Registry holding the file counts of both directories.
        aggregate: Whether hierarchy aggregation was performed.
    """
    dir1 = registry.by_id(candidate.dir1_id)
    dir2 = registry.by_id(candidate.dir2_id)

    if aggregate:
        shared = candidate.common_files_subtree
        smallest = min(dir1.subtree_files, dir2.subtree_files)
    else:
        shared = candidate.common_files
        smallest = min(dir1.direct_files, dir2.direct_files)

    candidate.overlap = shared / smallest if smallest > 0 else 0.0
    candidate.score = math.log10(shared) + candidate.overlap


def rank_candidates(
        candidates: Iterable[DuplicateCandidate],
        registry: DirectoryRegistry,
        aggregate: bool = False,
        min_shared_files: int = DEFAULT_MIN_SHARED_FILES,
) -> List[DuplicateCandidate]:
    """
    Keep candidates with enough shared files and sort them by score.

    The sort is stable: equal scores keep candidate discovery order.

    Args:
        candidates: Candidates in discovery order.
        registry: Registry holding the file counts.
        aggregate: Use subtree counts instead of direct counts.
        min_shared_files: Minimum basis count for a candidate to be kept.

    Returns:
        List[DuplicateCandidate]: Kept candidates, best score first.
    """
    threshold = max(min_shared_files, 1)
    kept: List[DuplicateCandidate] = []

    for candidate in candidates:
        shared = candidate.common_files_subtree if aggregate else candidate.common_files
        if shared < threshold:
            continue
        compute_score(candidate, registry, aggregate)
        kept.append(candidate)

    kept.sort(key=lambda c: c.score, reverse=True)
    logger.debug(f"Ranked {len(kept):,} candidates (min shared files: {min_shared_files})")
    return kept
