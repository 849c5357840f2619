from __future__ import annotations

"""
Duplicate Candidate Generation.

Builds the map of directory pairs that share file names, and optionally
propagates the shared-file evidence of every pair up to the pairs formed
by their ancestors.
"""

import logging
from typing import Dict, Iterator, List, Optional

from dupedir.core.index.file_index import FileIndex
from dupedir.core.index.registry import DirectoryRegistry, is_same_or_ancestor
from dupedir.domain.config import DEFAULT_MAX_CANDIDATE_DIRS
from dupedir.domain.models import Directory, DuplicateCandidate, PairKey, pair_key

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CANDIDATE MAP
# -----------------------------------------------------------------------------

class CandidateMap:
    """
    One DuplicateCandidate per unordered directory pair.

    Iteration follows the order in which pairs were first encountered.
    """

    def __init__(self):
        self._candidates: Dict[PairKey, DuplicateCandidate] = {}

    def get_or_create(self, dir1: Directory, dir2: Directory) -> DuplicateCandidate:
        """
        Look up the candidate for a pair, creating it on first encounter.

        (A, B) and (B, A) resolve to the same record.
        """
        key = pair_key(dir1.id, dir2.id)
        candidate = self._candidates.get(key)
        if candidate is None:
            candidate = DuplicateCandidate(
                dir1_id=dir1.id, dir2_id=dir2.id, path1=dir1.path, path2=dir2.path
            )
            self._candidates[key] = candidate
        return candidate

    def get(self, dir1: Directory, dir2: Directory) -> Optional[DuplicateCandidate]:
        return self._candidates.get(pair_key(dir1.id, dir2.id))

    def snapshot(self) -> List[DuplicateCandidate]:
        return list(self._candidates.values())

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[DuplicateCandidate]:
        return iter(self.snapshot())

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def generate_candidates(index: FileIndex, max_candidate_dirs: int = DEFAULT_MAX_CANDIDATE_DIRS) -> CandidateMap:
    """
    Tally, for every directory pair, how many file names they share directly.

    Names owned by a single directory carry no evidence. Names owned by
    more than max_candidate_dirs directories are considered too generic
    (e.g. 'readme.txt') and skipped entirely.

    Args:
        index: A populated file index.
        max_candidate_dirs: Upper bound on the number of owners of a name.

    Returns:
        CandidateMap: Direct candidates with their common_files counts.
    """
    candidates = CandidateMap()
    registry = index.registry
    skipped_generic = 0

    for name, owner_ids in index.iter_owners():
        if len(owner_ids) < 2:
            continue
        if len(owner_ids) > max_candidate_dirs:
            skipped_generic += 1
            logger.debug(f"Skipping generic file name '{name}' ({len(owner_ids)} directories)")
            continue

        owners = [registry.by_id(i) for i in owner_ids]
        for i in range(len(owners) - 1):
            for j in range(i + 1, len(owners)):
                candidates.get_or_create(owners[i], owners[j]).common_files += 1

    if skipped_generic:
        logger.info(f"Ignored {skipped_generic:,} file names shared by more than {max_candidate_dirs} directories")
    return candidates


def aggregate_hierarchy(candidates: CandidateMap, registry: DirectoryRegistry) -> int:
    """
    Propagate direct shared-file counts up to every pair of ancestors.

    For a direct pair (d1, d2) sharing c names, every (a1, a2) where a1 is
    d1 or one of its ancestors and a2 is d2 or one of its ancestors gains
    c subtree-shared files, unless a1 and a2 overlap (one contains the
    other). The walk reads a frozen list of the direct candidates so that
    pairs created here never feed back into the aggregation.

    Args:
        candidates: Direct candidates, extended in place.
        registry: Registry with parent links already accumulated.

    Returns:
        int: Number of candidates created by the aggregation.
    """
    initial = candidates.snapshot()
    before = len(candidates)

    for direct in initial:
        shared = direct.common_files
        if shared <= 0:
            continue
        dir2 = registry.by_id(direct.dir2_id)
        for a1 in registry.ancestors(registry.by_id(direct.dir1_id)):
            for a2 in registry.ancestors(dir2):
                # Every further ancestor of a2 overlaps a1 as well
                if is_same_or_ancestor(a1.path, a2.path) or is_same_or_ancestor(a2.path, a1.path):
                    break
                candidates.get_or_create(a1, a2).common_files_subtree += shared

    created = len(candidates) - before
    logger.debug(f"Hierarchy aggregation added {created:,} ancestor pairs")
    return created
