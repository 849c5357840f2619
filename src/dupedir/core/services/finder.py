from __future__ import annotations

"""
Duplicate Directory Finder Service.

Facade over the analysis core: ingests file paths into a fresh index,
finalizes the directory hierarchy and produces ranked duplicate candidate
pairs. Each instance holds the state of one analysis run; reset() starts
a new one.
"""

import logging
from typing import Any, Dict, Iterable, List

from dupedir.core.analysis.candidates import generate_candidates
from dupedir.core.analysis.candidates import aggregate_hierarchy as aggregate_ancestor_pairs
from dupedir.core.analysis.scoring import rank_candidates
from dupedir.core.index.file_index import FileIndex
from dupedir.core.index.registry import DirectoryRegistry
from dupedir.domain.config import DEFAULT_MAX_CANDIDATE_DIRS, DEFAULT_MIN_SHARED_FILES
from dupedir.domain.models import DuplicateCandidate

logger = logging.getLogger(__name__)


class DuplicateFinder:
    """
    Finds directories sharing many file names.

    Usage:
        finder = DuplicateFinder()
        finder.ingest_all(paths)
        finder.finalize_index()
        duplicates = finder.find_duplicates(aggregate_hierarchy=True)
    """

    def __init__(self):
        self._index = FileIndex()

    def reset(self) -> None:
        """Discard the registry, counter and index of the previous run."""
        self._index = FileIndex()

    @property
    def index(self) -> FileIndex:
        return self._index

    @property
    def registry(self) -> DirectoryRegistry:
        return self._index.registry

    @property
    def is_finalized(self) -> bool:
        return self._index.finalized

    def ingest(self, file_path: str) -> bool:
        return self._index.ingest(file_path)

    def ingest_all(self, file_paths: Iterable[str]) -> int:
        return self._index.ingest_all(file_paths)

    def finalize_index(self) -> None:
        """Run the hierarchy accumulator. Call once all paths are ingested."""
        self._index.finalize()

    def stats(self) -> Dict[str, int]:
        return self._index.stats()

    def describe(self, candidate: DuplicateCandidate) -> Dict[str, Any]:
        """Candidate fields plus the file counts of both directories."""
        dir1 = self.registry.by_id(candidate.dir1_id)
        dir2 = self.registry.by_id(candidate.dir2_id)
        data = candidate.to_dict()
        data.update({
            "dir1_files": dir1.direct_files,
            "dir1_files_subtree": dir1.subtree_files,
            "dir2_files": dir2.direct_files,
            "dir2_files_subtree": dir2.subtree_files,
        })
        return data

    def find_duplicates(
            self,
            aggregate_hierarchy: bool = False,
            min_shared_files: int = DEFAULT_MIN_SHARED_FILES,
            max_candidate_dirs: int = DEFAULT_MAX_CANDIDATE_DIRS,
    ) -> List[DuplicateCandidate]:
        """
        Compute ranked duplicate directory pairs.

        Args:
            aggregate_hierarchy: Propagate shared files up to ancestor pairs.
            min_shared_files: Minimum shared names for a pair to be reported.
            max_candidate_dirs: Names shared by more directories are ignored.

        Returns:
            List[DuplicateCandidate]: Candidates sorted by descending score.
        """
        if not self._index.finalized:
            logger.warning("Index was not finalized before searching duplicates. Finalizing now.")
            self.finalize_index()

        logger.info(
            f"Finding duplicates over {self._index.file_names:,} file names "
            f"in {len(self.registry):,} directories"
        )

        candidates = generate_candidates(self._index, max_candidate_dirs)
        logger.debug(f"{len(candidates):,} direct candidate pairs")

        if aggregate_hierarchy:
            aggregate_ancestor_pairs(candidates, self.registry)

        ranked = rank_candidates(candidates, self.registry, aggregate_hierarchy, min_shared_files)
        logger.info(f"Found {len(ranked):,} duplicate candidates")
        return ranked
