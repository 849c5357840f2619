from __future__ import annotations

"""
File Name Index.

Maps every indexed file base name to the directories that contain a file
with that name. Ingestion also populates the directory registry and the
per-directory file frequency counter consumed by the hierarchy accumulator.
"""

import logging
import os
from typing import Dict, Iterable, Iterator, List, Tuple

from dupedir.core.analysis.hierarchy import accumulate_hierarchy
from dupedir.core.index.registry import DirectoryRegistry, normalize_dir_path, parent_path
from dupedir.domain.counter import FrequencyCounter
from dupedir.domain.models import Directory

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE INDEX
# -----------------------------------------------------------------------------

class FileIndex:
    """
    Base name to owning directories index for one analysis run.

    Owning directories are kept per name as an insertion-ordered set of
    ids: a directory is recorded at most once per name.
    """

    def __init__(self):
        self.registry = DirectoryRegistry()
        self.files_per_dir: FrequencyCounter[str] = FrequencyCounter()
        self._owners: Dict[str, Dict[int, None]] = {}
        self.files_indexed = 0
        self.files_skipped = 0
        self.finalized = False

    def ingest(self, file_path: str) -> bool:
        """
        Feed one file path into the index.

        The caller guarantees that the path denotes a regular file. Paths
        without a parent segment (empty strings, filesystem roots) are
        skipped and counted rather than raising. Surrounding spaces belong
        to the name and are kept.

        Args:
            file_path: Absolute path of a regular file.

        Returns:
            bool: True if the path was indexed, False if it was skipped.
        """
        if not file_path:
            self.files_skipped += 1
            logger.debug("Skipping empty path.")
            return False

        path = normalize_dir_path(file_path)
        name = os.path.basename(path)
        dir_path = parent_path(path)
        if not name or dir_path is None:
            self.files_skipped += 1
            logger.debug(f"Skipping path without parent directory: {file_path}")
            return False

        directory = self.registry.get_or_create(dir_path)
        owners = self._owners.setdefault(name, {})
        if directory.id not in owners:
            owners[directory.id] = None
            self.files_per_dir.add(directory.path)

        self.files_indexed += 1
        self.finalized = False
        return True

    def ingest_all(self, file_paths: Iterable[str]) -> int:
        """Ingest a sequence of paths, returning how many were indexed."""
        return sum(1 for p in file_paths if self.ingest(p))

    def finalize(self) -> None:
        """Compute direct and subtree file counts for every directory."""
        accumulate_hierarchy(self.registry, self.files_per_dir)
        self.finalized = True
        logger.debug(
            f"Index finalized: {len(self._owners):,} file names, "
            f"{len(self.registry):,} directories"
        )

    def owners(self, name: str) -> List[Directory]:
        """Directories holding a file with the given base name."""
        return [self.registry.by_id(i) for i in self._owners.get(name, {})]

    def iter_owners(self) -> Iterator[Tuple[str, List[int]]]:
        """Yield (name, owning directory ids) in name discovery order."""
        for name, owners in self._owners.items():
            yield name, list(owners)

    @property
    def file_names(self) -> int:
        return len(self._owners)

    def stats(self) -> Dict[str, int]:
        return {
            "files_indexed": self.files_indexed,
            "files_skipped": self.files_skipped,
            "file_names": self.file_names,
            "directories": len(self.registry),
        }
