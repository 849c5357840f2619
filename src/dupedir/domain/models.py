from __future__ import annotations

"""
Duplicate Detection Domain Data Models.

Defines the directory records owned by the registry, the candidate pair
records accumulated during analysis, and the report object used to
communicate a complete run to the interface layer.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

UNSET = -1

PairKey = Tuple[int, int]

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class Directory:
    """
    A directory known to the registry.

    Parent and children are referenced by id so that the registry stays
    the single owner of every record.

    Attributes:
        id: Stable identifier, assigned on first sight.
        path: Normalized absolute path (identity).
        direct_files: Indexed files located immediately inside (-1 until computed).
        subtree_files: Direct count plus all descendants (-1 until computed).
        parent_id: Identifier of the parent, None for filesystem roots.
        children: Identifiers of the known subdirectories.
    """
    id: int
    path: str
    direct_files: int = UNSET
    subtree_files: int = UNSET
    parent_id: Optional[int] = None
    children: List[int] = field(default_factory=list)


def pair_key(id1: int, id2: int) -> PairKey:
    """Canonical key of an unordered directory pair."""
    return (id1, id2) if id1 <= id2 else (id2, id1)


@dataclass
class DuplicateCandidate:
    """
    An unordered pair of directories under evaluation.

    Attributes:
        dir1_id: Identifier of the first directory.
        dir2_id: Identifier of the second directory.
        path1: Path of the first directory.
        path2: Path of the second directory.
        common_files: File names shared directly by both directories.
        common_files_subtree: Shared names aggregated over both subtrees.
        overlap: Shared count over the smaller relevant file count.
        score: log10(shared count) + overlap.
    """
    dir1_id: int
    dir2_id: int
    path1: str
    path2: str
    common_files: int = 0
    common_files_subtree: int = 0
    overlap: float = 0.0
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path1": self.path1,
            "path2": self.path2,
            "common_files": self.common_files,
            "common_files_subtree": self.common_files_subtree,
            "overlap": self.overlap,
            "score": self.score,
        }


@dataclass(frozen=True)
class DuplicateReport:
    """
    Unified result object of a complete analysis run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        aggregate_hierarchy: Whether evidence was aggregated over subtrees.
        min_shared_files: Threshold applied to the basis count.
        max_candidate_dirs: Fan-out bound for a single file name.
        files_indexed: Paths accepted by the index.
        files_skipped: Paths rejected by the index.
        file_names: Distinct file names indexed.
        directories: Directories known after accumulation.
        listing_path: Listing file written by a store run, if any.
        duplicates: Ranked candidates, as dictionaries.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    aggregate_hierarchy: bool
    min_shared_files: int
    max_candidate_dirs: int

    files_indexed: int = 0
    files_skipped: int = 0
    file_names: int = 0
    directories: int = 0

    listing_path: str = ""
    duplicates: List[Dict[str, Any]] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_report(
        error: str,
        cfg: Dict[str, Any],
        summary_extra: Optional[Dict[str, Any]] = None
) -> DuplicateReport:
    """
    Create a failed analysis report.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        DuplicateReport: An immutable error report.
    """
    return DuplicateReport(
        ok=False,
        error=error,
        aggregate_hierarchy=cfg.get("aggregate_hierarchy", False),
        min_shared_files=cfg.get("min_shared_files", 0),
        max_candidate_dirs=cfg.get("max_candidate_dirs", 0),
        summary=summary_extra or {},
    )


def create_success_report(
        cfg: Dict[str, Any],
        stats: Dict[str, int],
        duplicates: Optional[List[Dict[str, Any]]] = None,
        listing_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> DuplicateReport:
    """
    Create a successful analysis report.

    Args:
        cfg: Final configuration used during execution.
        stats: Index statistics (files_indexed, files_skipped, file_names, directories).
        duplicates: Ranked candidates, already described as dictionaries.
        listing_path: Listing file written by a store run.
        summary_extra: Final execution metrics.

    Returns:
        DuplicateReport: An immutable success report.
    """
    return DuplicateReport(
        ok=True,
        error="",
        aggregate_hierarchy=cfg.get("aggregate_hierarchy", False),
        min_shared_files=cfg.get("min_shared_files", 0),
        max_candidate_dirs=cfg.get("max_candidate_dirs", 0),
        files_indexed=stats.get("files_indexed", 0),
        files_skipped=stats.get("files_skipped", 0),
        file_names=stats.get("file_names", 0),
        directories=stats.get("directories", 0),
        listing_path=listing_path,
        duplicates=list(duplicates or []),
        summary=summary_extra or {},
    )
