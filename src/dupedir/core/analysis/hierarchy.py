from __future__ import annotations

"""
Hierarchy Accumulator.

Links every known directory to its parent (creating missing ancestors on
the way) and computes, bottom-up, the number of indexed files contained
in each directory's whole subtree.
"""

import logging
from typing import List, Tuple

from dupedir.core.index.registry import DirectoryRegistry, parent_path
from dupedir.domain.counter import FrequencyCounter
from dupedir.domain.models import Directory

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def accumulate_hierarchy(registry: DirectoryRegistry, files_per_dir: FrequencyCounter[str]) -> List[Directory]:
    """
    Compute direct and subtree file counts for every registered directory.

    Parents that were never referenced directly are created lazily and
    processed in the same pass. Links are rebuilt from scratch, so running
    this twice yields the same counts.

    Args:
        registry: Registry owning the directories.
        files_per_dir: Direct file count per directory path.

    Returns:
        List[Directory]: The root directories of the forest.
    """
    for directory in registry:
        directory.children = []
        directory.parent_id = None

    # The registry grows while parents are created, so walk it by id
    roots: List[Directory] = []
    dir_id = 0
    while dir_id < len(registry):
        directory = registry.by_id(dir_id)
        directory.direct_files = files_per_dir.get_count(directory.path)
        directory.subtree_files = directory.direct_files

        parent = parent_path(directory.path)
        if parent is None:
            roots.append(directory)
        else:
            parent_dir = registry.get_or_create(parent)
            parent_dir.children.append(directory.id)
            directory.parent_id = parent_dir.id
        dir_id += 1

    for root in roots:
        _accumulate_subtree(registry, root)

    logger.debug(f"Hierarchy accumulated over {len(registry):,} directories ({len(roots)} roots)")
    return roots

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _accumulate_subtree(registry: DirectoryRegistry, root: Directory) -> None:
    """
    Post-order walk adding each child's subtree count into its parent.

    Iterative so that arbitrarily deep trees do not hit the recursion limit.
    """
    stack: List[Tuple[Directory, bool]] = [(root, False)]
    while stack:
        directory, children_done = stack.pop()
        if children_done:
            parent = registry.parent_of(directory)
            if parent is not None:
                parent.subtree_files += directory.subtree_files
            continue

        stack.append((directory, True))
        for child in reversed(registry.children_of(directory)):
            stack.append((child, False))
