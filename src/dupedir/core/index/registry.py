from __future__ import annotations

"""
Directory Registry.

Owns every Directory record of an analysis run. Records are stored in an
arena indexed by id, with a path lookup table so that a path always
resolves to the same record.
"""

import os
from typing import Dict, Iterator, List, Optional

from dupedir.domain.models import Directory

# -----------------------------------------------------------------------------
# PATH HELPERS
# -----------------------------------------------------------------------------

def normalize_dir_path(path: str) -> str:
    """Normalize a directory path into its absolute canonical form."""
    return os.path.normpath(os.path.abspath(path))


def parent_path(path: str) -> Optional[str]:
    """
    Resolve the parent of a normalized absolute path.

    Returns:
        Optional[str]: The parent path, or None at a filesystem root.
    """
    parent = os.path.dirname(path)
    if not parent or parent == path:
        return None
    return parent


def is_same_or_ancestor(ancestor: str, path: str) -> bool:
    """
    Check whether ancestor equals path or contains it.

    The comparison is done on whole path components, so '/a' is not an
    ancestor of '/ab'.
    """
    if ancestor == path:
        return True
    prefix = ancestor if ancestor.endswith(os.sep) else ancestor + os.sep
    return path.startswith(prefix)

# -----------------------------------------------------------------------------
# REGISTRY
# -----------------------------------------------------------------------------

class DirectoryRegistry:
    """
    Arena of Directory records keyed by id, with lookup by path.
    """

    def __init__(self):
        self._dirs: List[Directory] = []
        self._ids_by_path: Dict[str, int] = {}

    def get_or_create(self, path: str) -> Directory:
        """
        Return the canonical record for a path, creating it on first sight.

        Args:
            path: Normalized absolute directory path.

        Returns:
            Directory: The record owned by this registry.
        """
        dir_id = self._ids_by_path.get(path)
        if dir_id is not None:
            return self._dirs[dir_id]

        directory = Directory(id=len(self._dirs), path=path)
        self._dirs.append(directory)
        self._ids_by_path[path] = directory.id
        return directory

    def get(self, path: str) -> Optional[Directory]:
        dir_id = self._ids_by_path.get(path)
        return None if dir_id is None else self._dirs[dir_id]

    def by_id(self, dir_id: int) -> Directory:
        return self._dirs[dir_id]

    def parent_of(self, directory: Directory) -> Optional[Directory]:
        if directory.parent_id is None:
            return None
        return self._dirs[directory.parent_id]

    def children_of(self, directory: Directory) -> List[Directory]:
        return [self._dirs[i] for i in directory.children]

    def ancestors(self, directory: Directory) -> Iterator[Directory]:
        """Yield the directory itself, then each of its linked parents."""
        current: Optional[Directory] = directory
        while current is not None:
            yield current
            current = self.parent_of(current)

    def roots(self) -> List[Directory]:
        return [d for d in self._dirs if d.parent_id is None]

    def __len__(self) -> int:
        return len(self._dirs)

    def __iter__(self) -> Iterator[Directory]:
        return iter(list(self._dirs))

    def __contains__(self, path: object) -> bool:
        return path in self._ids_by_path
