from __future__ import annotations

"""
Generic Frequency Counter.

Provides a reusable multiset that counts occurrences of orderable keys and
supports filtering, trimming and ordered iteration. Used by the file index
to count how many indexed files live directly inside each directory.
"""

import threading
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, Set, Tuple, TypeVar

K = TypeVar("K")

# -----------------------------------------------------------------------------
# FREQUENCY COUNTER
# -----------------------------------------------------------------------------

class FrequencyCounter(Generic[K]):
    """
    Multiset of orderable keys with explicit mutation methods.

    Keys are iterated in their natural order so that every query
    (max lookup, top-k trimming, sorting) is deterministic regardless of
    insertion order. Mutations are serialized by a re-entrant lock.
    """

    def __init__(self, keys: Optional[Iterable[K]] = None):
        self._counts: Dict[K, int] = {}
        self._lock = threading.RLock()
        if keys is not None:
            self.add_all(keys)

    @classmethod
    def count(cls, keys: Iterable[K]) -> "FrequencyCounter[K]":
        """Build a counter holding one occurrence per element of keys."""
        return cls(keys)

    # --- Mutation ---

    def add(self, key: K, n: int = 1) -> "FrequencyCounter[K]":
        """
        Increment the count of a key.

        Args:
            key: Key to increment.
            n: Amount to add (defaults to 1).

        Returns:
            FrequencyCounter: The counter itself, for chaining.
        """
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + n
        return self

    def add_all(self, keys: Iterable[K]) -> "FrequencyCounter[K]":
        with self._lock:
            for key in keys:
                self.add(key)
        return self

    def merge(self, other: "FrequencyCounter[K]") -> "FrequencyCounter[K]":
        """Add every entry of another counter into this one."""
        with self._lock:
            for key, n in other.items():
                self.add(key, n)
        return self

    def set(self, key: K, n: int) -> "FrequencyCounter[K]":
        with self._lock:
            self._counts[key] = n
        return self

    def set_max(self, key: K, n: int) -> "FrequencyCounter[K]":
        """Keep the larger of n and the current count."""
        with self._lock:
            current = self._counts.get(key)
            self._counts[key] = n if current is None else max(n, current)
        return self

    def set_min(self, key: K, n: int) -> "FrequencyCounter[K]":
        """Keep the smaller of n and the current count."""
        with self._lock:
            current = self._counts.get(key)
            self._counts[key] = n if current is None else min(n, current)
        return self

    def remove(self, key: K) -> Optional[int]:
        with self._lock:
            return self._counts.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()

    def copy(self) -> "FrequencyCounter[K]":
        return type(self)().merge(self)

    def exclude_min(self, n: int) -> None:
        """Remove, in place, every key whose count is below n."""
        with self._lock:
            for key in [k for k, c in self._counts.items() if c < n]:
                del self._counts[key]

    def keep_top_k(self, k: int, keep: Optional[Iterable[K]] = None) -> None:
        """
        Retain only the k highest-count keys.

        Ranking follows inverse_sort (count descending, then key order).

        Args:
            k: Number of keys to retain.
            keep: Optional keys that are never removed, ranked or not.
        """
        with self._lock:
            ranked = self.inverse_sort()
            protected = set(keep) if keep is not None else set()
            for key, _ in ranked[max(k, 0):]:
                if key not in protected:
                    del self._counts[key]

    # --- Queries ---

    def get_count(self, key: K) -> int:
        return self._counts.get(key, 0)

    def filter_min(self, n: int) -> Set[K]:
        """Return the keys whose count is at least n, without mutating."""
        return {k for k, c in self._counts.items() if c >= n}

    def get_max(self) -> Optional[K]:
        return self.get_max_excluding(None)

    def get_max_excluding(self, ignore: Optional[Iterable[K]] = None) -> Optional[K]:
        """
        Find the key with the highest count, skipping ignored keys.

        Ties resolve to the first key in key order.

        Returns:
            Optional[K]: The winning key, or None if nothing is left.
        """
        ignored = set(ignore) if ignore is not None else set()
        best: Optional[K] = None
        best_count = -1
        for key, n in self.items():
            if key in ignored:
                continue
            if n > best_count:
                best, best_count = key, n
        return best

    def get_sum(self) -> int:
        return sum(self._counts.values())

    def is_empty(self) -> bool:
        return not self._counts

    def keys(self) -> List[K]:
        return sorted(self._counts)

    def items(self) -> List[Tuple[K, int]]:
        """Snapshot of (key, count) pairs in key order."""
        with self._lock:
            return [(k, self._counts[k]) for k in sorted(self._counts)]

    # --- Ordered views ---

    def sort(self) -> List[Tuple[K, int]]:
        """(key, count) pairs by ascending count, ties by key."""
        return sorted(self.items(), key=lambda kv: kv[1])

    def inverse_sort(self) -> List[Tuple[K, int]]:
        """(key, count) pairs by descending count, ties by key."""
        return sorted(self.items(), key=lambda kv: kv[1], reverse=True)

    def sort_key(self) -> List[Tuple[K, int]]:
        return self.items()

    def inverse_sort_key(self) -> List[Tuple[K, int]]:
        return list(reversed(self.items()))

    # --- Container protocol ---

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def __contains__(self, key: Any) -> bool:
        return key in self._counts

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {n}" for k, n in self.items())
        return f"{type(self).__name__}({{{body}}})"
