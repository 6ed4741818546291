"""Bounded FIFO cache of query results."""

import threading
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class QueryCache(Generic[T]):
    """
    Insertion-ordered cache with first-in-first-out eviction.

    Reading an entry does not refresh its position. Values are returned as
    stored, so repeated hits hand back the same object.
    """

    def __init__(self, max_size: int = 100) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: Dict[str, T] = {}
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0, "evictions": 0}

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            if key in self._entries:
                self._stats["hits"] += 1
                return self._entries[key]
            self._stats["misses"] += 1
            return None

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = value
            while len(self._entries) > self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                self._stats["evictions"] += 1

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            stats = dict(self._stats)
            stats["size"] = len(self._entries)
            return stats
