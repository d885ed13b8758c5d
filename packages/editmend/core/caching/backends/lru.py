"""Bounded in-memory cache with least-recently-used eviction."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import logging
import threading
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache counters."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0


class LRUCache(Generic[V]):
    """
    Fixed-capacity key/value cache with LRU eviction.

    Both ``get`` and ``set`` mark a key as most recently used. Once the
    number of entries exceeds ``max_size`` the least recently used entry
    is dropped. All operations hold a lock, so the cache can be shared
    between tasks on one event loop and between threads.
    """

    def __init__(self, max_size: int) -> None:
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of entries (must be >= 1)

        Raises:
            ValueError: If max_size is less than 1
        """
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")

        self.max_size = max_size
        self._entries: OrderedDict[str, V] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> V | None:
        """Look up a value and mark it as recently used. None on miss."""
        with self._lock:
            if key not in self._entries:
                self._misses += 1
                return None
            self._hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]

    def set(self, key: str, value: V) -> None:
        """Insert or refresh a value, evicting the LRU entry when over capacity."""
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            self._entries[key] = value

            while len(self._entries) > self.max_size:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug(f"LRU cache evicted {evicted_key[:12]}")

    def clear(self) -> None:
        """Remove every entry. Counters are reset too."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def __contains__(self, key: object) -> bool:
        # Membership checks do not touch recency
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> CacheStats:
        """Current counters."""
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                size=len(self._entries),
            )
