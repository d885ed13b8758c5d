"""In-memory caching for edit corrections.

This module provides small, process-local caches:
- Bounded least-recently-used store for corrected edits
- No-op cache for runs with caching disabled
- Content fingerprints used as cache keys

Key features:
- Fixed capacity with LRU eviction
- Thread-safe get/set/clear
- Deterministic SHA256 fingerprints of ordered inputs
"""

from editmend.core.caching.backends.lru import CacheStats, LRUCache
from editmend.core.caching.backends.null import NullCache
from editmend.core.caching.fingerprint import compute_fingerprint
from editmend.core.caching.protocols import Cache

__all__ = [
    # Core
    "Cache",
    "CacheStats",
    # Backends
    "LRUCache",
    "NullCache",
    # Utils
    "compute_fingerprint",
]
