"""Protocols for cache backends.

Defines the key/value Cache protocol shared by the in-memory backends.
"""

from typing import Protocol, TypeVar

V = TypeVar("V")


class Cache(Protocol[V]):
    """
    Protocol for cache backends.

    All implementations must support:
    - Miss semantics via None (never raise on a missing key)
    - Safe concurrent access from multiple in-flight tasks
    - Unconditional clear
    """

    def get(self, key: str) -> V | None:
        """
        Look up a cached value.

        Args:
            key: Cache key (content fingerprint)

        Returns:
            Cached value, or None on miss
        """
        ...

    def set(self, key: str, value: V) -> None:
        """
        Insert or refresh a cached value.

        Args:
            key: Cache key (content fingerprint)
            value: Value to cache
        """
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def __len__(self) -> int:
        """Number of entries currently held."""
        ...
