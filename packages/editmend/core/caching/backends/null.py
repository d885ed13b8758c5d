"""No-op cache for runs with caching disabled.

Always reports cache miss, discards all stores.
"""

from typing import Any


class NullCache:
    """
    No-op cache.

    Always reports cache miss, discards all stores.
    """

    def get(self, key: str) -> Any | None:
        """Always returns None."""
        return None

    def set(self, key: str, value: Any) -> None:
        """Discard."""
        pass

    def clear(self) -> None:
        """No-op."""
        pass

    def __len__(self) -> int:
        return 0
