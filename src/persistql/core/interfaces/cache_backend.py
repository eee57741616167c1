"""Cache backend interface."""

from datetime import timedelta
from typing import Protocol


class ICacheBackend(Protocol):
    """Byte storage shared by the persisted query store and the page cache.

    Keys are plain strings. A value may be indexed under cache tags when
    it is written; ``invalidate_tags`` then drops every value carrying
    one of the tags, which is how a registration purges the cached
    ``PersistedQueryNotFound`` pages for its hash. Each call must be
    atomic on its own. No guarantee spans several calls.
    """

    async def get(self, key: str) -> bytes | None:
        """Return the stored value, or None when missing or expired."""
        ...

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> None:
        """Store ``value`` under ``key``, overwriting any previous value.

        Args:
            key: Storage key.
            value: Encoded value.
            ttl: Lifetime of the value. None defers to the backend.
            tags: Cache tags the key is indexed under.
        """
        ...

    async def delete(self, key: str) -> bool:
        """Remove a key. Returns whether it was present."""
        ...

    async def exists(self, key: str) -> bool: ...

    async def clear(self) -> None:
        """Drop every value and tag index owned by this backend."""
        ...

    async def invalidate_tags(self, tags: list[str]) -> int:
        """Delete all values indexed under any of ``tags``.

        Unknown tags are ignored, so invalidating twice is harmless.

        Returns:
            Number of values deleted.
        """
        ...
