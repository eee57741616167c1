"""Cache tag invalidator interface."""

from typing import Protocol


class IInvalidator(Protocol):
    """Contract for purging cached artifacts that depend on a persisted query."""

    async def invalidate(self, query_hash: str) -> int:
        """Invalidate the cache tag of a persisted query hash.

        Args:
            query_hash: The persisted query hash.

        Returns:
            Number of cached artifacts dropped.
        """
        ...
