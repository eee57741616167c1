"""Key builder interface."""

from typing import Protocol

from persistql.core.entities.operation import GraphQLRequest


class IKeyBuilder(Protocol):
    """Contract for building backend keys.

    Key builders create deterministic keys for persisted query records
    and for page cache entries.
    """

    def build_persisted_query_key(self, query_hash: str) -> str:
        """Build the key a persisted query is stored under.

        Args:
            query_hash: The SHA-256 hash of the query.

        Returns:
            The backend key.
        """
        ...

    def build_page_key(
        self,
        request: GraphQLRequest,
        base_query_args: tuple[str, ...],
        contexts: list[str] | None = None,
    ) -> str:
        """Build the page cache key for a request.

        Args:
            request: The decoded request.
            base_query_args: Query-string arguments that always key a page.
            contexts: Cache contexts that add further request facets.

        Returns:
            The backend key.
        """
        ...
