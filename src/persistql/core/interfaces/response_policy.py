"""Response cache policy interface."""

from typing import Protocol

from persistql.core.entities.operation import GraphQLRequest
from persistql.core.entities.response import GraphQLResponse


class IResponseCachePolicy(Protocol):
    """Contract for keeping ``PersistedQueryNotFound`` out of the page cache.

    Implementations make sure a negative response can never be served
    from a full-page cache once its query has been registered.
    """

    def apply(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
        query_hash: str,
    ) -> None:
        """Adjust the cacheability of a failed replay response.

        Args:
            request: The request that produced the response.
            response: The ``PersistedQueryNotFound`` response.
            query_hash: The hash the client asked for, possibly empty.
        """
        ...
