"""APQ protocol errors.

Both APQ conditions reach the client as a GraphQL error envelope inside
an HTTP 200 response, never as a transport-level failure.
"""

from typing import Any

# Shared with GraphQL client libraries; must stay verbatim
PERSISTED_QUERY_NOT_FOUND = "PersistedQueryNotFound"
HASH_MISMATCH_MESSAGE = "Provided sha does not match query"


class ApqError(Exception):
    """Base class for request-terminating APQ protocol errors."""

    category = "request"

    def __init__(self, message: str, category: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category

    def to_error(self) -> dict[str, Any]:
        """Return the error in GraphQL error shape."""
        return {"message": self.message, "extensions": {"category": self.category}}

    def to_result(self) -> dict[str, Any]:
        """Return a GraphQL result envelope holding only this error."""
        return {"errors": [self.to_error()]}


class HashMismatchError(ApqError):
    """The declared hash does not match the SHA-256 of the supplied query."""

    category = "graphql"

    def __init__(self) -> None:
        super().__init__(HASH_MISMATCH_MESSAGE)


class PersistedQueryNotFoundError(ApqError):
    """A hash-only request named a query that is not in the store."""

    category = "request"

    def __init__(self) -> None:
        super().__init__(PERSISTED_QUERY_NOT_FOUND)


class InvalidRequestError(ValueError):
    """The HTTP request could not be decoded into a GraphQL operation."""
