"""Outgoing response entity and its cacheability metadata."""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CacheableMetadata:
    """Cache tags and cache contexts a response depends on.

    Attributes:
        tags: Tags that invalidate every cached copy of the response.
        contexts: Request facets the cached copy must vary by.
        max_age: Seconds the response may be cached. None uses the
            page cache default, 0 forbids caching.
    """

    tags: set[str] = field(default_factory=set)
    contexts: set[str] = field(default_factory=set)
    max_age: int | None = None

    def add_cache_tags(self, tags: list[str]) -> None:
        self.tags.update(tags)

    def add_cache_contexts(self, contexts: list[str]) -> None:
        self.contexts.update(contexts)


@dataclass
class GraphQLResponse:
    """A finalized HTTP response carrying a serialized GraphQL result."""

    content: bytes
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    metadata: CacheableMetadata = field(default_factory=CacheableMetadata)

    def json(self) -> Any:
        """Decode the body.

        Raises:
            ValueError: If the body is not valid JSON.
        """
        return json.loads(self.content)

    @classmethod
    def from_result(
        cls,
        result: dict[str, Any],
        status_code: int = 200,
    ) -> "GraphQLResponse":
        return cls(
            content=json.dumps(result).encode("utf-8"),
            status_code=status_code,
        )
