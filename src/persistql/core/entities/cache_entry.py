"""Page cache entry entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from persistql.core.entities.response import CacheableMetadata, GraphQLResponse


@dataclass(frozen=True)
class CacheEntry:
    """Immutable page cache entry value object.

    Either a stored response, or a redirect: a marker under a base key
    naming the cache contexts that vary the real entry's key.
    """

    key: str
    created_at: datetime
    content: str = ""
    status_code: int = 200
    ttl: timedelta | None = None
    tags: tuple[str, ...] = ()
    contexts: tuple[str, ...] = ()
    redirect: bool = False

    @property
    def expires_at(self) -> datetime | None:
        """Calculate expiration time.

        Returns:
            The datetime when this entry expires, or None if no TTL.
        """
        if self.ttl is None:
            return None
        return self.created_at + self.ttl

    @property
    def is_expired(self) -> bool:
        """Check if entry has expired.

        Backends may keep an entry past its own TTL (the in-memory
        backend only has a global one), so readers check this too.
        """
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) > self.expires_at

    def to_response(self) -> GraphQLResponse:
        """Rebuild the cached response."""
        return GraphQLResponse(
            content=self.content.encode("utf-8"),
            status_code=self.status_code,
            metadata=CacheableMetadata(
                tags=set(self.tags),
                contexts=set(self.contexts),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "created_at": self.created_at,
            "content": self.content,
            "status_code": self.status_code,
            "ttl": self.ttl.total_seconds() if self.ttl is not None else None,
            "tags": list(self.tags),
            "contexts": list(self.contexts),
            "redirect": self.redirect,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheEntry":
        ttl = data.get("ttl")
        return cls(
            key=data["key"],
            created_at=data["created_at"],
            content=data.get("content", ""),
            status_code=data.get("status_code", 200),
            ttl=timedelta(seconds=ttl) if ttl is not None else None,
            tags=tuple(data.get("tags", ())),
            contexts=tuple(data.get("contexts", ())),
            redirect=data.get("redirect", False),
        )

    @classmethod
    def create(
        cls,
        key: str,
        response: GraphQLResponse,
        ttl: timedelta | None = None,
    ) -> "CacheEntry":
        """Factory method to create an entry from a response.

        Args:
            key: The cache key.
            response: The response to store.
            ttl: Optional time-to-live.

        Returns:
            A new CacheEntry instance.
        """
        return cls(
            key=key,
            created_at=datetime.now(timezone.utc),
            content=response.content.decode("utf-8"),
            status_code=response.status_code,
            ttl=ttl,
            tags=tuple(sorted(response.metadata.tags)),
            contexts=tuple(sorted(response.metadata.contexts)),
        )

    @classmethod
    def create_redirect(
        cls,
        key: str,
        contexts: list[str],
        tags: list[str] | None = None,
        ttl: timedelta | None = None,
    ) -> "CacheEntry":
        """Factory method for a redirect naming the contexts that vary ``key``."""
        return cls(
            key=key,
            created_at=datetime.now(timezone.utc),
            ttl=ttl,
            tags=tuple(sorted(tags or ())),
            contexts=tuple(sorted(contexts)),
            redirect=True,
        )
