"""Page cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class PageCacheConfig:
    """Configuration for the full-page response cache.

    Key prefixes belong to the injected key builder.

    The page cache keys every response by the request's base query
    arguments. Any other query argument only becomes part of the key
    when a response declares a ``url.query_args:<name>`` cache context
    for it.
    """

    enabled: bool = True
    default_ttl: timedelta | None = None

    # Only safe methods are ever served from or stored in the cache
    cacheable_methods: tuple[str, ...] = ("GET",)
    base_query_args: tuple[str, ...] = ("query", "operationName", "extensions")

    def __post_init__(self) -> None:
        """Set default TTL if not provided."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(minutes=5)
