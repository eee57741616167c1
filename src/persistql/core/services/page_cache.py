"""Page cache - the full-page response cache around a GraphQL endpoint."""

import logging
from datetime import timedelta

from persistql.core.entities.cache_config import PageCacheConfig
from persistql.core.entities.cache_entry import CacheEntry
from persistql.core.entities.operation import GraphQLRequest, OperationContext
from persistql.core.entities.response import GraphQLResponse
from persistql.core.interfaces.cache_backend import ICacheBackend
from persistql.core.interfaces.key_builder import IKeyBuilder
from persistql.core.interfaces.serializer import ISerializer
from persistql.core.services.hooks import PAGE_CACHE_RESPONSE_PRIORITY, HookDispatcher

logger = logging.getLogger(__name__)

# Carried by every stored page so the page cache can be cleared on its own
PAGE_CACHE_TAG = "http_response"


class PageCache:
    """Caches finalized responses of safe requests.

    Responses are keyed by the request's base query arguments. When a
    response declares cache contexts, a redirect is stored under the base
    key naming those contexts and the response itself goes under a key
    that also includes them. Lookups follow the redirect, so requests
    that only differ in a varied argument never share an entry.

    Every stored entry carries the response's cache tags, so
    ``invalidate`` drops the redirect and the entry together.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        key_builder: IKeyBuilder,
        serializer: ISerializer,
        config: PageCacheConfig | None = None,
    ) -> None:
        """Initialize the page cache.

        Args:
            backend: The cache backend to use for storage.
            key_builder: The key builder for generating page keys.
            serializer: The serializer for encoding/decoding entries.
            config: Optional configuration. Uses defaults if not provided.
        """
        self._backend = backend
        self._key_builder = key_builder
        self._serializer = serializer
        self._config = config or PageCacheConfig()

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> PageCacheConfig:
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total lookups.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def register(self, dispatcher: HookDispatcher) -> None:
        """Store responses from the dispatcher's response listener chain."""
        dispatcher.on_response(self.on_response, priority=PAGE_CACHE_RESPONSE_PRIORITY)

    def is_cacheable_request(self, request: GraphQLRequest) -> bool:
        return self._config.enabled and request.method.upper() in self._config.cacheable_methods

    async def get_cached_response(self, request: GraphQLRequest) -> GraphQLResponse | None:
        """Try to serve a request from the cache.

        Args:
            request: The decoded request.

        Returns:
            The cached response, or None on a miss.
        """
        if not self.is_cacheable_request(request):
            return None

        base_key = self._key_builder.build_page_key(request, self._config.base_query_args)
        entry = await self._load(base_key)

        if entry is not None and entry.redirect:
            key = self._key_builder.build_page_key(
                request,
                self._config.base_query_args,
                list(entry.contexts),
            )
            entry = await self._load(key)

        if entry is None:
            self._misses += 1
            return None

        self._hits += 1
        return entry.to_response()

    async def cache_response(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
    ) -> CacheEntry | None:
        """Store a response if the request and response allow it.

        Nothing is stored for unsafe methods, non-200 responses, a
        ``max_age`` of 0, or when the request's kill switch was triggered.

        Args:
            request: The request that produced the response.
            response: The finalized response.

        Returns:
            The stored entry, or None if the response was not cached.
        """
        if not self.is_cacheable_request(request) or response.status_code != 200:
            return None
        if request.kill_switch.triggered:
            logger.debug("Page cache kill switch triggered, not caching response")
            return None

        metadata = response.metadata
        if metadata.max_age == 0:
            return None

        ttl = timedelta(seconds=metadata.max_age) if metadata.max_age else self._config.default_ttl
        tags = sorted(metadata.tags)
        contexts = sorted(metadata.contexts)

        key = self._key_builder.build_page_key(request, self._config.base_query_args)
        if contexts:
            redirect = CacheEntry.create_redirect(key, contexts, tags=tags, ttl=ttl)
            await self._save(redirect, tags)
            key = self._key_builder.build_page_key(
                request,
                self._config.base_query_args,
                contexts,
            )

        entry = CacheEntry.create(key=key, response=response, ttl=ttl)
        await self._save(entry, tags)
        return entry

    async def on_response(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
        context: OperationContext | None = None,
    ) -> None:
        await self.cache_response(request, response)

    async def invalidate(self, tags: list[str]) -> int:
        """Invalidate cached pages by tags.

        Args:
            tags: List of tags to invalidate.

        Returns:
            Number of entries invalidated.
        """
        return await self._backend.invalidate_tags(tags)

    async def clear(self) -> None:
        """Drop every cached page and reset the statistics.

        Only page entries are removed. Persisted queries sharing the
        backend stay.
        """
        await self._backend.invalidate_tags([PAGE_CACHE_TAG])
        self._hits = 0
        self._misses = 0

    async def _load(self, key: str) -> CacheEntry | None:
        data = await self._backend.get(key)
        if data is None:
            return None
        entry = CacheEntry.from_dict(self._serializer.deserialize(data))
        if entry.is_expired:
            return None
        return entry

    async def _save(self, entry: CacheEntry, tags: list[str]) -> None:
        await self._backend.set(
            entry.key,
            self._serializer.serialize(entry.to_dict()),
            entry.ttl,
            [*tags, PAGE_CACHE_TAG],
        )
