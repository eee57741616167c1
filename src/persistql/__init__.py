"""persistql - Automatic Persisted Queries for GraphQL servers.

Implements the APQ protocol: clients send the SHA-256 hash of a query
instead of its text, registering the text once by sending both. The
package verifies hashes, persists queries in a pluggable cache backend,
and keeps ``PersistedQueryNotFound`` answers from being entombed in a
full-page cache.

Example with Ariadne:
    from ariadne import QueryType, make_executable_schema
    from persistql import (
        ApqPipeline,
        CacheTagInvalidator,
        DefaultKeyBuilder,
        InMemoryCacheBackend,
        JsonSerializer,
        PageCache,
        PersistedQueryStore,
        ServerConfig,
        create_response_cache_policy,
    )
    from persistql.adapters.ariadne import ApqGraphQL

    backend = InMemoryCacheBackend()
    store = PersistedQueryStore(
        backend=backend,
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
    )
    page_cache = PageCache(
        backend=backend,
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
    )
    pipeline = ApqPipeline(
        store=store,
        invalidator=CacheTagInvalidator([backend]),
        response_policy=create_response_cache_policy("tag"),
    )

    app = ApqGraphQL(
        schema,
        pipeline=pipeline,
        page_cache=page_cache,
        server=ServerConfig.with_apq("default"),
    )
"""

from persistql.core.entities import (
    AUTOMATIC_PERSISTED_QUERY,
    VARIABLES_CACHE_CONTEXT,
    ApqConfig,
    ApqState,
    CacheableMetadata,
    CacheEntry,
    GraphQLRequest,
    GraphQLResponse,
    OperationContext,
    PageCacheConfig,
    PageCacheKillSwitch,
    PersistedQueryRecord,
    ResponsePolicyVariant,
    ServerConfig,
    cache_tag,
)
from persistql.core.errors import (
    HASH_MISMATCH_MESSAGE,
    PERSISTED_QUERY_NOT_FOUND,
    ApqError,
    HashMismatchError,
    InvalidRequestError,
    PersistedQueryNotFoundError,
)
from persistql.core.interfaces import (
    ICacheBackend,
    IInvalidator,
    IKeyBuilder,
    IResponseCachePolicy,
    ISerializer,
)
from persistql.core.services import (
    ApqPipeline,
    CacheTagInvalidator,
    HookDispatcher,
    KillSwitchResponseCachePolicy,
    PageCache,
    PersistedQueryStore,
    QueryHasher,
    TaggingResponseCachePolicy,
    create_response_cache_policy,
)
from persistql.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    JsonSerializer,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Configuration
    "ApqConfig",
    "PageCacheConfig",
    "ServerConfig",
    "ResponsePolicyVariant",
    "AUTOMATIC_PERSISTED_QUERY",
    # Request / response entities
    "GraphQLRequest",
    "GraphQLResponse",
    "OperationContext",
    "ApqState",
    "CacheableMetadata",
    "CacheEntry",
    "PageCacheKillSwitch",
    "PersistedQueryRecord",
    "VARIABLES_CACHE_CONTEXT",
    "cache_tag",
    # Errors
    "ApqError",
    "HashMismatchError",
    "PersistedQueryNotFoundError",
    "InvalidRequestError",
    "PERSISTED_QUERY_NOT_FOUND",
    "HASH_MISMATCH_MESSAGE",
    # Core interfaces
    "ICacheBackend",
    "IInvalidator",
    "IKeyBuilder",
    "IResponseCachePolicy",
    "ISerializer",
    # Core services
    "ApqPipeline",
    "CacheTagInvalidator",
    "HookDispatcher",
    "PageCache",
    "PersistedQueryStore",
    "QueryHasher",
    "TaggingResponseCachePolicy",
    "KillSwitchResponseCachePolicy",
    "create_response_cache_policy",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
]
