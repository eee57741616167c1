"""Core domain layer for persistql."""

from persistql.core.entities import (
    ApqConfig,
    GraphQLRequest,
    GraphQLResponse,
    OperationContext,
    PageCacheConfig,
    ServerConfig,
)
from persistql.core.errors import (
    ApqError,
    HashMismatchError,
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
    PageCache,
    PersistedQueryStore,
    QueryHasher,
)

__all__ = [
    # Entities
    "ApqConfig",
    "PageCacheConfig",
    "ServerConfig",
    "GraphQLRequest",
    "GraphQLResponse",
    "OperationContext",
    # Errors
    "ApqError",
    "HashMismatchError",
    "PersistedQueryNotFoundError",
    # Interfaces
    "ICacheBackend",
    "IInvalidator",
    "IKeyBuilder",
    "IResponseCachePolicy",
    "ISerializer",
    # Services
    "ApqPipeline",
    "CacheTagInvalidator",
    "HookDispatcher",
    "PageCache",
    "PersistedQueryStore",
    "QueryHasher",
]
