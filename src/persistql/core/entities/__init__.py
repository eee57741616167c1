"""Domain entities for persistql."""

from persistql.core.entities.apq_config import (
    AUTOMATIC_PERSISTED_QUERY,
    ApqConfig,
    ResponsePolicyVariant,
    ServerConfig,
)
from persistql.core.entities.cache_config import PageCacheConfig
from persistql.core.entities.cache_entry import CacheEntry
from persistql.core.entities.operation import (
    VARIABLES_CACHE_CONTEXT,
    ApqState,
    GraphQLRequest,
    OperationContext,
    PageCacheKillSwitch,
    persisted_query_hash,
)
from persistql.core.entities.persisted_query import (
    CACHE_TAG_PREFIX,
    PersistedQueryRecord,
    cache_tag,
)
from persistql.core.entities.response import CacheableMetadata, GraphQLResponse

__all__ = [
    "ApqConfig",
    "ResponsePolicyVariant",
    "ServerConfig",
    "AUTOMATIC_PERSISTED_QUERY",
    "PageCacheConfig",
    "CacheEntry",
    "ApqState",
    "GraphQLRequest",
    "OperationContext",
    "PageCacheKillSwitch",
    "VARIABLES_CACHE_CONTEXT",
    "persisted_query_hash",
    "PersistedQueryRecord",
    "CACHE_TAG_PREFIX",
    "cache_tag",
    "CacheableMetadata",
    "GraphQLResponse",
]
