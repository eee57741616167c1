"""Core services for persistql."""

from persistql.core.services.apq_pipeline import ApqPipeline, is_persisted_query_not_found
from persistql.core.services.cache_tag_invalidator import CacheTagInvalidator
from persistql.core.services.hooks import (
    APQ_RESPONSE_PRIORITY,
    PAGE_CACHE_RESPONSE_PRIORITY,
    HookDispatcher,
)
from persistql.core.services.page_cache import PageCache
from persistql.core.services.persisted_query_store import PersistedQueryStore
from persistql.core.services.query_hasher import QueryHasher
from persistql.core.services.response_cache_policy import (
    KillSwitchResponseCachePolicy,
    TaggingResponseCachePolicy,
    create_response_cache_policy,
)

__all__ = [
    "ApqPipeline",
    "is_persisted_query_not_found",
    "CacheTagInvalidator",
    "HookDispatcher",
    "APQ_RESPONSE_PRIORITY",
    "PAGE_CACHE_RESPONSE_PRIORITY",
    "PageCache",
    "PersistedQueryStore",
    "QueryHasher",
    "TaggingResponseCachePolicy",
    "KillSwitchResponseCachePolicy",
    "create_response_cache_policy",
]
