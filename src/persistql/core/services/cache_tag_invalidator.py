"""Cache tag invalidator for persisted queries."""

import logging

from persistql.core.entities.persisted_query import cache_tag
from persistql.core.interfaces.cache_backend import ICacheBackend

logger = logging.getLogger(__name__)


class CacheTagInvalidator:
    """Invalidates the ``apq:<hash>`` tag across cache backends.

    Tags are global: a response cached in any of the backends that
    declared a dependency on the persisted query is dropped.
    """

    def __init__(self, backends: list[ICacheBackend]) -> None:
        self._backends = list(backends)

    async def invalidate(self, query_hash: str) -> int:
        tag = cache_tag(query_hash)
        count = 0
        for backend in self._backends:
            count += await backend.invalidate_tags([tag])
        logger.debug("Invalidated cache tag %s (%d entries)", tag, count)
        return count
