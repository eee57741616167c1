"""Persisted query store - hash to query text persistence."""

import logging

from persistql.core.entities.apq_config import ApqConfig
from persistql.core.entities.persisted_query import PersistedQueryRecord
from persistql.core.interfaces.cache_backend import ICacheBackend
from persistql.core.interfaces.key_builder import IKeyBuilder
from persistql.core.interfaces.serializer import ISerializer

logger = logging.getLogger(__name__)


class PersistedQueryStore:
    """Key/value persistence of hash to query text over a cache backend.

    The store adds no consistency guarantees of its own: records may be
    evicted or flushed whenever the backend decides to. It never emits
    invalidations either; callers invalidate before they ``put``.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        key_builder: IKeyBuilder,
        serializer: ISerializer,
        config: ApqConfig | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            backend: The cache backend holding the records.
            key_builder: Builds the backend key for a hash.
            serializer: Encodes records to bytes.
            config: Optional APQ configuration. Uses defaults if not provided.
        """
        self._backend = backend
        self._key_builder = key_builder
        self._serializer = serializer
        self._config = config or ApqConfig()

    async def get(self, query_hash: str) -> str | None:
        """Look up the query text stored under a hash.

        Args:
            query_hash: The persisted query hash.

        Returns:
            The exact stored query text, or None if absent.
        """
        key = self._key_builder.build_persisted_query_key(query_hash)
        data = await self._backend.get(key)
        if data is None:
            return None

        record = PersistedQueryRecord.from_dict(self._serializer.deserialize(data))
        if record.hash != query_hash:
            logger.warning(
                "Persisted query under %s carries hash %s, ignoring it",
                key,
                record.hash,
            )
            return None
        return record.query

    async def put(self, query_hash: str, query: str) -> None:
        """Store or overwrite the query text for a hash.

        Args:
            query_hash: The persisted query hash.
            query: The query text the hash was verified against.
        """
        key = self._key_builder.build_persisted_query_key(query_hash)
        record = PersistedQueryRecord(hash=query_hash, query=query)
        await self._backend.set(
            key,
            self._serializer.serialize(record.to_dict()),
            self._config.persisted_query_ttl,
        )
