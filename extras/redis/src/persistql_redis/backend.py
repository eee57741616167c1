"""Redis cache backend."""

import logging
from datetime import timedelta
from typing import Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)

SCAN_BATCH_SIZE = 100


class RedisCacheBackend:
    """Cache backend shared by every process pointing at one Redis.

    All keys live under ``<key_prefix>:``. Each cache tag is a Redis set
    at ``<key_prefix>:tag:<tag>`` listing the full keys written with it,
    so a registration handled by one worker purges pages cached by any
    other.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "persistql",
        default_ttl: Optional[int] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """
        Args:
            redis_url: Connection URL, ignored when ``client`` is given.
            key_prefix: Namespace for values and tag sets.
            default_ttl: Seconds a value lives when ``set`` gets no TTL.
                None stores values without expiry.
            client: Existing asyncio Redis client.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Optional[bytes]:
        return await self._redis.get(self._full_key(key))

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: Optional[timedelta] = None,
        tags: Optional[list[str]] = None,
    ) -> None:
        full_key = self._full_key(key)
        seconds = self._ttl_seconds(ttl)
        if seconds is None:
            await self._redis.set(full_key, value)
        else:
            await self._redis.setex(full_key, seconds, value)

        for tag in tags or ():
            await self._add_to_tag(self._tag_key(tag), full_key, seconds)

    async def delete(self, key: str) -> bool:
        return await self._redis.delete(self._full_key(key)) > 0

    async def exists(self, key: str) -> bool:
        return await self._redis.exists(self._full_key(key)) > 0

    async def clear(self) -> None:
        """Delete every key under the prefix, tag sets included.

        Other data in the same Redis database is left alone.
        """
        cursor = 0
        deleted = 0
        while True:
            cursor, keys = await self._redis.scan(
                cursor, match=f"{self._key_prefix}:*", count=SCAN_BATCH_SIZE
            )
            if keys:
                deleted += await self._redis.delete(*keys)
            if cursor == 0:
                break
        logger.debug("Cleared %d keys under %s", deleted, self._key_prefix)

    async def invalidate_tags(self, tags: list[str]) -> int:
        tag_keys = [self._tag_key(tag) for tag in tags]
        if not tag_keys:
            return 0

        members = await self._redis.sunion(tag_keys)
        count = await self._redis.delete(*members) if members else 0
        await self._redis.delete(*tag_keys)
        return count

    async def _add_to_tag(self, tag_key: str, full_key: str, seconds: Optional[int]) -> None:
        """Add a key to a tag set and keep the set alive as long as its members.

        A tag set holding a key without expiry never expires. Otherwise
        its TTL is raised to the longest member TTL, so sets for tags that
        are never invalidated disappear with the values they index.
        """
        remaining = await self._redis.ttl(tag_key)
        await self._redis.sadd(tag_key, full_key)

        if seconds is None:
            await self._redis.persist(tag_key)
        # -2: the set did not exist, -1: it already has no expiry
        elif remaining == -2 or 0 <= remaining < seconds:
            await self._redis.expire(tag_key, seconds)

    def _ttl_seconds(self, ttl: Optional[timedelta]) -> Optional[int]:
        if ttl is None:
            return self._default_ttl
        # SETEX rejects zero, round sub-second TTLs up
        return max(1, int(ttl.total_seconds()))

    def _full_key(self, key: str) -> str:
        if key.startswith(f"{self._key_prefix}:"):
            return key
        return f"{self._key_prefix}:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._key_prefix}:tag:{tag}"

    async def close(self) -> None:
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheBackend":
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        await self.close()
