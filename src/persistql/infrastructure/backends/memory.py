"""Process-local cache backend."""

import math
import time
from collections.abc import Callable
from datetime import timedelta
from typing import NamedTuple

from cachetools import TLRUCache  # type: ignore[import-untyped]


class _Stored(NamedTuple):
    value: bytes
    ttl_seconds: float | None


class InMemoryCacheBackend:
    """Tag-aware backend for single-process servers.

    Values sit in a cachetools ``TLRUCache``: every entry expires after
    its own TTL (or ``default_ttl``), and the least recently used entry
    is evicted once ``maxsize`` is reached. Persisted queries are
    usually stored without a TTL and then only leave through eviction.

    A separate index maps cache tags to keys so that a registration can
    purge every page that was tagged with its hash. Index entries for
    keys that were evicted or expired are pruned whenever the index
    outgrows ``maxsize``, so it stays bounded by the cache size.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        default_ttl: float | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            maxsize: Maximum number of stored values.
            default_ttl: Seconds a value lives when ``set`` gets no TTL.
                None keeps it until evicted.
            timer: Clock used for expiry.
        """
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._entries: TLRUCache[str, _Stored] = TLRUCache(
            maxsize=maxsize,
            ttu=self._expiry,
            timer=timer,
        )
        self._tag_index: dict[str, set[str]] = {}
        self._key_tags: dict[str, frozenset[str]] = {}

    @staticmethod
    def _expiry(key: str, stored: _Stored, now: float) -> float:
        if stored.ttl_seconds is None:
            return math.inf
        return now + stored.ttl_seconds

    async def get(self, key: str) -> bytes | None:
        stored = self._entries.get(key)
        return stored.value if stored is not None else None

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
        tags: list[str] | None = None,
    ) -> None:
        seconds = ttl.total_seconds() if ttl is not None else self._default_ttl
        self._entries[key] = _Stored(value, seconds)

        # A rewrite replaces the key's tags
        self._unindex(key)
        if tags:
            self._key_tags[key] = frozenset(tags)
            for tag in tags:
                self._tag_index.setdefault(tag, set()).add(key)
            if len(self._key_tags) > self._maxsize:
                self._prune_index()

    async def delete(self, key: str) -> bool:
        self._unindex(key)
        return self._entries.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self._entries

    async def clear(self) -> None:
        self._entries.clear()
        self._tag_index.clear()
        self._key_tags.clear()

    async def invalidate_tags(self, tags: list[str]) -> int:
        keys = set()
        for tag in tags:
            keys |= self._tag_index.pop(tag, set())
        deleted = [key for key in keys if await self.delete(key)]
        return len(deleted)

    def tagged_keys(self, tag: str) -> "set[str]":
        """Live keys currently indexed under ``tag``."""
        return {key for key in self._tag_index.get(tag, ()) if key in self._entries}

    @property
    def tag_count(self) -> int:
        """Number of tags currently held in the index."""
        return len(self._tag_index)

    def _unindex(self, key: str) -> None:
        for tag in self._key_tags.pop(key, ()):
            keys = self._tag_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tag_index[tag]

    def _prune_index(self) -> None:
        # Membership tests skip expired entries
        for key in [key for key in self._key_tags if key not in self._entries]:
            self._unindex(key)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def maxsize(self) -> int:
        return self._maxsize
