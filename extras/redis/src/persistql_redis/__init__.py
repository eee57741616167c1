"""Redis backend for persistql."""

from persistql_redis.backend import RedisCacheBackend

__all__ = ["RedisCacheBackend"]
