"""Core interfaces (Protocol classes) for persistql."""

from persistql.core.interfaces.cache_backend import ICacheBackend
from persistql.core.interfaces.invalidator import IInvalidator
from persistql.core.interfaces.key_builder import IKeyBuilder
from persistql.core.interfaces.response_policy import IResponseCachePolicy
from persistql.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "IInvalidator",
    "IKeyBuilder",
    "IResponseCachePolicy",
    "ISerializer",
]
