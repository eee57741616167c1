"""Infrastructure layer implementations for persistql."""

from persistql.infrastructure.backends import InMemoryCacheBackend
from persistql.infrastructure.key_builders import DefaultKeyBuilder
from persistql.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
]
