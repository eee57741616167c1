"""Pytest configuration for persistql tests."""

import pytest

from persistql import (
    ApqConfig,
    ApqPipeline,
    CacheTagInvalidator,
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    JsonSerializer,
    PageCache,
    PageCacheConfig,
    PersistedQueryStore,
    create_response_cache_policy,
)


@pytest.fixture
def backend() -> InMemoryCacheBackend:
    return InMemoryCacheBackend(maxsize=100)


@pytest.fixture
def store(backend: InMemoryCacheBackend) -> PersistedQueryStore:
    return PersistedQueryStore(
        backend=backend,
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
    )


@pytest.fixture
def page_cache(backend: InMemoryCacheBackend) -> PageCache:
    return PageCache(
        backend=backend,
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
        config=PageCacheConfig(),
    )


def _build_pipeline(
    backend: InMemoryCacheBackend,
    config: ApqConfig | None = None,
) -> ApqPipeline:
    """Create a pipeline whose store and page cache share one backend."""
    config = config or ApqConfig()
    store = PersistedQueryStore(
        backend=backend,
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
        config=config,
    )
    return ApqPipeline(
        store=store,
        invalidator=CacheTagInvalidator([backend]),
        response_policy=create_response_cache_policy(config.response_policy),
    )


@pytest.fixture
def pipeline(backend: InMemoryCacheBackend) -> ApqPipeline:
    return _build_pipeline(backend)


@pytest.fixture
def make_pipeline():
    """Factory fixture for pipelines with a custom configuration."""
    return _build_pipeline
