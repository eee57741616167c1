"""APQ-enabled GraphQL ASGI app for Ariadne."""

from typing import Any

from ariadne.asgi import GraphQL

from persistql.adapters.ariadne.handler import ApqGraphQLHTTPHandler
from persistql.core.entities.apq_config import ServerConfig
from persistql.core.services.apq_pipeline import ApqPipeline
from persistql.core.services.page_cache import PageCache


class ApqGraphQL(GraphQL):
    """Drop-in replacement for Ariadne's GraphQL with automatic persisted queries.

    Example::

        app = ApqGraphQL(
            schema,
            pipeline=pipeline,
            page_cache=page_cache,
            server=ServerConfig.with_apq("default"),
        )
    """

    def __init__(
        self,
        schema: Any,
        pipeline: ApqPipeline,
        server: ServerConfig | None = None,
        page_cache: PageCache | None = None,
        **kwargs: Any,
    ) -> None:
        http_handler = ApqGraphQLHTTPHandler(
            pipeline=pipeline,
            server=server,
            page_cache=page_cache,
        )

        super().__init__(schema, http_handler=http_handler, **kwargs)

        self._pipeline = pipeline
        self._page_cache = page_cache
        self._apq_handler = http_handler

    @property
    def pipeline(self) -> ApqPipeline:
        return self._pipeline

    @property
    def page_cache(self) -> PageCache | None:
        return self._page_cache

    @property
    def cache_stats(self) -> dict[str, int]:
        if self._page_cache is None:
            return {"hits": 0, "misses": 0, "total": 0}
        return self._page_cache.stats
