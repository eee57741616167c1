"""APQ-aware HTTP handler for Ariadne GraphQL."""

import logging
from typing import Any

from ariadne.asgi.handlers import GraphQLHTTPHandler
from starlette.requests import Request
from starlette.responses import Response

from persistql.core.entities.apq_config import ServerConfig
from persistql.core.entities.operation import GraphQLRequest, OperationContext
from persistql.core.entities.response import GraphQLResponse
from persistql.core.errors import (
    ApqError,
    InvalidRequestError,
    PersistedQueryNotFoundError,
)
from persistql.core.services.apq_pipeline import ApqPipeline
from persistql.core.services.hooks import HookDispatcher
from persistql.core.services.page_cache import PageCache

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class ApqGraphQLHTTPHandler(GraphQLHTTPHandler):
    """HTTP handler that speaks the automatic persisted queries protocol.

    GET requests are executed when they carry a ``query`` or an
    ``extensions`` argument, so hash-only requests work over GET and can
    be served by the page cache. JSON POST requests are executed as
    usual. Everything else falls back to Ariadne's own handling.

    Per request:
    - Cacheable requests are looked up in the page cache first.
    - Before-operation hooks run (APQ verification and registration).
    - An unresolved persisted hash answers ``PersistedQueryNotFound``.
    - The query is executed by Ariadne.
    - Response hooks run (APQ policy, then the page cache).

    APQ errors are returned with HTTP 200 inside a GraphQL error envelope.
    """

    def __init__(
        self,
        pipeline: ApqPipeline | None = None,
        server: ServerConfig | None = None,
        page_cache: PageCache | None = None,
        dispatcher: HookDispatcher | None = None,
    ) -> None:
        super().__init__()
        self._server = server or ServerConfig.with_apq("default")
        self._dispatcher = dispatcher or HookDispatcher()
        self._pipeline = pipeline
        self._page_cache = page_cache

        if pipeline is not None:
            pipeline.register(self._dispatcher)
        if page_cache is not None:
            page_cache.register(self._dispatcher)

    @property
    def server(self) -> ServerConfig:
        return self._server

    @property
    def dispatcher(self) -> HookDispatcher:
        return self._dispatcher

    async def handle_request(self, request: Request) -> Response:
        if not self._is_operation_request(request):
            return await super().handle_request(request)

        try:
            graphql_request = await self.extract_graphql_request(request)
        except InvalidRequestError as e:
            return self._to_http_response(
                GraphQLResponse.from_result({"errors": [{"message": str(e)}]}, status_code=400)
            )

        response = await self.process_request(request, graphql_request)
        return self._to_http_response(response)

    async def extract_graphql_request(self, request: Request) -> GraphQLRequest:
        """Decode a Starlette request into a GraphQL request.

        Raises:
            InvalidRequestError: If the request cannot be decoded.
        """
        params = dict(request.query_params)
        if request.method == "GET":
            return GraphQLRequest.from_query_params(params)

        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidRequestError("Request body is not a valid JSON") from e
        return GraphQLRequest.from_body(body, method=request.method, query_params=params)

    async def process_request(
        self,
        request: Any,
        graphql_request: GraphQLRequest,
    ) -> GraphQLResponse:
        """Serve a decoded request from the page cache or by executing it."""
        if self._page_cache is not None:
            cached = await self._page_cache.get_cached_response(graphql_request)
            if cached is not None:
                cached.headers["X-Cache"] = "HIT"
                return cached

        context = OperationContext.from_request(graphql_request, self._server)
        response = await self.execute_operation(request, context)
        response.metadata.add_cache_contexts(sorted(context.cache_contexts))

        await self._dispatcher.dispatch_response(graphql_request, response, context)

        response.headers["X-Cache"] = "MISS"
        return response

    async def execute_operation(
        self,
        request: Any,
        context: OperationContext,
    ) -> GraphQLResponse:
        """Run before-operation hooks, then execute the resolved query."""
        try:
            await self._dispatcher.dispatch_before_operation(context)
            self.resolve_query(context)
        except ApqError as error:
            return GraphQLResponse.from_result(error.to_result())

        success, result = await self.execute_graphql_query(request, context.to_data())
        return GraphQLResponse.from_result(result, status_code=200 if success else 400)

    def resolve_query(self, context: OperationContext) -> str | None:
        """Return the query to execute.

        Raises:
            PersistedQueryNotFoundError: If the operation names a persisted
                hash that no hook could resolve.
        """
        if context.is_unresolved:
            logger.debug("Answering PersistedQueryNotFound for %s", context.query_hash)
            raise PersistedQueryNotFoundError()
        return context.query

    def _is_operation_request(self, request: Request) -> bool:
        if request.method == "GET":
            params = request.query_params
            return "query" in params or "extensions" in params
        if request.method == "POST":
            content_type = request.headers.get("content-type", "")
            return content_type.split(";")[0].strip() == JSON_CONTENT_TYPE
        return False

    @staticmethod
    def _to_http_response(response: GraphQLResponse) -> Response:
        return Response(
            content=response.content,
            status_code=response.status_code,
            headers=response.headers,
            media_type=JSON_CONTENT_TYPE,
        )
