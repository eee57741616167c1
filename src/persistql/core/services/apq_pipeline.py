"""APQ pipeline - the automatic persisted queries protocol engine."""

import logging

from persistql.core.entities.operation import (
    VARIABLES_CACHE_CONTEXT,
    ApqState,
    GraphQLRequest,
    OperationContext,
)
from persistql.core.entities.response import GraphQLResponse
from persistql.core.errors import PERSISTED_QUERY_NOT_FOUND, HashMismatchError
from persistql.core.interfaces.invalidator import IInvalidator
from persistql.core.interfaces.response_policy import IResponseCachePolicy
from persistql.core.services.hooks import APQ_RESPONSE_PRIORITY, HookDispatcher
from persistql.core.services.persisted_query_store import PersistedQueryStore
from persistql.core.services.query_hasher import QueryHasher

logger = logging.getLogger(__name__)


def is_persisted_query_not_found(response: GraphQLResponse) -> bool:
    """Check whether a response reports an unknown persisted query.

    Args:
        response: The finalized response.

    Returns:
        True if any top-level error message is ``PersistedQueryNotFound``.
        Bodies that are not a JSON object never match.
    """
    try:
        body = response.json()
    except ValueError:
        return False
    if not isinstance(body, dict):
        return False

    errors = body.get("errors")
    if not errors or not isinstance(errors, list):
        return False
    return any(
        isinstance(error, dict) and error.get("message") == PERSISTED_QUERY_NOT_FOUND
        for error in errors
    )


class ApqPipeline:
    """Orchestrates the APQ pre-execution and post-response hooks.

    Before execution it verifies and registers queries that come with a
    hash, or substitutes the stored query for a hash-only request. After
    the response is final it makes sure a ``PersistedQueryNotFound``
    answer cannot outlive the registration of its query in a page cache.

    Usage:
        store = PersistedQueryStore(
            backend=backend,
            key_builder=DefaultKeyBuilder(),
            serializer=JsonSerializer(),
        )
        pipeline = ApqPipeline(
            store=store,
            invalidator=CacheTagInvalidator([page_backend]),
            response_policy=create_response_cache_policy("tag"),
        )
        pipeline.register(dispatcher)
    """

    def __init__(
        self,
        store: PersistedQueryStore,
        invalidator: IInvalidator,
        response_policy: IResponseCachePolicy,
        hasher: QueryHasher | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            store: Where persisted queries are kept.
            invalidator: Purges cached responses tagged with a query hash.
            response_policy: The deployment's response cache policy.
            hasher: Optional query hasher. A default one is used otherwise.
        """
        self._store = store
        self._invalidator = invalidator
        self._response_policy = response_policy
        self._hasher = hasher or QueryHasher()

    @property
    def store(self) -> PersistedQueryStore:
        return self._store

    def register(self, dispatcher: HookDispatcher) -> None:
        """Subscribe both hooks on a dispatcher.

        The response hook runs ahead of page cache listeners so that its
        tags and kill switch are in place before the response is stored.
        """
        dispatcher.on_before_operation(self.on_before_operation)
        dispatcher.on_response(self.on_response, priority=APQ_RESPONSE_PRIORITY)

    async def on_before_operation(self, context: OperationContext) -> None:
        """Resolve, verify and register the operation's query.

        Args:
            context: The operation context. Its query may be replaced by
                the stored one.

        Raises:
            HashMismatchError: If the supplied query does not hash to the
                declared hash. Nothing is stored in that case.
        """
        if not context.apq_enabled or not context.is_persisted:
            context.state = ApqState.IDLE
            return

        context.state = ApqState.RESOLVING
        query_hash = context.query_hash

        if context.query is not None:
            if not self._hasher.verify(context.query, query_hash):
                context.state = ApqState.REJECTED
                logger.debug("Rejected persisted query registration for %s", query_hash)
                raise HashMismatchError()

            # Purge cached negative responses before the query becomes resolvable
            await self._invalidator.invalidate(query_hash)
            await self._store.put(query_hash, context.query)
            context.add_cache_contexts(VARIABLES_CACHE_CONTEXT)
            context.state = ApqState.VERIFIED
            logger.debug("Registered persisted query %s", query_hash)
            return

        stored = await self._store.get(query_hash)
        if stored is None:
            # Left unresolved; the execution layer reports PersistedQueryNotFound
            logger.debug("Persisted query %s not found", query_hash)
            return

        context.query = stored
        context.add_cache_contexts(VARIABLES_CACHE_CONTEXT)
        context.state = ApqState.VERIFIED
        logger.debug("Resolved persisted query %s", query_hash)

    async def on_response(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
        context: OperationContext | None = None,
    ) -> None:
        """Apply the response cache policy to failed replays.

        The hash is read from the request's ``extensions`` query-string
        argument, where hash-only GET requests carry it.

        Args:
            request: The request that produced the response.
            response: The finalized response.
            context: The operation context. APQ operations are marked
                as responded, IDLE ones are left alone.
        """
        if context is not None and context.state is not ApqState.IDLE:
            context.state = ApqState.RESPONDED

        if not is_persisted_query_not_found(response):
            return

        self._response_policy.apply(request, response, request.query_string_hash())
