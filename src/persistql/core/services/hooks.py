"""Hook dispatcher - the extension points a hosting HTTP layer invokes.

Two ordered callback chains: before-operation hooks run once before a
query executes, response listeners run once after the response body is
final. Higher priority runs first; equal priorities keep registration
order.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from persistql.core.entities.operation import GraphQLRequest, OperationContext
from persistql.core.entities.response import GraphQLResponse

BeforeOperationHook = Callable[[OperationContext], Awaitable[None]]
ResponseHook = Callable[
    [GraphQLRequest, GraphQLResponse, OperationContext | None], Awaitable[None]
]

# Response listeners must tag responses before the page cache stores them
APQ_RESPONSE_PRIORITY = 200
PAGE_CACHE_RESPONSE_PRIORITY = 100


@dataclass(frozen=True)
class _Registration:
    priority: int
    order: int
    hook: Any


class HookDispatcher:
    """Ordered callback registry for operation and response hooks."""

    def __init__(self) -> None:
        self._before_operation: list[_Registration] = []
        self._response: list[_Registration] = []
        self._counter = 0

    def on_before_operation(self, hook: BeforeOperationHook, priority: int = 0) -> None:
        self._before_operation.append(self._register(hook, priority))

    def on_response(self, hook: ResponseHook, priority: int = 0) -> None:
        self._response.append(self._register(hook, priority))

    @property
    def before_operation_hooks(self) -> list[BeforeOperationHook]:
        return [r.hook for r in self._sorted(self._before_operation)]

    @property
    def response_hooks(self) -> list[ResponseHook]:
        return [r.hook for r in self._sorted(self._response)]

    async def dispatch_before_operation(self, context: OperationContext) -> None:
        """Run before-operation hooks in priority order.

        Exceptions propagate and stop the chain, which is how a hook
        rejects an operation.
        """
        for hook in self.before_operation_hooks:
            await hook(context)

    async def dispatch_response(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
        context: OperationContext | None = None,
    ) -> None:
        """Run response listeners in priority order.

        Each listener gets the operation context the response was built
        from, or None when the response did not come from an operation.
        """
        for hook in self.response_hooks:
            await hook(request, response, context)

    def _register(self, hook: Any, priority: int) -> _Registration:
        self._counter += 1
        return _Registration(priority=priority, order=self._counter, hook=hook)

    @staticmethod
    def _sorted(registrations: list[_Registration]) -> list[_Registration]:
        return sorted(registrations, key=lambda r: (-r.priority, r.order))
