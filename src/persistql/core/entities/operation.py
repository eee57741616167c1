"""Per-request operation entities.

``GraphQLRequest`` is the decoded inbound request as the hosting HTTP
layer sees it. ``OperationContext`` is the ephemeral value the APQ
pipeline works on between request start and response emission.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from persistql.core.entities.apq_config import ServerConfig
from persistql.core.errors import InvalidRequestError

# Cache context asking the page cache to vary by the ``variables`` query arg
VARIABLES_CACHE_CONTEXT = "url.query_args:variables"


def persisted_query_hash(extensions: Any) -> str:
    """Extract ``persistedQuery.sha256Hash`` from decoded extensions.

    Args:
        extensions: The decoded ``extensions`` value of a request.

    Returns:
        The declared hash, or an empty string when absent or not a string.
    """
    if not isinstance(extensions, dict):
        return ""
    persisted = extensions.get("persistedQuery")
    if not isinstance(persisted, dict):
        return ""
    value = persisted.get("sha256Hash", "")
    return value if isinstance(value, str) else ""


def _decode_json_arg(name: str, raw: str | None) -> Any:
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError(f"Query argument '{name}' is not valid JSON") from e


class ApqState(Enum):
    """Protocol state of a single request."""

    IDLE = "idle"
    RESOLVING = "resolving"
    VERIFIED = "verified"
    REJECTED = "rejected"
    RESPONDED = "responded"


class PageCacheKillSwitch:
    """Request-scoped switch that keeps the current response out of the page cache."""

    def __init__(self) -> None:
        self._triggered = False

    def trigger(self) -> None:
        self._triggered = True

    @property
    def triggered(self) -> bool:
        return self._triggered


@dataclass
class GraphQLRequest:
    """A decoded GraphQL HTTP request.

    Attributes:
        method: The HTTP method.
        query: The query text, if the client sent one.
        variables: Decoded operation variables.
        operation_name: The requested operation name.
        extensions: Decoded protocol extensions.
        query_params: Raw query-string arguments, used for page-cache keys.
        kill_switch: Page cache kill switch for this request's lifecycle.
    """

    method: str
    query: str | None = None
    variables: dict[str, Any] | None = None
    operation_name: str | None = None
    extensions: dict[str, Any] | None = None
    query_params: dict[str, str] = field(default_factory=dict)
    kill_switch: PageCacheKillSwitch = field(default_factory=PageCacheKillSwitch)

    @property
    def persisted_query_hash(self) -> str:
        return persisted_query_hash(self.extensions)

    def query_string_hash(self) -> str:
        """Return the persisted query hash from the ``extensions`` query arg.

        Undecodable JSON counts as no hash.
        """
        raw = self.query_params.get("extensions")
        if not raw:
            return ""
        try:
            decoded = json.loads(raw)
        except ValueError:
            return ""
        return persisted_query_hash(decoded)

    @classmethod
    def from_query_params(
        cls,
        params: dict[str, str],
        method: str = "GET",
    ) -> "GraphQLRequest":
        """Decode a GET request from its query-string arguments.

        ``variables`` and ``extensions`` are JSON-encoded strings.

        Raises:
            InvalidRequestError: If a JSON argument cannot be decoded or
                decodes to something other than an object.
        """
        variables = _decode_json_arg("variables", params.get("variables"))
        extensions = _decode_json_arg("extensions", params.get("extensions"))
        for name, value in (("variables", variables), ("extensions", extensions)):
            if value is not None and not isinstance(value, dict):
                raise InvalidRequestError(f"Query argument '{name}' must be an object")

        return cls(
            method=method,
            query=params.get("query"),
            variables=variables,
            operation_name=params.get("operationName") or None,
            extensions=extensions,
            query_params=dict(params),
        )

    @classmethod
    def from_body(
        cls,
        body: Any,
        method: str = "POST",
        query_params: dict[str, str] | None = None,
    ) -> "GraphQLRequest":
        """Decode a POST request from its JSON body.

        Raises:
            InvalidRequestError: If the body is not a JSON object.
        """
        if not isinstance(body, dict):
            raise InvalidRequestError("Request body must be a JSON object")

        query = body.get("query")
        variables = body.get("variables")
        if isinstance(variables, str):
            # Some clients send variables JSON-encoded even in a POST body
            variables = _decode_json_arg("variables", variables)
        extensions = body.get("extensions")

        return cls(
            method=method,
            query=query if isinstance(query, str) else None,
            variables=variables if isinstance(variables, dict) else None,
            operation_name=body.get("operationName") or None,
            extensions=extensions if isinstance(extensions, dict) else None,
            query_params=dict(query_params or {}),
        )


@dataclass
class OperationContext:
    """Ephemeral APQ state for one GraphQL operation.

    Created at request start and discarded once the response has been
    emitted. ``cache_contexts`` are copied onto the outgoing response's
    cacheability metadata by the hosting layer.
    """

    query: str | None
    query_hash: str = ""
    apq_enabled: bool = False
    variables: dict[str, Any] | None = None
    operation_name: str | None = None
    cache_contexts: set[str] = field(default_factory=set)
    state: ApqState = ApqState.IDLE

    @property
    def is_persisted(self) -> bool:
        """Whether the operation declares a persisted query hash."""
        return self.query_hash != ""

    @property
    def is_unresolved(self) -> bool:
        """Whether APQ is active and the hash could not be resolved to a query."""
        return self.apq_enabled and self.is_persisted and self.query is None

    def add_cache_contexts(self, *contexts: str) -> None:
        self.cache_contexts.update(contexts)

    def to_data(self) -> dict[str, Any]:
        """Return the operation payload in GraphQL-over-HTTP shape."""
        return {
            "query": self.query,
            "variables": self.variables,
            "operationName": self.operation_name,
        }

    @classmethod
    def from_request(
        cls,
        request: GraphQLRequest,
        server: ServerConfig,
    ) -> "OperationContext":
        return cls(
            query=request.query,
            query_hash=request.persisted_query_hash,
            apq_enabled=server.apq_enabled,
            variables=request.variables,
            operation_name=request.operation_name,
        )
