"""Default key builder implementation."""

from persistql.core.entities.operation import GraphQLRequest
from persistql.utils.hashing import hash_value

QUERY_ARGS_CONTEXT_PREFIX = "url.query_args:"


class DefaultKeyBuilder:
    """Default key builder for persisted queries and page cache entries.

    Persisted query keys embed the full hash. Page keys hash the
    request's base query arguments, plus one segment per cache context.
    """

    def __init__(self, prefix: str = "persistql") -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all keys.
        """
        self._prefix = prefix

    def build_persisted_query_key(self, query_hash: str) -> str:
        return f"{self._prefix}:apq:{query_hash}"

    def build_page_key(
        self,
        request: GraphQLRequest,
        base_query_args: tuple[str, ...],
        contexts: list[str] | None = None,
    ) -> str:
        """Build the page cache key for a request.

        ``url.query_args:<name>`` contexts add a hash of that query
        argument. Other contexts only add their name.

        Args:
            request: The decoded request.
            base_query_args: Query-string arguments that always key a page.
            contexts: Optional cache contexts to vary the key by.

        Returns:
            A page cache key.
        """
        parts = [self._prefix, "page", request.method.upper()]

        base = {
            name: request.query_params[name]
            for name in base_query_args
            if name in request.query_params
        }
        parts.append(f"q:{hash_value(base)}")

        for context in sorted(contexts or ()):
            if context.startswith(QUERY_ARGS_CONTEXT_PREFIX):
                name = context[len(QUERY_ARGS_CONTEXT_PREFIX):]
                parts.append(f"{name}:{hash_value(request.query_params.get(name))}")
            else:
                parts.append(f"ctx:{context}")

        return ":".join(parts)
