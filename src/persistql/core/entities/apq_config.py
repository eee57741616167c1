"""APQ and server configuration entities."""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

# Plugin id a server must enable for the APQ hooks to do anything
AUTOMATIC_PERSISTED_QUERY = "automatic_persisted_query"


class ResponsePolicyVariant(Enum):
    """How a ``PersistedQueryNotFound`` response is kept out of the page cache.

    TAG: Tag the response with the query's cache tag so the next
        registration of that hash purges it.
    KILL_SWITCH: Disable page caching for the whole response.
    """

    TAG = "tag"
    KILL_SWITCH = "kill_switch"


@dataclass
class ApqConfig:
    """Automatic persisted queries configuration.

    Backend keys are named by the store's key builder, see
    ``DefaultKeyBuilder(prefix=...)``.

    Attributes:
        persisted_query_ttl: Optional TTL for stored queries. None uses
            the backend default.
        response_policy: Which response cache policy variant is active.
    """

    persisted_query_ttl: timedelta | None = None
    response_policy: ResponsePolicyVariant = ResponsePolicyVariant.TAG

    def __post_init__(self) -> None:
        """Accept the policy variant by its string value."""
        if isinstance(self.response_policy, str):
            self.response_policy = ResponsePolicyVariant(self.response_policy.lower())


@dataclass(frozen=True)
class ServerConfig:
    """A GraphQL server endpoint and its enabled persisted query plugins."""

    name: str
    endpoint: str = "/graphql"
    persisted_query_plugins: frozenset[str] = field(default_factory=frozenset)

    @property
    def apq_enabled(self) -> bool:
        """Whether automatic persisted queries are enabled on this server."""
        return AUTOMATIC_PERSISTED_QUERY in self.persisted_query_plugins

    @classmethod
    def with_apq(cls, name: str, endpoint: str = "/graphql") -> "ServerConfig":
        """Create a server configuration with APQ enabled."""
        return cls(
            name=name,
            endpoint=endpoint,
            persisted_query_plugins=frozenset({AUTOMATIC_PERSISTED_QUERY}),
        )
