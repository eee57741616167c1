"""Response cache policies for ``PersistedQueryNotFound`` responses.

A full-page cache must never permanently keep a negative APQ response.
Two policies satisfy that, with different precision:

- ``TaggingResponseCachePolicy`` lets the response be cached but tags it
  with the query's cache tag. The next registration of that hash
  invalidates the tag before storing the query.
- ``KillSwitchResponseCachePolicy`` keeps the whole response out of the
  page cache for the current request.

Exactly one is active per deployment, chosen with
``create_response_cache_policy``.
"""

import logging

from persistql.core.entities.apq_config import ResponsePolicyVariant
from persistql.core.entities.operation import GraphQLRequest
from persistql.core.entities.persisted_query import cache_tag
from persistql.core.entities.response import GraphQLResponse
from persistql.core.interfaces.response_policy import IResponseCachePolicy

logger = logging.getLogger(__name__)


class TaggingResponseCachePolicy:
    """Tag the negative response so a later registration evicts it."""

    def apply(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
        query_hash: str,
    ) -> None:
        if query_hash == "":
            return
        response.metadata.add_cache_tags([cache_tag(query_hash)])
        logger.debug("Tagged PersistedQueryNotFound response with %s", cache_tag(query_hash))


class KillSwitchResponseCachePolicy:
    """Disable page caching for the negative response altogether."""

    def apply(
        self,
        request: GraphQLRequest,
        response: GraphQLResponse,
        query_hash: str,
    ) -> None:
        request.kill_switch.trigger()
        logger.debug("Page cache disabled for PersistedQueryNotFound response")


def create_response_cache_policy(
    variant: ResponsePolicyVariant | str,
) -> IResponseCachePolicy:
    """Create the response cache policy for a deployment.

    Args:
        variant: The configured policy variant, or its string value.

    Returns:
        The policy implementation.
    """
    if isinstance(variant, str):
        variant = ResponsePolicyVariant(variant.lower())

    if variant is ResponsePolicyVariant.KILL_SWITCH:
        return KillSwitchResponseCachePolicy()
    return TaggingResponseCachePolicy()
