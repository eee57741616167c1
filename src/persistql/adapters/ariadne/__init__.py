"""Ariadne framework adapter for persistql."""

from persistql.adapters.ariadne.graphql import ApqGraphQL
from persistql.adapters.ariadne.handler import ApqGraphQLHTTPHandler

__all__ = [
    "ApqGraphQL",
    "ApqGraphQLHTTPHandler",
]
