"""Tests for domain entities."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from persistql import (
    AUTOMATIC_PERSISTED_QUERY,
    ApqConfig,
    ApqState,
    CacheEntry,
    GraphQLRequest,
    GraphQLResponse,
    InvalidRequestError,
    OperationContext,
    PageCacheConfig,
    PersistedQueryRecord,
    ResponsePolicyVariant,
    ServerConfig,
    cache_tag,
)
from persistql.core.entities.operation import persisted_query_hash


def _extensions(query_hash: str) -> dict:
    return {"persistedQuery": {"version": 1, "sha256Hash": query_hash}}


class TestCacheTag:
    def test_prefix(self) -> None:
        assert cache_tag("abc") == "apq:abc"

    def test_record_tag(self) -> None:
        record = PersistedQueryRecord(hash="abc", query="{ a }")
        assert record.cache_tag == "apq:abc"
        assert PersistedQueryRecord.from_dict(record.to_dict()) == record


class TestConfig:
    def test_apq_defaults(self) -> None:
        config = ApqConfig()
        assert config.response_policy is ResponsePolicyVariant.TAG
        assert config.persisted_query_ttl is None

    def test_policy_from_string(self) -> None:
        config = ApqConfig(response_policy="KILL_SWITCH")
        assert config.response_policy is ResponsePolicyVariant.KILL_SWITCH

    def test_unknown_policy(self) -> None:
        with pytest.raises(ValueError):
            ApqConfig(response_policy="purge-everything")

    def test_page_cache_default_ttl(self) -> None:
        assert PageCacheConfig().default_ttl == timedelta(minutes=5)

    def test_key_prefix_belongs_to_key_builder(self) -> None:
        with pytest.raises(TypeError):
            ApqConfig(key_prefix="site")
        with pytest.raises(TypeError):
            PageCacheConfig(key_prefix="site")

    def test_server_apq_flag(self) -> None:
        assert ServerConfig.with_apq("default").apq_enabled is True
        assert ServerConfig(name="plain").apq_enabled is False
        server = ServerConfig(
            name="custom",
            persisted_query_plugins=frozenset({"other", AUTOMATIC_PERSISTED_QUERY}),
        )
        assert server.apq_enabled is True


class TestPersistedQueryHash:
    def test_extracts_hash(self) -> None:
        assert persisted_query_hash(_extensions("abc")) == "abc"

    @pytest.mark.parametrize(
        "extensions",
        [None, "abc", {}, {"persistedQuery": "abc"}, {"persistedQuery": {"sha256Hash": 42}}],
    )
    def test_missing_or_malformed(self, extensions: object) -> None:
        assert persisted_query_hash(extensions) == ""


class TestGraphQLRequest:
    def test_from_query_params(self) -> None:
        request = GraphQLRequest.from_query_params(
            {
                "extensions": json.dumps(_extensions("abc")),
                "variables": '{"id": "1"}',
                "operationName": "Node",
            }
        )

        assert request.method == "GET"
        assert request.query is None
        assert request.variables == {"id": "1"}
        assert request.operation_name == "Node"
        assert request.persisted_query_hash == "abc"
        assert request.query_string_hash() == "abc"

    def test_invalid_json_argument(self) -> None:
        with pytest.raises(InvalidRequestError):
            GraphQLRequest.from_query_params({"variables": "{not json"})

    def test_non_object_argument(self) -> None:
        with pytest.raises(InvalidRequestError):
            GraphQLRequest.from_query_params({"extensions": "[1, 2]"})

    def test_from_body(self) -> None:
        request = GraphQLRequest.from_body(
            {
                "query": "{ a }",
                "variables": '{"id": "2"}',
                "extensions": _extensions("abc"),
            }
        )

        assert request.method == "POST"
        assert request.query == "{ a }"
        assert request.variables == {"id": "2"}
        assert request.persisted_query_hash == "abc"
        # Hash in the body is not in the query string
        assert request.query_string_hash() == ""

    def test_from_body_requires_object(self) -> None:
        with pytest.raises(InvalidRequestError):
            GraphQLRequest.from_body(["{ a }"])

    def test_query_string_hash_ignores_bad_json(self) -> None:
        request = GraphQLRequest(method="GET", query_params={"extensions": "{oops"})
        assert request.query_string_hash() == ""

    def test_kill_switch_per_request(self) -> None:
        first = GraphQLRequest(method="GET")
        second = GraphQLRequest(method="GET")
        first.kill_switch.trigger()
        assert first.kill_switch.triggered is True
        assert second.kill_switch.triggered is False


class TestOperationContext:
    def test_from_request(self) -> None:
        request = GraphQLRequest(
            method="GET",
            variables={"id": "1"},
            extensions=_extensions("abc"),
        )
        context = OperationContext.from_request(request, ServerConfig.with_apq("default"))

        assert context.query is None
        assert context.query_hash == "abc"
        assert context.apq_enabled is True
        assert context.state is ApqState.IDLE
        assert context.is_unresolved is True
        assert context.to_data() == {
            "query": None,
            "variables": {"id": "1"},
            "operationName": None,
        }

    def test_not_unresolved_without_apq(self) -> None:
        context = OperationContext(query=None, query_hash="abc", apq_enabled=False)
        assert context.is_unresolved is False

    def test_add_cache_contexts(self) -> None:
        context = OperationContext(query="{ a }")
        context.add_cache_contexts("a", "b")
        context.add_cache_contexts("a")
        assert context.cache_contexts == {"a", "b"}


class TestGraphQLResponse:
    def test_from_result(self) -> None:
        response = GraphQLResponse.from_result({"data": {"a": 1}})
        assert response.status_code == 200
        assert response.json() == {"data": {"a": 1}}
        assert response.metadata.tags == set()


class TestCacheEntry:
    def test_create_from_response(self) -> None:
        response = GraphQLResponse.from_result({"data": {"a": 1}})
        response.metadata.add_cache_tags(["apq:b", "apq:a"])
        response.metadata.add_cache_contexts(["url.query_args:variables"])

        entry = CacheEntry.create("key", response, ttl=timedelta(minutes=1))

        assert entry.tags == ("apq:a", "apq:b")
        assert entry.contexts == ("url.query_args:variables",)
        assert entry.redirect is False
        assert entry.to_response().json() == {"data": {"a": 1}}

    def test_round_trip_dict(self) -> None:
        entry = CacheEntry.create_redirect(
            "key", ["url.query_args:variables"], tags=["apq:a"], ttl=timedelta(seconds=30)
        )
        assert CacheEntry.from_dict(entry.to_dict()) == entry

    def test_expiry(self) -> None:
        entry = CacheEntry(
            key="key",
            created_at=datetime.now(timezone.utc) - timedelta(minutes=10),
            ttl=timedelta(minutes=5),
        )
        assert entry.is_expired is True

        entry = CacheEntry(key="key", created_at=datetime.now(timezone.utc))
        assert entry.expires_at is None
        assert entry.is_expired is False
