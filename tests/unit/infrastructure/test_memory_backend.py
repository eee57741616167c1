"""Tests for InMemoryCacheBackend."""

from datetime import timedelta

import pytest

from persistql.infrastructure.backends.memory import InMemoryCacheBackend


class TestInMemoryCacheBackend:
    """Tests for InMemoryCacheBackend."""

    @pytest.fixture
    def backend(self) -> InMemoryCacheBackend:
        return InMemoryCacheBackend(maxsize=100, default_ttl=300.0)

    @pytest.mark.asyncio
    async def test_set_and_get(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("key1", b"value1")
        assert await backend.get("key1") == b"value1"

    @pytest.mark.asyncio
    async def test_get_missing_key(self, backend: InMemoryCacheBackend) -> None:
        assert await backend.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_delete(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("key1", b"value1")

        assert await backend.delete("key1") is True
        assert await backend.get("key1") is None
        assert await backend.delete("key1") is False

    @pytest.mark.asyncio
    async def test_exists(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("key1", b"value1")

        assert await backend.exists("key1") is True
        assert await backend.exists("nonexistent") is False

    @pytest.mark.asyncio
    async def test_clear(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("key1", b"value1", tags=["t"])
        await backend.set("key2", b"value2")

        await backend.clear()

        assert len(backend) == 0
        assert backend.tagged_keys("t") == set()

    @pytest.mark.asyncio
    async def test_invalidate_tags(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("a", b"1", tags=["apq:x", "other"])
        await backend.set("b", b"2", tags=["apq:x"])
        await backend.set("c", b"3", tags=["apq:y"])

        count = await backend.invalidate_tags(["apq:x"])

        assert count == 2
        assert await backend.get("a") is None
        assert await backend.get("b") is None
        assert await backend.get("c") == b"3"
        assert backend.tagged_keys("apq:x") == set()

    @pytest.mark.asyncio
    async def test_invalidate_tags_is_repeatable(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("a", b"1", tags=["apq:x"])

        assert await backend.invalidate_tags(["apq:x"]) == 1
        assert await backend.invalidate_tags(["apq:x"]) == 0

    @pytest.mark.asyncio
    async def test_tagged_key_already_deleted(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("a", b"1", tags=["apq:x"])
        await backend.delete("a")

        assert backend.tagged_keys("apq:x") == set()
        assert await backend.invalidate_tags(["apq:x"]) == 0

    @pytest.mark.asyncio
    async def test_lru_eviction(self) -> None:
        backend = InMemoryCacheBackend(maxsize=2)
        await backend.set("a", b"1")
        await backend.set("b", b"2")
        await backend.set("c", b"3")

        assert len(backend) == 2
        assert backend.maxsize == 2

    @pytest.mark.asyncio
    async def test_entries_expire_on_their_own_ttl(self) -> None:
        now = [0.0]
        backend = InMemoryCacheBackend(timer=lambda: now[0])
        await backend.set("page", b"1", ttl=timedelta(seconds=10))
        await backend.set("apq:abc", b"2")

        now[0] = 11.0

        assert await backend.get("page") is None
        assert await backend.exists("page") is False
        assert await backend.get("apq:abc") == b"2"

    @pytest.mark.asyncio
    async def test_default_ttl_applies_without_explicit_ttl(self) -> None:
        now = [0.0]
        backend = InMemoryCacheBackend(default_ttl=5.0, timer=lambda: now[0])
        await backend.set("a", b"1")
        await backend.set("b", b"2", ttl=timedelta(seconds=60))

        now[0] = 6.0

        assert await backend.get("a") is None
        assert await backend.get("b") == b"2"

    def test_exported_from_package(self) -> None:
        import persistql

        assert persistql.InMemoryCacheBackend is InMemoryCacheBackend

    @pytest.mark.asyncio
    async def test_tag_index_bounded_by_maxsize(self) -> None:
        backend = InMemoryCacheBackend(maxsize=10)

        for i in range(5000):
            await backend.set(f"page:{i}", b"{}", tags=[f"apq:{i}"])

        assert len(backend) == 10
        assert backend.tag_count <= backend.maxsize + 1
        assert backend.tagged_keys("apq:4999") == {"page:4999"}
        assert await backend.invalidate_tags(["apq:4999"]) == 1

    @pytest.mark.asyncio
    async def test_expired_keys_leave_tag_index(self) -> None:
        now = [0.0]
        backend = InMemoryCacheBackend(maxsize=10, timer=lambda: now[0])
        for i in range(10):
            await backend.set(f"old:{i}", b"{}", ttl=timedelta(seconds=1), tags=[f"old:{i}"])

        now[0] = 5.0
        await backend.set("new", b"{}", tags=["new"])

        assert backend.tag_count == 1
        assert backend.tagged_keys("new") == {"new"}

    @pytest.mark.asyncio
    async def test_delete_removes_key_from_tag_index(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("a", b"1", tags=["apq:x"])

        await backend.delete("a")

        assert backend.tag_count == 0

    @pytest.mark.asyncio
    async def test_rewrite_replaces_tags(self, backend: InMemoryCacheBackend) -> None:
        await backend.set("a", b"1", tags=["apq:x"])
        await backend.set("a", b"2", tags=["apq:y"])

        assert await backend.invalidate_tags(["apq:x"]) == 0
        assert await backend.get("a") == b"2"
        assert await backend.invalidate_tags(["apq:y"]) == 1
