"""Persisted query record and cache tag helpers."""

from dataclasses import dataclass
from typing import Any

CACHE_TAG_PREFIX = "apq:"


def cache_tag(query_hash: str) -> str:
    """Return the cache tag for a persisted query hash."""
    return f"{CACHE_TAG_PREFIX}{query_hash}"


@dataclass(frozen=True)
class PersistedQueryRecord:
    """Immutable mapping from a query hash to its exact source text."""

    hash: str
    query: str

    @property
    def cache_tag(self) -> str:
        return cache_tag(self.hash)

    def to_dict(self) -> dict[str, str]:
        return {"hash": self.hash, "query": self.query}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersistedQueryRecord":
        return cls(hash=data["hash"], query=data["query"])
