"""Hashing utilities for persisted queries and page-cache keys."""

import hashlib
import json
from typing import Any


def sha256_hex(text: str) -> str:
    """Return the SHA-256 hex digest of the exact UTF-8 bytes of ``text``.

    No normalization is applied: two queries that differ only in
    whitespace produce different digests.

    Args:
        text: The text to hash.

    Returns:
        The 64-character lowercase hexadecimal digest.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_value(value: Any) -> str:
    """Create a short deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Sorted keys so equal mappings hash equally
    normalized = json.dumps(value, sort_keys=True, default=str)
    return sha256_hex(normalized)[:16]
