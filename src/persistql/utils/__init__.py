"""Utility helpers for persistql."""

from persistql.utils.hashing import hash_value, sha256_hex

__all__ = ["hash_value", "sha256_hex"]
