"""Query hasher - canonical hash of a query's source text."""

from persistql.utils.hashing import sha256_hex


class QueryHasher:
    """Computes and verifies the SHA-256 hash of a query string.

    The query is treated as opaque bytes. Whitespace and formatting are
    significant: a client that reformats its query must send a new hash.
    """

    def hash(self, query: str) -> str:
        return sha256_hex(query)

    def verify(self, query: str, claimed_hash: str) -> bool:
        """Check a client-declared hash against the query it came with.

        The comparison is exact, so an upper-case digest never verifies.
        """
        return self.hash(query) == claimed_hash
