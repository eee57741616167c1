"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Converts persisted query records and cache entries to backend bytes.

    Implementations must keep query text byte-for-byte, since the stored
    text is what a later replay executes and what its hash was computed
    over. Both methods raise ``SerializationError`` on failure.
    """

    def serialize(self, value: Any) -> bytes: ...

    def deserialize(self, data: bytes) -> Any: ...
