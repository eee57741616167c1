"""JSON serializer for persisted records and cached pages."""

import json
from datetime import date, datetime
from typing import Any

_DATETIME = "__datetime__"
_DATE = "__date__"


class SerializationError(Exception):
    """A value could not be written to or read from the backend format."""


class _RecordEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        # datetime is a date subclass, check it first
        if isinstance(o, datetime):
            return {_DATETIME: o.isoformat()}
        if isinstance(o, date):
            return {_DATE: o.isoformat()}
        if isinstance(o, (set, frozenset)):
            return sorted(o)
        return super().default(o)


def _restore_dates(obj: dict[str, Any]) -> Any:
    if len(obj) != 1:
        return obj
    if _DATETIME in obj:
        return datetime.fromisoformat(obj[_DATETIME])
    if _DATE in obj:
        return date.fromisoformat(obj[_DATE])
    return obj


class JsonSerializer:
    """Encode backend values as UTF-8 JSON.

    Query text is stored untouched. Timestamps round-trip as tagged
    objects and tag or context sets are written as sorted lists.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        try:
            return json.dumps(value, cls=_RecordEncoder).encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize {type(value).__name__}: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode(self._encoding), object_hook=_restore_dates)
        except (ValueError, UnicodeDecodeError) as e:
            raise SerializationError(f"Stored data is not valid JSON: {e}") from e
