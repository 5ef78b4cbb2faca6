"""Document store value objects."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the timestamp format stored in documents."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Document:
    """A keyed, untyped document inside a collection."""

    collection: str
    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


@dataclass(frozen=True, slots=True)
class FieldFilter:
    """Equality filter on a top-level document field."""

    field: str
    value: str | int | float | bool


@dataclass(frozen=True, slots=True)
class OrderBy:
    """Ordering on a top-level string field (ISO timestamps sort lexically)."""

    field: str
    descending: bool = False
