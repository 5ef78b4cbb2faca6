"""Notice board domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from domain.entities.document import utc_now_iso

NOTICES_COLLECTION = "notices"


class NoticePriority(StrEnum):
    """Notice priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Notice:
    """Domain entity for a notice posted by faculty or admins."""

    title: str
    content: str
    category: str
    created_by_id: str
    priority: NoticePriority = NoticePriority.MEDIUM
    created_by: str = ""
    expiry_date: str | None = None
    id: str = ""
    created_at: str = field(default_factory=utc_now_iso)

    def is_expired(self, today: date) -> bool:
        """A notice expires after the day of its expiry date."""
        if not self.expiry_date:
            return False
        try:
            expiry = datetime.fromisoformat(self.expiry_date).date()
        except ValueError:
            return False
        return expiry < today

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "Notice":
        try:
            priority = NoticePriority(data.get("priority", NoticePriority.MEDIUM))
        except ValueError:
            priority = NoticePriority.MEDIUM
        return cls(
            id=id,
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=data.get("category", ""),
            priority=priority,
            expiry_date=data.get("expiryDate") or None,
            created_by=data.get("createdBy") or "",
            created_by_id=data.get("createdById", ""),
            created_at=data.get("createdAt", ""),
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "priority": self.priority.value,
            "createdBy": self.created_by,
            "createdById": self.created_by_id,
            "createdAt": self.created_at,
        }
        if self.expiry_date:
            doc["expiryDate"] = self.expiry_date
        return doc
