"""Lost & found domain entity."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from domain.entities.document import utc_now_iso

LOST_FOUND_COLLECTION = "lostFound"


class ItemCategory(StrEnum):
    """Whether an item was lost or found."""

    LOST = "lost"
    FOUND = "found"


@dataclass
class LostFoundItem:
    """Domain entity for a lost or found item report."""

    title: str
    description: str
    location: str
    category: ItemCategory
    date: str
    contact_info: str
    author_id: str
    author_name: str = "Anonymous"
    image_url: str | None = None
    id: str = ""
    created_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "LostFoundItem":
        return cls(
            id=id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            location=data.get("location", ""),
            category=ItemCategory(data.get("category", ItemCategory.LOST)),
            date=data.get("date", ""),
            contact_info=data.get("contactInfo", ""),
            image_url=data.get("imageUrl"),
            author_id=data.get("authorId", ""),
            author_name=data.get("authorName") or "Anonymous",
            created_at=data.get("createdAt", ""),
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "category": self.category.value,
            "date": self.date,
            "contactInfo": self.contact_info,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "createdAt": self.created_at,
        }
        if self.image_url:
            doc["imageUrl"] = self.image_url
        return doc


@dataclass(frozen=True)
class ImageUpload:
    """An image attached to a lost & found report."""

    filename: str
    content_type: str
    data: bytes
