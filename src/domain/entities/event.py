"""Campus event domain entity."""

from dataclasses import dataclass, field
from typing import Any

from domain.entities.document import utc_now_iso

EVENTS_COLLECTION = "events"


@dataclass
class Event:
    """Domain entity for a campus event."""

    title: str
    description: str
    location: str
    date: str
    time: str
    organizer_id: str
    organizer: str = ""
    id: str = ""
    created_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "Event":
        return cls(
            id=id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            location=data.get("location", ""),
            date=data.get("date", ""),
            time=data.get("time", ""),
            organizer=data.get("organizer") or "",
            organizer_id=data.get("organizerId", ""),
            created_at=data.get("createdAt", ""),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "date": self.date,
            "time": self.time,
            "organizer": self.organizer,
            "organizerId": self.organizer_id,
            "createdAt": self.created_at,
        }
