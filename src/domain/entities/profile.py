"""Identity and profile domain entities."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from domain.entities.document import utc_now_iso

USERS_COLLECTION = "users"

SOCIAL_LINK_KEYS = ("facebook", "twitter", "linkedin", "instagram")


class UserStatus(StrEnum):
    """Moderation status set from the admin console."""

    ACTIVE = "active"
    WARNED = "warned"
    BANNED = "banned"


class UserRole(StrEnum):
    """Role flags that an admin can toggle."""

    ADMIN = "admin"
    FACULTY = "faculty"

    @property
    def field_name(self) -> str:
        return "isAdmin" if self is UserRole.ADMIN else "isFaculty"


@dataclass(frozen=True)
class Identity:
    """Provider-issued identity of a signed-in user (read-only)."""

    id: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = None


# Document keys owned by the dataclass fields below; anything else is kept in ``extra``.
_KNOWN_KEYS = {
    "uid",
    "displayName",
    "email",
    "photoURL",
    "bio",
    "socialLinks",
    "isAdmin",
    "isFaculty",
    "status",
    "createdAt",
}


@dataclass
class Profile:
    """Per-identity profile stored in the ``users`` collection.

    ``from_document`` / ``to_document`` round-trip the stored document: optional
    keys are written back only when they were present, and unknown keys are
    preserved in ``extra``.
    """

    uid: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = None
    bio: str | None = None
    social_links: dict[str, str] | None = None
    is_admin: bool = False
    is_faculty: bool = False
    status: str | None = None
    created_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def provision(cls, identity: Identity) -> "Profile":
        """Build the initial profile for a never-before-seen identity."""
        return cls(
            uid=identity.id,
            display_name=identity.display_name,
            email=identity.email,
            photo_url=identity.photo_url,
            is_admin=False,
            is_faculty=False,
            created_at=utc_now_iso(),
        )

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "Profile":
        return cls(
            uid=data["uid"],
            display_name=data.get("displayName"),
            email=data.get("email"),
            photo_url=data.get("photoURL"),
            bio=data.get("bio"),
            social_links=data.get("socialLinks"),
            is_admin=bool(data.get("isAdmin", False)),
            is_faculty=bool(data.get("isFaculty", False)),
            status=data.get("status"),
            created_at=data.get("createdAt"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "uid": self.uid,
            "displayName": self.display_name,
            "email": self.email,
            "photoURL": self.photo_url,
            "isAdmin": self.is_admin,
            "isFaculty": self.is_faculty,
        }
        if self.bio is not None:
            doc["bio"] = self.bio
        if self.social_links is not None:
            doc["socialLinks"] = dict(self.social_links)
        if self.status is not None:
            doc["status"] = self.status
        if self.created_at is not None:
            doc["createdAt"] = self.created_at
        doc.update(self.extra)
        return doc

    def merged(self, partial: dict[str, Any]) -> "Profile":
        """Return a copy with ``partial`` (document keys) laid over this profile."""
        doc = self.to_document()
        doc.update(partial)
        doc["uid"] = self.uid
        return Profile.from_document(doc)

    @property
    def is_banned(self) -> bool:
        return self.status == UserStatus.BANNED

    @property
    def author_name(self) -> str:
        return self.display_name or "Anonymous"
