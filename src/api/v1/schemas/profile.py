"""Pydantic schemas for Profile API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import UserRole, UserStatus


class SocialLinks(BaseModel):
    """Links shown on a profile. Empty strings clear a link."""

    facebook: str | None = Field(None, max_length=2048)
    twitter: str | None = Field(None, max_length=2048)
    linkedin: str | None = Field(None, max_length=2048)
    instagram: str | None = Field(None, max_length=2048)


class ProfileUpdate(BaseModel):
    """Self-service profile edit. Only the fields that are sent are written."""

    display_name: str | None = Field(None, min_length=1, max_length=100)
    bio: str | None = Field(None, max_length=160)
    photo_url: str | None = Field(None, max_length=2048)
    social_links: SocialLinks | None = None

    def to_fields(self) -> dict[str, Any]:
        """Document keys for the fields present in the request."""
        sent = self.model_dump(mode="json", exclude_unset=True)
        keys = {
            "display_name": "displayName",
            "bio": "bio",
            "photo_url": "photoURL",
            "social_links": "socialLinks",
        }
        return {keys[name]: value for name, value in sent.items()}


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "uid": "d0c1f1a2-5b6e-4c1d-9a8b-7c6d5e4f3a2b",
                "display_name": "Ada Lovelace",
                "email": "ada@example.edu",
                "photo_url": None,
                "bio": "Math, engines and poetry.",
                "social_links": {"twitter": "https://twitter.com/ada"},
                "is_admin": False,
                "is_faculty": True,
                "status": "active",
                "created_at": "2026-01-28T10:00:00+00:00",
            }
        },
    )

    uid: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = None
    bio: str | None = None
    social_links: dict[str, str | None] | None = None
    is_admin: bool = False
    is_faculty: bool = False
    status: str | None = None
    created_at: str | None = None


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class AdminUserResponse(ProfileResponse):
    """Profile as listed in the admin console, with display defaults applied."""

    display_name: str = "Anonymous"
    status: str = UserStatus.ACTIVE.value


class AdminUserListResponse(BaseModel):
    """Schema for the admin user list."""

    data: list[AdminUserResponse]
    meta: dict[str, int] = Field(default_factory=dict)


class RoleUpdate(BaseModel):
    """Grant or revoke a role flag."""

    role: UserRole
    enabled: bool


class StatusUpdate(BaseModel):
    """Change a user's moderation status."""

    status: UserStatus
