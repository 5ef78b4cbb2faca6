"""Pydantic schemas for the browser session API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.profile import ProfileResponse
from domain.entities.session import SessionPhase, ToastVariant


class IdentityResponse(BaseModel):
    """Identity as reported by the identity provider."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = None


class ToastResponse(BaseModel):
    """A pending notification for the browser to display."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    description: str
    variant: ToastVariant
    created_at: datetime


class SessionResponse(BaseModel):
    """Current state of a browser session plus notifications raised since the last call."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "phase": "profile_ready",
                "loading": False,
                "identity": {
                    "id": "d0c1f1a2-5b6e-4c1d-9a8b-7c6d5e4f3a2b",
                    "display_name": "Ada Lovelace",
                    "email": "ada@example.edu",
                    "photo_url": None,
                },
                "profile": {"uid": "d0c1f1a2-5b6e-4c1d-9a8b-7c6d5e4f3a2b"},
                "notifications": [
                    {
                        "title": "Welcome!",
                        "description": "You have successfully signed in.",
                        "variant": "default",
                        "created_at": "2026-01-28T10:00:00",
                    }
                ],
            }
        },
    )

    phase: SessionPhase
    loading: bool
    identity: IdentityResponse | None = None
    profile: ProfileResponse | None = None
    notifications: list[ToastResponse] = Field(default_factory=list)


class SessionDetailResponse(BaseModel):
    """Schema for the session envelope."""

    data: SessionResponse


class SignInRequest(BaseModel):
    """Google ID token obtained by the browser's sign-in popup."""

    credential: str = Field(..., min_length=1)
