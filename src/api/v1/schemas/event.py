"""Pydantic schemas for Event API."""

from datetime import date as date_type

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    """Schema for creating an Event."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    location: str = Field(..., min_length=1, max_length=200)
    date: date_type
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    organizer: str | None = Field(None, max_length=100)


class EventResponse(BaseModel):
    """Schema for Event response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "5f0c6d0b2e4a4b7f9c1d3e5f7a9b1c3d",
                "title": "Robotics Club Demo Day",
                "description": "Come see what the club built this term.",
                "location": "Engineering Complex",
                "date": "2026-03-14",
                "time": "15:00",
                "organizer": "Robotics Club",
                "organizer_id": "d0c1f1a2-5b6e-4c1d-9a8b-7c6d5e4f3a2b",
                "created_at": "2026-01-28T10:00:00+00:00",
            }
        },
    )

    id: str
    title: str
    description: str
    location: str
    date: str
    time: str
    organizer: str
    organizer_id: str
    created_at: str


class EventListResponse(BaseModel):
    """Schema for list of Events."""

    data: list[EventResponse]


class EventDetailResponse(BaseModel):
    """Schema for single Event."""

    data: EventResponse
