"""Pydantic schemas for Notice API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.notice import NoticePriority


class NoticeCreate(BaseModel):
    """Schema for creating a Notice."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    category: str = Field(..., min_length=1, max_length=50)
    priority: NoticePriority = NoticePriority.MEDIUM
    expiry_date: date | None = None


class NoticeResponse(BaseModel):
    """Schema for Notice response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    category: str
    priority: NoticePriority
    expiry_date: str | None = None
    created_by: str
    created_by_id: str
    created_at: str


class NoticeListResponse(BaseModel):
    """Schema for list of Notices."""

    data: list[NoticeResponse]


class NoticeDetailResponse(BaseModel):
    """Schema for single Notice."""

    data: NoticeResponse
