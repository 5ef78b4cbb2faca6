"""Pydantic schemas for Lost & Found API."""

from pydantic import BaseModel, ConfigDict

from domain.entities.lost_found import ItemCategory


class LostFoundItemResponse(BaseModel):
    """Schema for a lost or found item report."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    location: str
    category: ItemCategory
    date: str
    contact_info: str
    image_url: str | None = None
    author_id: str
    author_name: str
    created_at: str


class LostFoundListResponse(BaseModel):
    """Schema for list of reports."""

    data: list[LostFoundItemResponse]


class LostFoundDetailResponse(BaseModel):
    """Schema for single report."""

    data: LostFoundItemResponse
