"""Pydantic schemas for the admin console API."""

from pydantic import BaseModel, ConfigDict


class DashboardStatsResponse(BaseModel):
    """Collection sizes shown on the admin dashboard."""

    model_config = ConfigDict(from_attributes=True)

    total_users: int
    total_posts: int
    total_events: int
    total_lost_found: int
    total_notices: int


class DashboardStatsDetailResponse(BaseModel):
    data: DashboardStatsResponse
