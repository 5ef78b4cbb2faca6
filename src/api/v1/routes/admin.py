"""Admin console API routes. Every endpoint requires an admin profile."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentProfile
from api.v1.dependencies import get_admin_service
from api.v1.schemas.admin import DashboardStatsDetailResponse, DashboardStatsResponse
from api.v1.schemas.profile import (
    AdminUserListResponse,
    AdminUserResponse,
    ProfileDetailResponse,
    ProfileResponse,
    RoleUpdate,
    StatusUpdate,
)
from core.rate_limit import limiter
from domain.entities.profile import Profile, UserStatus
from domain.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])

_ADMIN_ONLY = {403: {"description": "Admin privileges required"}}


def _build_admin_user(profile: Profile) -> AdminUserResponse:
    return AdminUserResponse(
        uid=profile.uid,
        display_name=profile.display_name or "Anonymous",
        email=profile.email,
        photo_url=profile.photo_url,
        bio=profile.bio,
        social_links=profile.social_links,
        is_admin=profile.is_admin,
        is_faculty=profile.is_faculty,
        status=profile.status or UserStatus.ACTIVE.value,
        created_at=profile.created_at,
    )


@router.get(
    "/users",
    response_model=AdminUserListResponse,
    summary="List users",
    responses=_ADMIN_ONLY,
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    profile: CurrentProfile,
    service: AdminService = Depends(get_admin_service),
) -> AdminUserListResponse:
    """All users ordered by display name."""
    users = await service.list_users(profile)
    data = [_build_admin_user(user) for user in users]
    return AdminUserListResponse(
        data=data,
        meta={
            "total": len(data),
            "admins": sum(1 for user in data if user.is_admin),
            "faculty": sum(1 for user in data if user.is_faculty),
        },
    )


@router.patch(
    "/users/{uid}/roles",
    response_model=ProfileDetailResponse,
    summary="Grant or revoke a role",
    responses={**_ADMIN_ONLY, 404: {"description": "User not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def set_user_role(
    request: Request,
    uid: str,
    body: RoleUpdate,
    profile: CurrentProfile,
    service: AdminService = Depends(get_admin_service),
) -> ProfileDetailResponse:
    updated = await service.set_role(profile, uid, body.role, body.enabled)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(updated))


@router.patch(
    "/users/{uid}/status",
    response_model=ProfileDetailResponse,
    summary="Set a user's moderation status",
    responses={**_ADMIN_ONLY, 404: {"description": "User not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def set_user_status(
    request: Request,
    uid: str,
    body: StatusUpdate,
    profile: CurrentProfile,
    service: AdminService = Depends(get_admin_service),
) -> ProfileDetailResponse:
    updated = await service.set_status(profile, uid, body.status)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(updated))


@router.get(
    "/stats",
    response_model=DashboardStatsDetailResponse,
    summary="Dashboard statistics",
    responses=_ADMIN_ONLY,
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_stats(
    request: Request,
    profile: CurrentProfile,
    service: AdminService = Depends(get_admin_service),
) -> DashboardStatsDetailResponse:
    stats = await service.get_stats(profile)
    return DashboardStatsDetailResponse(data=DashboardStatsResponse.model_validate(stats))
