"""Profile API routes for bearer-token clients."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentProfile, CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.profile import (
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    profile: CurrentProfile,
) -> ProfileDetailResponse:
    """Profile of the token's identity, provisioned on first use."""
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.patch(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Update my profile",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    profile: CurrentProfile,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Edit display name, bio, photo and social links. Role flags are not editable here."""
    updated = await service.update_own(profile.uid, body.to_fields())
    return ProfileDetailResponse(data=ProfileResponse.model_validate(updated))


@router.get(
    "/{uid}",
    response_model=ProfileDetailResponse,
    summary="Get a user's profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    uid: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    profile = await service.get_by_uid(uid)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))
