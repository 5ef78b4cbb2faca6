"""Campus tour API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile
from api.v1.dependencies import get_campus_service
from api.v1.schemas.campus import (
    LocationCreate,
    LocationDetailResponse,
    LocationListResponse,
    LocationResponse,
)
from core.rate_limit import limiter
from domain.entities.campus_location import LocationCategory
from domain.services.campus_service import CampusService

router = APIRouter(prefix="/campus", tags=["campus"])


@router.get(
    "/locations",
    response_model=LocationListResponse,
    summary="List campus locations",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def list_locations(
    request: Request,
    service: CampusService = Depends(get_campus_service),
    category: LocationCategory | None = Query(None, description="Filter by category"),
) -> LocationListResponse:
    """
    Campus tour directory. Public, no token required.

    Falls back to the built-in demo directory when no locations are stored.
    """
    locations = await service.list_locations(category.value if category else None)
    return LocationListResponse(
        data=[LocationResponse.model_validate(loc) for loc in locations]
    )


@router.post(
    "/locations",
    response_model=LocationDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a campus location",
    responses={403: {"description": "Admin privileges required"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_location(
    request: Request,
    body: LocationCreate,
    profile: CurrentProfile,
    service: CampusService = Depends(get_campus_service),
) -> LocationDetailResponse:
    location = await service.create_location(profile, body.to_entity())
    return LocationDetailResponse(data=LocationResponse.model_validate(location))


@router.delete(
    "/locations/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a campus location",
    responses={
        403: {"description": "Admin privileges required"},
        404: {"description": "Location not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_location(
    request: Request,
    location_id: str,
    profile: CurrentProfile,
    service: CampusService = Depends(get_campus_service),
) -> None:
    await service.delete_location(profile, location_id)
    return None
