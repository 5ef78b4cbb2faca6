"""Event API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile, CurrentUser
from api.v1.dependencies import get_event_service
from api.v1.schemas.event import (
    EventCreate,
    EventDetailResponse,
    EventListResponse,
    EventResponse,
)
from core.rate_limit import limiter
from domain.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get(
    "",
    response_model=EventListResponse,
    summary="List events",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_events(
    request: Request,
    user: CurrentUser,
    service: EventService = Depends(get_event_service),
    organizer_id: str | None = Query(None, description="Only events by this organizer"),
    upcoming: bool = Query(False, description="Hide events dated before today"),
) -> EventListResponse:
    """All events, soonest first."""
    events = await service.list_events(organizer_id=organizer_id, upcoming_only=upcoming)
    return EventListResponse(data=[EventResponse.model_validate(e) for e in events])


@router.get(
    "/{event_id}",
    response_model=EventDetailResponse,
    summary="Get an event",
    responses={404: {"description": "Event not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_event(
    request: Request,
    event_id: str,
    user: CurrentUser,
    service: EventService = Depends(get_event_service),
) -> EventDetailResponse:
    event = await service.get(event_id)
    return EventDetailResponse(data=EventResponse.model_validate(event))


@router.post(
    "",
    response_model=EventDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
    responses={403: {"description": "Account is banned"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_event(
    request: Request,
    body: EventCreate,
    profile: CurrentProfile,
    service: EventService = Depends(get_event_service),
) -> EventDetailResponse:
    """Create an event. The organizer defaults to the caller's display name."""
    event = await service.create(
        profile,
        title=body.title,
        description=body.description,
        location=body.location,
        date=body.date.isoformat(),
        time=body.time,
        organizer=body.organizer,
    )
    return EventDetailResponse(data=EventResponse.model_validate(event))


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an event",
    responses={
        403: {"description": "Not the organizer or an admin"},
        404: {"description": "Event not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_event(
    request: Request,
    event_id: str,
    profile: CurrentProfile,
    service: EventService = Depends(get_event_service),
) -> None:
    await service.delete(profile, event_id)
    return None
