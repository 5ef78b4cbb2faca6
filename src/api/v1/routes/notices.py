"""Notice board API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile, CurrentUser
from api.v1.dependencies import get_notice_service
from api.v1.schemas.notice import (
    NoticeCreate,
    NoticeDetailResponse,
    NoticeListResponse,
    NoticeResponse,
)
from core.rate_limit import limiter
from domain.services.notice_service import NoticeService

router = APIRouter(prefix="/notices", tags=["notices"])


@router.get(
    "",
    response_model=NoticeListResponse,
    summary="List notices",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_notices(
    request: Request,
    user: CurrentUser,
    service: NoticeService = Depends(get_notice_service),
    category: str | None = Query(None, description="Filter by category"),
    include_expired: bool = Query(False, description="Include notices past their expiry date"),
) -> NoticeListResponse:
    """Notices, newest first."""
    notices = await service.list_notices(category=category, include_expired=include_expired)
    return NoticeListResponse(data=[NoticeResponse.model_validate(n) for n in notices])


@router.post(
    "",
    response_model=NoticeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a notice",
    responses={403: {"description": "Only faculty and admins can post notices"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_notice(
    request: Request,
    body: NoticeCreate,
    profile: CurrentProfile,
    service: NoticeService = Depends(get_notice_service),
) -> NoticeDetailResponse:
    notice = await service.create(
        profile,
        title=body.title,
        content=body.content,
        category=body.category,
        priority=body.priority,
        expiry_date=body.expiry_date.isoformat() if body.expiry_date else None,
    )
    return NoticeDetailResponse(data=NoticeResponse.model_validate(notice))


@router.delete(
    "/{notice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a notice",
    responses={
        403: {"description": "Not the author or an admin"},
        404: {"description": "Notice not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_notice(
    request: Request,
    notice_id: str,
    profile: CurrentProfile,
    service: NoticeService = Depends(get_notice_service),
) -> None:
    await service.delete(profile, notice_id)
    return None
