"""Lost & Found API routes."""

from datetime import date as date_type
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from api.dependencies.auth import CurrentProfile, CurrentUser
from api.v1.dependencies import get_lost_found_service
from api.v1.schemas.lost_found import (
    LostFoundDetailResponse,
    LostFoundItemResponse,
    LostFoundListResponse,
)
from core.rate_limit import limiter
from domain.entities.lost_found import ImageUpload, ItemCategory
from domain.services.lost_found_service import LostFoundService

router = APIRouter(prefix="/lost-found", tags=["lost-found"])


@router.get(
    "",
    response_model=LostFoundListResponse,
    summary="List lost & found reports",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_items(
    request: Request,
    user: CurrentUser,
    service: LostFoundService = Depends(get_lost_found_service),
    category: ItemCategory | None = Query(None, description="lost or found"),
) -> LostFoundListResponse:
    """Reports, newest first."""
    items = await service.list_items(category)
    return LostFoundListResponse(
        data=[LostFoundItemResponse.model_validate(item) for item in items]
    )


@router.post(
    "",
    response_model=LostFoundDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a lost or found item",
    responses={
        400: {"description": "Attachment is not an image or is too large"},
        502: {"description": "Image upload failed"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_item(
    request: Request,
    profile: CurrentProfile,
    title: Annotated[str, Form(min_length=1, max_length=200)],
    description: Annotated[str, Form(min_length=1, max_length=5000)],
    location: Annotated[str, Form(min_length=1, max_length=200)],
    category: Annotated[ItemCategory, Form()],
    date: Annotated[date_type, Form()],
    contact_info: Annotated[str, Form(min_length=1, max_length=200)],
    image: Annotated[UploadFile | None, File()] = None,
    service: LostFoundService = Depends(get_lost_found_service),
) -> LostFoundDetailResponse:
    """Create a report from a multipart form. The optional image is stored first."""
    upload = None
    if image is not None and image.filename:
        upload = ImageUpload(
            filename=image.filename,
            content_type=image.content_type or "application/octet-stream",
            data=await image.read(),
        )

    item = await service.create(
        profile,
        title=title,
        description=description,
        location=location,
        category=category,
        date=date.isoformat(),
        contact_info=contact_info,
        image=upload,
    )
    return LostFoundDetailResponse(data=LostFoundItemResponse.model_validate(item))


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a report",
    responses={
        403: {"description": "Not the author or an admin"},
        404: {"description": "Item not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_item(
    request: Request,
    item_id: str,
    profile: CurrentProfile,
    service: LostFoundService = Depends(get_lost_found_service),
) -> None:
    await service.delete(profile, item_id)
    return None
