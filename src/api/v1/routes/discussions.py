"""Discussion forum API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile, CurrentUser
from api.v1.dependencies import get_discussion_service
from api.v1.schemas.discussion import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
    LikeDetailResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
)
from core.rate_limit import limiter
from domain.services.discussion_service import DiscussionService

router = APIRouter(prefix="/discussions", tags=["discussions"])


@router.get(
    "/posts",
    response_model=PostListResponse,
    summary="List discussion posts",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: DiscussionService = Depends(get_discussion_service),
    category: str | None = Query(None, description="Filter by category"),
) -> PostListResponse:
    """Posts, newest first."""
    posts = await service.list_posts(category)
    return PostListResponse(data=[PostResponse.model_validate(p) for p in posts])


@router.post(
    "/posts",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    profile: CurrentProfile,
    service: DiscussionService = Depends(get_discussion_service),
) -> PostDetailResponse:
    post = await service.create_post(
        profile, title=body.title, content=body.content, category=body.category
    )
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.get(
    "/posts/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: DiscussionService = Depends(get_discussion_service),
) -> PostDetailResponse:
    post = await service.get_post(post_id)
    return PostDetailResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        403: {"description": "Not the author or an admin"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: str,
    profile: CurrentProfile,
    service: DiscussionService = Depends(get_discussion_service),
) -> None:
    """Delete a post with all of its comments and likes."""
    await service.delete_post(profile, post_id)
    return None


@router.get(
    "/posts/{post_id}/comments",
    response_model=CommentListResponse,
    summary="List comments on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_comments(
    request: Request,
    post_id: str,
    user: CurrentUser,
    service: DiscussionService = Depends(get_discussion_service),
) -> CommentListResponse:
    """Comments, oldest first."""
    comments = await service.list_comments(post_id)
    return CommentListResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: str,
    body: CommentCreate,
    profile: CurrentProfile,
    service: DiscussionService = Depends(get_discussion_service),
) -> CommentDetailResponse:
    comment = await service.add_comment(profile, post_id, body.content)
    return CommentDetailResponse(data=CommentResponse.model_validate(comment))


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    responses={
        403: {"description": "Not the author or an admin"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    comment_id: str,
    profile: CurrentProfile,
    service: DiscussionService = Depends(get_discussion_service),
) -> None:
    await service.delete_comment(profile, comment_id)
    return None


@router.post(
    "/posts/{post_id}/likes",
    response_model=LikeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post already liked by this user"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: str,
    profile: CurrentProfile,
    service: DiscussionService = Depends(get_discussion_service),
) -> LikeDetailResponse:
    """Like a post. Each user can like a post once."""
    count = await service.like_post(profile, post_id)
    return LikeDetailResponse(data=LikeResponse(post_id=post_id, like_count=count))
