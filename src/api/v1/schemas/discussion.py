"""Pydantic schemas for the discussion forum API."""

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a discussion post."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    category: str = Field(..., min_length=1, max_length=50)


class PostResponse(BaseModel):
    """Schema for a discussion post."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    category: str
    author_id: str
    author_name: str
    author_photo_url: str | None = None
    comment_count: int = 0
    like_count: int = 0
    created_at: str


class PostListResponse(BaseModel):
    data: list[PostResponse]


class PostDetailResponse(BaseModel):
    data: PostResponse


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    """Schema for a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    content: str
    author_id: str
    author_name: str
    author_photo_url: str | None = None
    created_at: str


class CommentListResponse(BaseModel):
    data: list[CommentResponse]


class CommentDetailResponse(BaseModel):
    data: CommentResponse


class LikeResponse(BaseModel):
    """Like count after a successful like."""

    post_id: str
    like_count: int


class LikeDetailResponse(BaseModel):
    data: LikeResponse
