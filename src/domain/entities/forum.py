"""Discussion forum domain entities."""

from dataclasses import dataclass, field
from typing import Any

from domain.entities.document import utc_now_iso

POSTS_COLLECTION = "forumPosts"
COMMENTS_COLLECTION = "forumComments"
LIKES_COLLECTION = "postLikes"


@dataclass
class ForumPost:
    """Domain entity for a discussion post."""

    title: str
    content: str
    category: str
    author_id: str
    author_name: str = "Anonymous"
    author_photo_url: str | None = None
    comment_count: int = 0
    like_count: int = 0
    id: str = ""
    created_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "ForumPost":
        return cls(
            id=id,
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=data.get("category", ""),
            author_id=data.get("authorId", ""),
            author_name=data.get("authorName") or "Anonymous",
            author_photo_url=data.get("authorPhotoUrl"),
            comment_count=int(data.get("commentCount") or 0),
            like_count=int(data.get("likeCount") or 0),
            created_at=data.get("createdAt", ""),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "authorPhotoUrl": self.author_photo_url,
            "commentCount": self.comment_count,
            "likeCount": self.like_count,
            "createdAt": self.created_at,
        }


@dataclass
class ForumComment:
    """Domain entity for a comment on a discussion post."""

    post_id: str
    content: str
    author_id: str
    author_name: str = "Anonymous"
    author_photo_url: str | None = None
    id: str = ""
    created_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_document(cls, id: str, data: dict[str, Any]) -> "ForumComment":
        return cls(
            id=id,
            post_id=data.get("postId", ""),
            content=data.get("content", ""),
            author_id=data.get("authorId", ""),
            author_name=data.get("authorName") or "Anonymous",
            author_photo_url=data.get("authorPhotoUrl"),
            created_at=data.get("createdAt", ""),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "postId": self.post_id,
            "content": self.content,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "authorPhotoUrl": self.author_photo_url,
            "createdAt": self.created_at,
        }


@dataclass
class PostLike:
    """A single user's like on a post."""

    post_id: str
    user_id: str
    id: str = ""
    created_at: str = field(default_factory=utc_now_iso)

    @property
    def key(self) -> str:
        """Document key; one like per (post, user) pair."""
        return f"{self.post_id}_{self.user_id}"

    def to_document(self) -> dict[str, Any]:
        return {
            "postId": self.post_id,
            "userId": self.user_id,
            "createdAt": self.created_at,
        }
