"""Discussion forum service layer."""

from typing import Callable, List, Optional

import structlog

from core.exceptions import AlreadyLikedError, CommentNotFoundError, PostNotFoundError
from domain.entities.document import FieldFilter, OrderBy
from domain.entities.forum import (
    COMMENTS_COLLECTION,
    LIKES_COLLECTION,
    POSTS_COLLECTION,
    ForumComment,
    ForumPost,
    PostLike,
)
from domain.entities.profile import Profile
from domain.policies import AccessPolicy, default_policy
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class DiscussionService:
    """Posts, comments and likes.

    ``commentCount`` and ``likeCount`` on a post are denormalized counters kept
    in step with the comment and like documents inside the same unit of work.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    # --- posts ---

    async def list_posts(self, category: Optional[str] = None) -> List[ForumPost]:
        """Posts newest first, optionally limited to one category."""
        filters = [FieldFilter("category", category)] if category else []
        async with self._uow_factory() as uow:
            docs = await uow.documents.query(
                POSTS_COLLECTION,
                filters=filters,
                order_by=[OrderBy("createdAt", descending=True)],
            )
        return [ForumPost.from_document(doc.id, doc.data) for doc in docs]

    async def get_post(self, post_id: str) -> ForumPost:
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(POSTS_COLLECTION, post_id)
        if not doc:
            raise PostNotFoundError(post_id)
        return ForumPost.from_document(doc.id, doc.data)

    async def create_post(
        self, actor: Profile, title: str, content: str, category: str
    ) -> ForumPost:
        self._policy.require_can_create(actor)
        post = ForumPost(
            title=title,
            content=content,
            category=category,
            author_id=actor.uid,
            author_name=actor.author_name,
            author_photo_url=actor.photo_url,
        )
        async with self._uow_factory() as uow:
            doc = await uow.documents.add(POSTS_COLLECTION, post.to_document())
            await uow.commit()
        post.id = doc.id
        return post

    async def delete_post(self, actor: Profile, post_id: str) -> None:
        """Delete a post together with its comments and likes."""
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(POSTS_COLLECTION, post_id)
            if not doc:
                raise PostNotFoundError(post_id)

            self._policy.require_can_modify(actor, doc.get("authorId", ""))
            await uow.documents.delete(POSTS_COLLECTION, post_id)
            by_post = [FieldFilter("postId", post_id)]
            comments = await uow.documents.delete_where(COMMENTS_COLLECTION, by_post)
            likes = await uow.documents.delete_where(LIKES_COLLECTION, by_post)
            await uow.commit()

        logger.info(
            "post_deleted",
            post_id=post_id,
            comments_deleted=comments,
            likes_deleted=likes,
        )

    # --- comments ---

    async def list_comments(self, post_id: str) -> List[ForumComment]:
        """Comments on a post, oldest first."""
        async with self._uow_factory() as uow:
            if not await uow.documents.get(POSTS_COLLECTION, post_id):
                raise PostNotFoundError(post_id)
            docs = await uow.documents.query(
                COMMENTS_COLLECTION,
                filters=[FieldFilter("postId", post_id)],
                order_by=[OrderBy("createdAt")],
            )
        return [ForumComment.from_document(doc.id, doc.data) for doc in docs]

    async def add_comment(
        self, actor: Profile, post_id: str, content: str
    ) -> ForumComment:
        self._policy.require_can_create(actor)
        comment = ForumComment(
            post_id=post_id,
            content=content,
            author_id=actor.uid,
            author_name=actor.author_name,
            author_photo_url=actor.photo_url,
        )
        async with self._uow_factory() as uow:
            if not await uow.documents.get(POSTS_COLLECTION, post_id):
                raise PostNotFoundError(post_id)

            doc = await uow.documents.add(COMMENTS_COLLECTION, comment.to_document())
            await uow.documents.increment(POSTS_COLLECTION, post_id, "commentCount", 1)
            await uow.commit()
        comment.id = doc.id
        return comment

    async def delete_comment(self, actor: Profile, comment_id: str) -> None:
        """Delete a comment. Its author or an admin only."""
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(COMMENTS_COLLECTION, comment_id)
            if not doc:
                raise CommentNotFoundError(comment_id)

            self._policy.require_can_modify(actor, doc.get("authorId", ""))
            await uow.documents.delete(COMMENTS_COLLECTION, comment_id)
            await uow.documents.increment(
                POSTS_COLLECTION, doc.get("postId", ""), "commentCount", -1, floor=0
            )
            await uow.commit()

    # --- likes ---

    async def like_post(self, actor: Profile, post_id: str) -> int:
        """Like a post once. Returns the post's new like count."""
        async with self._uow_factory() as uow:
            if not await uow.documents.get(POSTS_COLLECTION, post_id):
                raise PostNotFoundError(post_id)

            like = PostLike(post_id=post_id, user_id=actor.uid)
            created = await uow.documents.create(
                LIKES_COLLECTION, like.key, like.to_document()
            )
            if not created:
                raise AlreadyLikedError(post_id)

            count = await uow.documents.increment(POSTS_COLLECTION, post_id, "likeCount", 1)
            await uow.commit()
        return count or 0
