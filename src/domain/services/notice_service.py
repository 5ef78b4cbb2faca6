"""Notice board service layer."""

from datetime import date
from typing import Callable, List, Optional

from core.exceptions import NoticeNotFoundError
from domain.entities.document import FieldFilter, OrderBy
from domain.entities.notice import NOTICES_COLLECTION, Notice, NoticePriority
from domain.entities.profile import Profile
from domain.policies import AccessPolicy, default_policy
from domain.repositories.unit_of_work import IUnitOfWork


class NoticeService:
    """Service layer for notices. Only faculty and admins may post."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def list_notices(
        self,
        category: Optional[str] = None,
        include_expired: bool = False,
        today: Optional[date] = None,
    ) -> List[Notice]:
        """Notices, newest first. Expired notices are hidden by default."""
        filters = [FieldFilter("category", category)] if category else []
        async with self._uow_factory() as uow:
            docs = await uow.documents.query(
                NOTICES_COLLECTION,
                filters=filters,
                order_by=[OrderBy("createdAt", descending=True)],
            )

        notices = [Notice.from_document(doc.id, doc.data) for doc in docs]
        if not include_expired:
            today = today or date.today()
            notices = [notice for notice in notices if not notice.is_expired(today)]
        return notices

    async def create(
        self,
        actor: Profile,
        title: str,
        content: str,
        category: str,
        priority: NoticePriority,
        expiry_date: Optional[str] = None,
    ) -> Notice:
        self._policy.require_can_post_notice(actor)
        notice = Notice(
            title=title,
            content=content,
            category=category,
            priority=priority,
            expiry_date=expiry_date,
            created_by=actor.author_name,
            created_by_id=actor.uid,
        )
        async with self._uow_factory() as uow:
            doc = await uow.documents.add(NOTICES_COLLECTION, notice.to_document())
            await uow.commit()
        notice.id = doc.id
        return notice

    async def delete(self, actor: Profile, notice_id: str) -> None:
        """Delete a notice. Its author or an admin only."""
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(NOTICES_COLLECTION, notice_id)
            if not doc:
                raise NoticeNotFoundError(notice_id)

            self._policy.require_can_modify(actor, doc.get("createdById", ""))
            await uow.documents.delete(NOTICES_COLLECTION, notice_id)
            await uow.commit()
