"""Admin console service layer."""

from dataclasses import dataclass
from typing import Callable, List

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.document import OrderBy
from domain.entities.event import EVENTS_COLLECTION
from domain.entities.forum import POSTS_COLLECTION
from domain.entities.lost_found import LOST_FOUND_COLLECTION
from domain.entities.notice import NOTICES_COLLECTION
from domain.entities.profile import USERS_COLLECTION, Profile, UserRole, UserStatus
from domain.policies import AccessPolicy, default_policy
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """Read-only value object: collection sizes shown on the admin dashboard."""

    total_users: int
    total_posts: int
    total_events: int
    total_lost_found: int
    total_notices: int


class AdminService:
    """User management and dashboard figures. Every operation requires an admin."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def list_users(self, actor: Profile) -> List[Profile]:
        """All profiles ordered by display name."""
        self._policy.require_admin(actor)
        async with self._uow_factory() as uow:
            docs = await uow.documents.query(
                USERS_COLLECTION, order_by=[OrderBy("displayName")]
            )
        return [Profile.from_document({"uid": doc.id, **doc.data}) for doc in docs]

    async def set_role(
        self, actor: Profile, uid: str, role: UserRole, enabled: bool
    ) -> Profile:
        """Grant or revoke the admin or faculty flag on a profile."""
        self._policy.require_admin(actor)
        profile = await self._update(uid, {role.field_name: enabled})
        logger.info(
            "user_role_updated",
            actor_uid=actor.uid,
            uid=uid,
            role=role.value,
            enabled=enabled,
        )
        return profile

    async def set_status(self, actor: Profile, uid: str, status: UserStatus) -> Profile:
        self._policy.require_admin(actor)
        profile = await self._update(uid, {"status": status.value})
        logger.info(
            "user_status_updated", actor_uid=actor.uid, uid=uid, status=status.value
        )
        return profile

    async def get_stats(self, actor: Profile) -> DashboardStats:
        self._policy.require_admin(actor)
        async with self._uow_factory() as uow:
            return DashboardStats(
                total_users=await uow.documents.count(USERS_COLLECTION),
                total_posts=await uow.documents.count(POSTS_COLLECTION),
                total_events=await uow.documents.count(EVENTS_COLLECTION),
                total_lost_found=await uow.documents.count(LOST_FOUND_COLLECTION),
                total_notices=await uow.documents.count(NOTICES_COLLECTION),
            )

    async def _update(self, uid: str, fields: dict) -> Profile:
        async with self._uow_factory() as uow:
            doc = await uow.documents.update(USERS_COLLECTION, uid, fields)
            if not doc:
                raise ProfileNotFoundError(uid)
            await uow.commit()
        return Profile.from_document({"uid": doc.id, **doc.data})
