"""Profile store adapter and the profile bootstrap."""

from typing import Any, Callable

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import USERS_COLLECTION, Identity, Profile
from domain.policies import AccessPolicy, default_policy
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Reads and writes the single profile document kept per identity.

    A pass-through to the document store: no caching and no retries. Store
    errors propagate unchanged to the caller.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def get(self, uid: str) -> Profile | None:
        """Fetch a profile; a missing document is ``None``."""
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(USERS_COLLECTION, uid)
            return Profile.from_document(doc.data) if doc else None

    async def get_by_uid(self, uid: str) -> Profile:
        profile = await self.get(uid)
        if profile is None:
            raise ProfileNotFoundError(uid)
        return profile

    async def create(self, profile: Profile) -> Profile:
        """Create a profile unless one already exists for the uid.

        When another writer got there first, the stored profile is returned
        instead of ``profile``.
        """
        async with self._uow_factory() as uow:
            created = await uow.documents.create(
                USERS_COLLECTION, profile.uid, profile.to_document()
            )
            await uow.commit()
            if created:
                logger.info("profile_created", uid=profile.uid)
                return profile

            doc = await uow.documents.get(USERS_COLLECTION, profile.uid)

        logger.info("profile_create_conflict", uid=profile.uid)
        if doc is None:
            raise ProfileNotFoundError(profile.uid)
        return Profile.from_document(doc.data)

    async def merge_update(self, uid: str, fields: dict[str, Any]) -> Profile:
        """Merge ``fields`` into the stored profile, leaving other fields untouched."""
        fields = {k: v for k, v in fields.items() if k != "uid"}
        async with self._uow_factory() as uow:
            doc = await uow.documents.set(
                USERS_COLLECTION, uid, {"uid": uid, **fields}, merge=True
            )
            await uow.commit()
            return Profile.from_document(doc.data)

    async def resolve(self, identity: Identity) -> Profile:
        """Return the identity's profile, provisioning it on first sign-in.

        A stored profile is returned verbatim and is never re-synced from the
        identity.
        """
        existing = await self.get(identity.id)
        if existing is not None:
            return existing
        return await self.create(Profile.provision(identity))

    async def update_own(self, uid: str, partial: dict[str, Any]) -> Profile:
        """Self-service edit restricted to the user-editable fields."""
        allowed = self._policy.self_editable(partial)
        if not allowed:
            return await self.get_by_uid(uid)
        return await self.merge_update(uid, allowed)
