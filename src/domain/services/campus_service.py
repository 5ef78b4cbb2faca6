"""Campus tour location directory service."""

from typing import Callable, List, Optional

import structlog

from core.exceptions import LocationNotFoundError
from domain.entities.campus_location import (
    DEMO_LOCATIONS,
    LOCATIONS_COLLECTION,
    CampusLocation,
)
from domain.entities.profile import Profile
from domain.policies import AccessPolicy, default_policy
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class CampusService:
    """Read-mostly directory of campus locations, curated by admins."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def list_locations(self, category: Optional[str] = None) -> List[CampusLocation]:
        """Stored locations, or the demo directory when none can be read."""
        try:
            async with self._uow_factory() as uow:
                docs = await uow.documents.query(LOCATIONS_COLLECTION)
            locations = [CampusLocation.from_document(doc.id, doc.data) for doc in docs]
        except Exception:
            logger.exception("campus_locations_fetch_failed")
            locations = []

        if not locations:
            locations = list(DEMO_LOCATIONS)

        if category:
            locations = [loc for loc in locations if loc.category == category]
        return locations

    async def create_location(self, actor: Profile, location: CampusLocation) -> CampusLocation:
        self._policy.require_admin(actor)
        async with self._uow_factory() as uow:
            doc = await uow.documents.add(LOCATIONS_COLLECTION, location.to_document())
            await uow.commit()
        location.id = doc.id
        return location

    async def delete_location(self, actor: Profile, location_id: str) -> None:
        self._policy.require_admin(actor)
        async with self._uow_factory() as uow:
            deleted = await uow.documents.delete(LOCATIONS_COLLECTION, location_id)
            if not deleted:
                raise LocationNotFoundError(location_id)
            await uow.commit()
