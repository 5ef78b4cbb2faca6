"""Event service layer with business logic."""

from datetime import date
from typing import Callable, List, Optional

from core.exceptions import EventNotFoundError
from domain.entities.document import FieldFilter, OrderBy
from domain.entities.event import EVENTS_COLLECTION, Event
from domain.entities.profile import Profile
from domain.policies import AccessPolicy, default_policy
from domain.repositories.unit_of_work import IUnitOfWork


class EventService:
    """Service layer for campus events."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy

    async def list_events(
        self,
        organizer_id: Optional[str] = None,
        upcoming_only: bool = False,
        today: Optional[date] = None,
    ) -> List[Event]:
        """All events, soonest first."""
        filters = [FieldFilter("organizerId", organizer_id)] if organizer_id else []
        async with self._uow_factory() as uow:
            docs = await uow.documents.query(
                EVENTS_COLLECTION,
                filters=filters,
                order_by=[OrderBy("date")],
            )

        events = [Event.from_document(doc.id, doc.data) for doc in docs]
        if upcoming_only:
            cutoff = (today or date.today()).isoformat()
            events = [event for event in events if event.date[:10] >= cutoff]
        return events

    async def get(self, event_id: str) -> Event:
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(EVENTS_COLLECTION, event_id)
        if not doc:
            raise EventNotFoundError(event_id)
        return Event.from_document(doc.id, doc.data)

    async def create(
        self,
        actor: Profile,
        title: str,
        description: str,
        location: str,
        date: str,
        time: str,
        organizer: Optional[str] = None,
    ) -> Event:
        """Create an event organized by ``actor``."""
        self._policy.require_can_create(actor)
        event = Event(
            title=title,
            description=description,
            location=location,
            date=date,
            time=time,
            organizer=organizer or actor.author_name,
            organizer_id=actor.uid,
        )
        async with self._uow_factory() as uow:
            doc = await uow.documents.add(EVENTS_COLLECTION, event.to_document())
            await uow.commit()
        event.id = doc.id
        return event

    async def delete(self, actor: Profile, event_id: str) -> None:
        """Delete an event. Organizer or admin only."""
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(EVENTS_COLLECTION, event_id)
            if not doc:
                raise EventNotFoundError(event_id)

            self._policy.require_can_modify(actor, doc.get("organizerId", ""))
            await uow.documents.delete(EVENTS_COLLECTION, event_id)
            await uow.commit()
