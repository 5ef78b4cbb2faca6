"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.admin_service import AdminService
from domain.services.campus_service import CampusService
from domain.services.discussion_service import DiscussionService
from domain.services.event_service import EventService
from domain.services.lost_found_service import LostFoundService
from domain.services.notice_service import NoticeService
from domain.services.profile_service import ProfileService
from domain.services.session_monitor import SessionMonitor
from infrastructure.auth.supabase_identity import (
    SupabaseAuthClient,
    SupabaseIdentityProvider,
)
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.notifications.toast_queue import ToastQueue
from infrastructure.sessions.registry import SessionRegistry
from infrastructure.storage.supabase_storage import SupabaseObjectStorage


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_event_service() -> EventService:
    """Get Event service instance."""
    return EventService(get_uow_factory())


@lru_cache
def get_notice_service() -> NoticeService:
    """Get Notice service instance."""
    return NoticeService(get_uow_factory())


@lru_cache
def get_discussion_service() -> DiscussionService:
    """Get Discussion service instance."""
    return DiscussionService(get_uow_factory())


@lru_cache
def get_object_storage() -> SupabaseObjectStorage:
    """Get object storage client."""
    return SupabaseObjectStorage()


@lru_cache
def get_lost_found_service() -> LostFoundService:
    """Get Lost & Found service instance."""
    return LostFoundService(
        get_uow_factory(),
        storage=get_object_storage(),
        max_image_bytes=settings.max_image_bytes,
    )


@lru_cache
def get_campus_service() -> CampusService:
    """Get Campus service instance."""
    return CampusService(get_uow_factory())


@lru_cache
def get_admin_service() -> AdminService:
    """Get Admin service instance."""
    return AdminService(get_uow_factory())


def build_session_monitor(toasts: ToastQueue) -> SessionMonitor:
    """Monitor for a new browser session with its own identity provider state."""
    return SessionMonitor(
        identity_provider=SupabaseIdentityProvider(SupabaseAuthClient()),
        profiles=get_profile_service(),
        notifier=toasts,
        rollback_on_failure=settings.profile_update_rollback,
    )


@lru_cache
def get_session_registry() -> SessionRegistry:
    """Get the process-wide browser session registry."""
    return SessionRegistry(
        build_session_monitor,
        idle_ttl_seconds=settings.session_idle_ttl_seconds,
        toast_limit=settings.session_notification_limit,
    )
