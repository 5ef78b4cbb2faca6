"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import api.v1  # noqa: F401  # load routers before api.dependencies.auth, as main.py does (avoids circular import)
from domain.entities.profile import USERS_COLLECTION, Profile
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, shared by every connection of one engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user IDs for consistency
TEST_USER_ID = "3b0f5a4e-7d51-4c8e-9a43-1f2e6d7c8b90"
ADMIN_USER_ID = "a9d2c6e1-0b3f-4e57-8c21-6f4d9e8a7b12"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.edu",
        display_name="Test User",
    )


@pytest.fixture
def admin_user() -> TokenUser:
    return TokenUser(
        id=ADMIN_USER_ID,
        email="admin@example.edu",
        display_name="Admin User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_headers(auth_provider: JWTAuthProvider, admin_user: TokenUser) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth_provider.create_token(admin_user)}"}


async def seed_profile(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork], profile: Profile
) -> None:
    """Store a profile document directly."""
    async with uow_factory() as uow:
        await uow.documents.set(USERS_COLLECTION, profile.uid, profile.to_document())
        await uow.commit()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    admin_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Validates bearer tokens with the HS256 test provider
    - Points every page service at the test database
    - Seeds an admin profile for ``admin_user``
    - Uses an in-memory object store for lost & found images
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_admin_service,
        get_campus_service,
        get_discussion_service,
        get_event_service,
        get_lost_found_service,
        get_notice_service,
        get_profile_service,
    )
    from domain.services.admin_service import AdminService
    from domain.services.campus_service import CampusService
    from domain.services.discussion_service import DiscussionService
    from domain.services.event_service import EventService
    from domain.services.lost_found_service import LostFoundService
    from domain.services.notice_service import NoticeService
    from domain.services.profile_service import ProfileService
    from main import create_app

    await seed_profile(
        uow_factory,
        Profile(
            uid=admin_user.id,
            display_name=admin_user.display_name,
            email=admin_user.email,
            is_admin=True,
            created_at="2026-01-01T00:00:00+00:00",
        ),
    )

    storage = InMemoryObjectStorage()
    app = create_app()

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_event_service] = lambda: EventService(uow_factory)
    app.dependency_overrides[get_notice_service] = lambda: NoticeService(uow_factory)
    app.dependency_overrides[get_discussion_service] = lambda: DiscussionService(uow_factory)
    app.dependency_overrides[get_lost_found_service] = lambda: LostFoundService(
        uow_factory, storage=storage, max_image_bytes=1024
    )
    app.dependency_overrides[get_campus_service] = lambda: CampusService(uow_factory)
    app.dependency_overrides[get_admin_service] = lambda: AdminService(uow_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


class InMemoryObjectStorage:
    """Object store double that keeps uploads in a dict."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        self.objects[path] = (data, content_type)

    async def get_download_url(self, path: str) -> str:
        return f"https://storage.test/{path}"
