"""Unit tests for LostFoundService."""

from unittest.mock import AsyncMock

import pytest

from core.exceptions import (
    AuthorizationError,
    InvalidUploadError,
    LostFoundItemNotFoundError,
    StorageError,
)
from domain.entities.lost_found import LOST_FOUND_COLLECTION, ImageUpload, ItemCategory
from domain.entities.profile import Profile
from domain.services.lost_found_service import LostFoundService, image_path
from tests.unit.conftest import FakeUnitOfWork, make_doc


@pytest.fixture
def storage() -> AsyncMock:
    storage = AsyncMock()
    storage.get_download_url.side_effect = lambda path: f"https://cdn.test/{path}"
    return storage


@pytest.fixture
def service(uow: FakeUnitOfWork, storage: AsyncMock) -> LostFoundService:
    return LostFoundService(lambda: uow, storage=storage, max_image_bytes=100)


async def _create(service: LostFoundService, actor: Profile, image: ImageUpload | None = None):
    return await service.create(
        actor,
        title="Blue umbrella",
        description="Left in lecture hall B",
        location="Science Building",
        category=ItemCategory.FOUND,
        date="2026-02-03",
        contact_info="sam@example.edu",
        image=image,
    )


class TestImagePath:
    def test_uses_millisecond_prefix(self):
        assert image_path("photo.jpg", now_ms=1700000000123) == "lostFound/1700000000123_photo.jpg"

    def test_strips_path_separators(self):
        assert image_path("../../etc/passwd", now_ms=1) == "lostFound/1_.._.._etc_passwd"


class TestCreate:
    @pytest.mark.asyncio
    async def test_without_image(
        self, service: LostFoundService, uow: FakeUnitOfWork, storage: AsyncMock, member: Profile
    ):
        uow.documents.add.return_value = make_doc(LOST_FOUND_COLLECTION, "i1")

        item = await _create(service, member)

        assert item.id == "i1"
        assert item.image_url is None
        storage.upload.assert_not_called()
        _, data = uow.documents.add.call_args.args
        assert "imageUrl" not in data
        assert data["category"] == "found"

    @pytest.mark.asyncio
    async def test_uploads_image_before_writing(
        self, service: LostFoundService, uow: FakeUnitOfWork, storage: AsyncMock, member: Profile
    ):
        uow.documents.add.return_value = make_doc(LOST_FOUND_COLLECTION, "i1")

        item = await _create(service, member, ImageUpload("umbrella.png", "image/png", b"\x89PNG"))

        path, data, content_type = storage.upload.call_args.args
        assert path.startswith("lostFound/")
        assert path.endswith("_umbrella.png")
        assert data == b"\x89PNG"
        assert content_type == "image/png"
        assert item.image_url == f"https://cdn.test/{path}"

    @pytest.mark.asyncio
    async def test_rejects_non_images(
        self, service: LostFoundService, uow: FakeUnitOfWork, storage: AsyncMock, member: Profile
    ):
        with pytest.raises(InvalidUploadError):
            await _create(service, member, ImageUpload("notes.pdf", "application/pdf", b"%PDF"))
        storage.upload.assert_not_called()
        uow.documents.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_oversized_images(
        self, service: LostFoundService, storage: AsyncMock, member: Profile
    ):
        with pytest.raises(InvalidUploadError):
            await _create(service, member, ImageUpload("big.jpg", "image/jpeg", b"x" * 101))
        storage.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_failure_writes_nothing(
        self, service: LostFoundService, uow: FakeUnitOfWork, storage: AsyncMock, member: Profile
    ):
        storage.upload.side_effect = StorageError("Upload failed with HTTP 500")

        with pytest.raises(StorageError):
            await _create(service, member, ImageUpload("a.png", "image/png", b"png"))
        uow.documents.add.assert_not_called()


class TestListAndDelete:
    @pytest.mark.asyncio
    async def test_list_filters_by_category(self, service: LostFoundService, uow: FakeUnitOfWork):
        uow.documents.query.return_value = [
            make_doc(
                LOST_FOUND_COLLECTION,
                "i1",
                title="Keys",
                category="lost",
                authorId="u",
                createdAt="2026-01-01T00:00:00+00:00",
            )
        ]

        items = await service.list_items(ItemCategory.LOST)

        assert items[0].category == ItemCategory.LOST
        assert items[0].author_name == "Anonymous"
        filters = uow.documents.query.call_args.kwargs["filters"]
        assert filters[0].value == "lost"

    @pytest.mark.asyncio
    async def test_delete_by_non_owner_denied(
        self, service: LostFoundService, uow: FakeUnitOfWork, other_member: Profile
    ):
        uow.documents.get.return_value = make_doc(LOST_FOUND_COLLECTION, "i1", authorId="u-member")

        with pytest.raises(AuthorizationError):
            await service.delete(other_member, "i1")

    @pytest.mark.asyncio
    async def test_delete_missing(
        self, service: LostFoundService, uow: FakeUnitOfWork, member: Profile
    ):
        uow.documents.get.return_value = None

        with pytest.raises(LostFoundItemNotFoundError):
            await service.delete(member, "missing")
